import os
import tempfile

# Settings are read at import time, so the environment goes first
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ADMIN_EMAILS"] = "admin@tiktik.test"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="tiktik-uploads-")
os.environ["AUTO_CREATE_TABLES"] = "false"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402

from tiktik.db.repositories import user_repo, video_repo  # noqa: E402
from tiktik.db.session import build_engine, get_db, init_db  # noqa: E402
from tiktik.main import app  # noqa: E402
from tiktik.models.video import VideoStatus  # noqa: E402
from tiktik.services.auth_service import hash_password  # noqa: E402


@pytest.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'tiktik.db'}")
    await init_db(bind=engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
async def client(session_maker):
    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Register through the API; returns (user, auth headers)."""

    async def _register(email: str, name: str = "Tester", password: str = "secret123"):
        res = await client.post("/auth/register", json={"email": email, "password": password, "name": name})
        assert res.status_code == 200, res.text
        data = res.json()
        return data["user"], {"Authorization": f"Bearer {data['token']}"}

    return _register


@pytest.fixture
def make_user(session):
    async def _make_user(email: str, name: str = "Tester"):
        user = await user_repo.create_user(session, email=email, password_hash=hash_password("secret123"), name=name)
        await session.commit()
        return user

    return _make_user


@pytest.fixture
def make_video(session):
    async def _make_video(user_id: int, title: str = "Clip", status: VideoStatus = VideoStatus.live, **kwargs):
        video = await video_repo.create_video(
            session, user_id=user_id, title=title, video_url="https://cdn.example.com/clip.mp4", status=status, **kwargs
        )
        await session.commit()
        return video

    return _make_video
