from tiktik.config import Settings


def test_plain_urls_get_async_drivers():
    assert Settings(_env_file=None, database_url="sqlite:///./x.db").database_url == "sqlite+aiosqlite:///./x.db"
    assert (
        Settings(_env_file=None, database_url="postgresql://u:p@db:5432/tiktik").database_url
        == "postgresql+asyncpg://u:p@db:5432/tiktik"
    )
    assert Settings(_env_file=None, database_url="sqlite+aiosqlite:///./y.db").database_url == "sqlite+aiosqlite:///./y.db"


def test_env_file_url_is_normalized(tmp_path, monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("DATABASE_URL=sqlite:///./from_env.db\n")
    assert Settings(_env_file=str(env_file)).database_url == "sqlite+aiosqlite:///./from_env.db"


def test_environment_url_is_normalized(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db/tiktik")
    assert Settings(_env_file=None).database_url == "postgresql+asyncpg://u:p@db/tiktik"
