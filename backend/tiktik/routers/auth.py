import logging
from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tiktik.config import settings
from tiktik.db.session import get_db
from tiktik.db.repositories import user_repo
from tiktik.dependencies import get_current_user
from tiktik.errors import AuthError, ConflictError
from tiktik.models.user import User
from tiktik.schemas.auth import AuthResponse, AuthUser, LoginRequest, MeResponse, RegisterRequest
from tiktik.services.auth_service import (
    create_access_token,
    default_avatar_url,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _auth_response(user: User) -> AuthResponse:
    token = create_access_token(data={"sub": str(user.id), "email": user.email})
    return AuthResponse(user=AuthUser.model_validate(user), token=token)


@router.post("/register", response_model=AuthResponse)
async def register(body: RegisterRequest, db: AsyncSession = Depends(get_db)):
    email = body.email.strip().lower()
    if await user_repo.get_user_by_email(db, email):
        raise ConflictError("User already exists")
    try:
        user = await user_repo.create_user(
            db,
            email=email,
            password_hash=hash_password(body.password),
            name=body.name,
            avatar=default_avatar_url(body.name),
            is_admin=email in settings.admin_email_set,
        )
    except IntegrityError:
        # Registered concurrently under the same email
        await db.rollback()
        raise ConflictError("User already exists")
    await db.commit()
    logger.info(f"Registered user {user.id} ({user.email}){' as admin' if user.is_admin else ''}")
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    user = await user_repo.get_user_by_email(db, body.email.strip().lower())
    if not user or not verify_password(body.password, user.password_hash):
        raise AuthError("Invalid credentials")
    return _auth_response(user)


@router.get("/me", response_model=MeResponse)
async def me(current_user: User = Depends(get_current_user)):
    return MeResponse(user=AuthUser.model_validate(current_user))
