from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from tiktik.db.session import get_db
from tiktik.db.repositories.user_repo import get_user_by_id
from tiktik.errors import AuthError, PermissionDeniedError
from tiktik.services.auth_service import decode_access_token
from tiktik.models.user import User

security = HTTPBearer(auto_error=False)


async def get_current_user(
    db: AsyncSession = Depends(get_db),
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> User:
    if not credentials or not credentials.credentials:
        raise AuthError("No token provided")
    payload = decode_access_token(credentials.credentials)
    if not payload or "sub" not in payload:
        raise AuthError("Invalid or expired token")
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise AuthError("Invalid token")
    user = await get_user_by_id(db, user_id)
    if not user:
        raise AuthError("User not found")
    return user


async def get_admin_user(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_admin:
        raise PermissionDeniedError("Admin access required")
    return current_user
