from tiktik.db.session import get_db, init_db, async_session_maker
from tiktik.db.base import Base

__all__ = ["get_db", "init_db", "async_session_maker", "Base"]
