import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from tiktik.config import settings
from tiktik.db.session import init_db
from tiktik.errors import AppError, StorageError
from tiktik.middleware import LoggingMiddleware
from tiktik.routers import (
    admin,
    auth,
    comments,
    library,
    notifications,
    playlists,
    reports,
    subscriptions,
    users,
    videos,
)

log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
logging.basicConfig(
    level=log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)

logging.getLogger("uvicorn.access").setLevel(logging.INFO)
logging.getLogger("uvicorn").setLevel(logging.INFO)

# SQL echo only when LOG_SQL is set
if settings.log_sql:
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
else:
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

root_path = settings.root_path
app = FastAPI(title="TikTik API", version="0.1.0", root_path=root_path)

# Outermost, so every request is logged
app.add_middleware(LoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"][1:])
        messages.append(f"{field}: {error['msg']}" if field else error["msg"])
    return JSONResponse(status_code=400, content={"detail": "; ".join(messages) or "Invalid request"})


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(
        f"Storage failure on {request.method} {request.url.path}: {exc.__class__.__name__}: {str(exc)}",
        exc_info=True,
    )
    return JSONResponse(status_code=StorageError.status_code, content={"detail": StorageError.default_detail})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled exception: {exc.__class__.__name__}: {str(exc)}",
        exc_info=True,
        extra={"path": str(request.url), "method": request.method}
    )
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


app.include_router(auth.router, prefix="/auth", tags=["auth"])
app.include_router(users.router, prefix="/users", tags=["users"])
app.include_router(videos.router, prefix="/videos", tags=["videos"])
app.include_router(comments.router, prefix="/comments", tags=["comments"])
app.include_router(subscriptions.router, prefix="/subscriptions", tags=["subscriptions"])
app.include_router(playlists.router, prefix="/playlists", tags=["playlists"])
app.include_router(library.router, tags=["library"])
app.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
app.include_router(reports.router, tags=["reports"])
app.include_router(admin.router, prefix="/admin", tags=["admin"])

app.mount("/uploads", StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")


@app.on_event("startup")
async def startup_event():
    logger.info("🚀 Starting TikTik API server...")
    logger.info(f"📊 Environment: {'Development' if settings.secret_key == 'change-me-in-production-use-env' else 'Production'}")
    logger.info(f"🔗 Database: {settings.database_url.split('@')[1] if '@' in settings.database_url else settings.database_url}")
    if root_path:
        logger.info(f"🌐 Root path: {root_path} (all routes will be prefixed with this)")
    if settings.auto_create_tables:
        await init_db()
        logger.info("🗄️  Tables created")
    logger.info("✅ Server started successfully")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("🛑 Shutting down server...")


@app.get("/health")
def health():
    return {"status": "ok"}
