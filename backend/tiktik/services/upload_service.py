import logging
import os
import uuid
from pathlib import Path

import aiofiles
from fastapi import UploadFile

from tiktik.config import settings
from tiktik.errors import StorageError, ValidationError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


def videos_dir() -> Path:
    path = Path(settings.upload_dir) / "videos"
    path.mkdir(parents=True, exist_ok=True)
    return path


async def save_video_file(file: UploadFile) -> tuple[str, str]:
    """Stream an upload to disk under a fresh name. Returns (path on disk, public url)."""
    if not file.filename:
        raise ValidationError("Video file required")
    ext = os.path.splitext(file.filename)[1].lower()
    filename = f"{uuid.uuid4()}{ext}"
    target = videos_dir() / filename
    limit = settings.max_upload_mb * 1024 * 1024
    written = 0
    try:
        async with aiofiles.open(target, "wb") as f:
            while chunk := await file.read(CHUNK_SIZE):
                written += len(chunk)
                if written > limit:
                    raise ValidationError(f"File exceeds {settings.max_upload_mb} MB")
                await f.write(chunk)
    except ValidationError:
        target.unlink(missing_ok=True)
        raise
    except OSError as e:
        logger.error(f"Failed to store upload {file.filename}: {e}", exc_info=True)
        target.unlink(missing_ok=True)
        raise StorageError("Upload failed")
    logger.info(f"File saved: {target}, size: {written} bytes")
    return str(target), f"/uploads/videos/{filename}"


def remove_file(path: str | None) -> None:
    if not path:
        return
    try:
        if os.path.exists(path):
            os.remove(path)
            logger.info(f"Removed file: {path}")
    except OSError as e:
        logger.error(f"Failed to remove file {path}: {e}")
