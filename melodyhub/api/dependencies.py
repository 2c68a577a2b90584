"""Route Dependencies — per-request wiring of the media library and services.

Invariants:
    - get_media_library reads media_root from settings on every call, so tests
      override it with app.dependency_overrides rather than env mutation
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from melodyhub.config import get_settings
from melodyhub.infrastructure.database import get_db
from melodyhub.infrastructure.media_library import MediaLibrary
from melodyhub.services.queue_service import QueueService


def get_media_library() -> MediaLibrary:
    return MediaLibrary(get_settings().media_root)


def get_queue_service(
    db: AsyncSession = Depends(get_db),
    library: MediaLibrary = Depends(get_media_library),
) -> QueueService:
    return QueueService(db, library)
