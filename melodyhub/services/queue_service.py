"""Queue Service — load a persisted play queue, apply one operation, save it.

Invariants:
    - Every mutating call ends with a commit; a failed operation commits nothing
    - Tracks added from the library are validated against the media root first
    - Unknown queue ids raise ResourceNotFoundError("Queue", id)

Design Decisions:
    - One class per request (QueueService(db, library)) mirrors the handler
      classes of the API layer: dependencies injected, no module state
    - Explicit client tracks are stored as given; they are checked at
      stream time, when MediaLibrary.media_file resolves them
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from melodyhub.core.domain_types import Track, is_audio, is_playlist
from melodyhub.core.errors import (
    ErrorContext, MediaNotFoundError, PlaylistTooLargeError,
    ResourceNotFoundError,
)
from melodyhub.core.play_queue import PlayQueue
from melodyhub.core.playlist_formats import format_m3u, parse_imported_lines
from melodyhub.infrastructure.media_library import MediaLibrary
from melodyhub.models.play_queue import PlayQueueRecord
from melodyhub.schemas.queue import AddTracksRequest, QueueCreate, QueueUpdate
from melodyhub.services import library_service

logger = logging.getLogger(__name__)


class QueueService:
    """Play queue operations bound to one DB session and one media library."""

    def __init__(self, db: AsyncSession, library: MediaLibrary):
        self.db = db
        self.library = library

    # ─── Lifecycle ───────────────────────────────────────────────

    async def create(self, body: QueueCreate) -> PlayQueueRecord:
        record = PlayQueueRecord(name=body.name, volume=body.volume, tracks=[])
        self.db.add(record)
        await self.db.commit()
        await self.db.refresh(record)
        logger.info("Queue created", extra={"queue_id": str(record.id)})
        return record

    async def get(self, queue_id: UUID) -> PlayQueueRecord:
        result = await self.db.execute(
            select(PlayQueueRecord).where(PlayQueueRecord.id == queue_id),
        )
        record = result.scalar_one_or_none()
        if record is None:
            raise ResourceNotFoundError(
                "Queue", str(queue_id), ErrorContext(queue_id=str(queue_id)),
            )
        return record

    async def delete(self, queue_id: UUID) -> None:
        record = await self.get(queue_id)
        await self.db.delete(record)
        await self.db.commit()
        logger.info("Queue deleted", extra={"queue_id": str(queue_id)})

    async def update(self, queue_id: UUID, body: QueueUpdate) -> PlayQueueRecord:
        record = await self.get(queue_id)
        queue = record.to_domain()
        if body.volume is not None:
            queue.set_volume(body.volume)
        if body.current_path is not None:
            queue.current_path = body.current_path
        if body.name is not None:
            record.name = body.name
        return await self._save(record, queue)

    # ─── Editing ─────────────────────────────────────────────────

    async def add_tracks(
        self, queue_id: UUID, body: AddTracksRequest,
    ) -> tuple[PlayQueueRecord, int]:
        record = await self.get(queue_id)
        tracks = self._resolve_tracks(body)
        queue = record.to_domain()
        added = queue.add(tracks)
        logger.info(
            "Tracks added",
            extra={"queue_id": str(queue_id), "track_count": added},
        )
        return await self._save(record, queue), added

    async def import_playlist(
        self, queue_id: UUID, content: str, limit: int,
    ) -> tuple[PlayQueueRecord, int]:
        size = len(content.encode("utf-8"))
        if size > limit:
            raise PlaylistTooLargeError(size, limit)
        record = await self.get(queue_id)
        queue = record.to_domain()
        added = queue.add(parse_imported_lines(content))
        return await self._save(record, queue), added

    async def remove(self, queue_id: UUID, index: int) -> PlayQueueRecord:
        record = await self.get(queue_id)
        queue = record.to_domain()
        queue.remove(index)
        return await self._save(record, queue)

    async def clear(self, queue_id: UUID) -> PlayQueueRecord:
        record = await self.get(queue_id)
        queue = record.to_domain()
        queue.clear()
        return await self._save(record, queue)

    async def move(self, queue_id: UUID, src: int, dest: int) -> PlayQueueRecord:
        record = await self.get(queue_id)
        queue = record.to_domain()
        queue.move(src, dest)
        return await self._save(record, queue)

    # ─── Transport ───────────────────────────────────────────────

    async def play(self, queue_id: UUID) -> PlayQueueRecord:
        return await self._transport(queue_id, lambda q: q.play())

    async def pause(self, queue_id: UUID) -> PlayQueueRecord:
        return await self._transport(queue_id, lambda q: q.pause())

    async def select(self, queue_id: UUID, index: int) -> PlayQueueRecord:
        return await self._transport(queue_id, lambda q: q.select(index))

    async def next(self, queue_id: UUID) -> PlayQueueRecord:
        return await self._transport(queue_id, lambda q: q.next())

    async def previous(self, queue_id: UUID) -> PlayQueueRecord:
        return await self._transport(queue_id, lambda q: q.previous())

    async def export_m3u(self, queue_id: UUID) -> str:
        record = await self.get(queue_id)
        return format_m3u(record.to_domain().tracks)

    # ─── Helpers ─────────────────────────────────────────────────

    async def _transport(self, queue_id: UUID, operation) -> PlayQueueRecord:
        record = await self.get(queue_id)
        queue = record.to_domain()
        operation(queue)
        return await self._save(record, queue)

    async def _save(self, record: PlayQueueRecord, queue: PlayQueue) -> PlayQueueRecord:
        record.apply(queue)
        await self.db.commit()
        await self.db.refresh(record)
        return record

    def _resolve_tracks(self, body: AddTracksRequest) -> list[Track]:
        if body.tracks is not None:
            return [
                Track(path=t.path, title=t.title or t.path.split("/")[-1], cover_art=t.cover_art)
                for t in body.tracks
            ]
        if body.directory is not None:
            return [
                Track(path=f.path, title=f.name, cover_art=f.cover_art)
                for f in library_service.collect_directory_tracks(self.library, body.directory)
            ]
        if body.playlist is not None:
            return library_service.load_playlist(self.library, body.playlist)
        return self._file_tracks(body.file)

    def _file_tracks(self, relative: str) -> list[Track]:
        """A single audio file, or the entries of a playlist file."""
        path = self.library.media_file(relative)
        if is_playlist(path.name):
            return library_service.load_playlist(self.library, relative)
        if not is_audio(path.name):
            raise MediaNotFoundError(relative)
        cover_art = self.library.find_cover_art(path.parent)
        return [Track(
            path=self.library.relative_to_root(path), title=path.name,
            cover_art=cover_art,
        )]
