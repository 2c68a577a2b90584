"""Play Queue Routes — create, edit and drive a listener's playlist.

Invariants:
    - Every response carries the full queue state after the operation
    - Index errors are 400, empty-queue transport is 409, unknown queue is 404
    - Export returns text/plain M3U with an attachment disposition

Design Decisions:
    - Transport verbs as POST sub-resources (/play, /next ...): each call
      changes server state, so GET is never used for them
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from melodyhub.api.dependencies import get_queue_service
from melodyhub.config import get_settings
from melodyhub.core.domain_types import M3U_MIME_TYPE
from melodyhub.models.play_queue import PlayQueueRecord
from melodyhub.schemas.library import TrackOut
from melodyhub.schemas.queue import (
    AddTracksRequest, ImportRequest, MoveRequest, QueueChange, QueueCreate,
    QueueResponse, QueueUpdate,
)
from melodyhub.services.queue_service import QueueService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/queues", tags=["queues"])


def to_response(record: PlayQueueRecord) -> QueueResponse:
    queue = record.to_domain()
    current = queue.current_track
    return QueueResponse(
        id=record.id,
        name=record.name,
        tracks=[TrackOut.model_validate(t) for t in queue.tracks],
        current_index=queue.current_index,
        current_track=TrackOut.model_validate(current) if current else None,
        is_playing=queue.is_playing,
        volume=queue.volume,
        current_path=queue.current_path,
    )


def _change(record: PlayQueueRecord, message: str, added: int = 0) -> QueueChange:
    return QueueChange(queue=to_response(record), added=added, message=message)


# ─── Lifecycle ──────────────────────────────────────────────────

@router.post("", response_model=QueueResponse, status_code=status.HTTP_201_CREATED)
async def create_queue(
    body: QueueCreate, service: QueueService = Depends(get_queue_service),
):
    return to_response(await service.create(body))


@router.get("/{queue_id}", response_model=QueueResponse)
async def get_queue(
    queue_id: UUID, service: QueueService = Depends(get_queue_service),
):
    return to_response(await service.get(queue_id))


@router.patch("/{queue_id}", response_model=QueueResponse)
async def update_queue(
    queue_id: UUID, body: QueueUpdate,
    service: QueueService = Depends(get_queue_service),
):
    return to_response(await service.update(queue_id, body))


@router.delete("/{queue_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_queue(
    queue_id: UUID, service: QueueService = Depends(get_queue_service),
):
    await service.delete(queue_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ─── Editing ────────────────────────────────────────────────────

@router.post("/{queue_id}/tracks", response_model=QueueChange)
async def add_tracks(
    queue_id: UUID, body: AddTracksRequest,
    service: QueueService = Depends(get_queue_service),
):
    record, added = await service.add_tracks(queue_id, body)
    if body.file is not None and added == 1:
        message = f"Added to playlist: {record.tracks[-1]['title']}"
    else:
        message = f"Added {added} tracks"
    return _change(record, message, added)


@router.delete("/{queue_id}/tracks", response_model=QueueChange)
async def clear_tracks(
    queue_id: UUID, service: QueueService = Depends(get_queue_service),
):
    return _change(await service.clear(queue_id), "Playlist cleared")


@router.delete("/{queue_id}/tracks/{index}", response_model=QueueChange)
async def remove_track(
    queue_id: UUID, index: int,
    service: QueueService = Depends(get_queue_service),
):
    return _change(await service.remove(queue_id, index), "Removed from playlist")


@router.post("/{queue_id}/move", response_model=QueueChange)
async def move_track(
    queue_id: UUID, body: MoveRequest,
    service: QueueService = Depends(get_queue_service),
):
    record = await service.move(queue_id, body.src, body.dest)
    return _change(record, "Playlist reordered")


@router.post("/{queue_id}/import", response_model=QueueChange)
async def import_playlist(
    queue_id: UUID, body: ImportRequest,
    service: QueueService = Depends(get_queue_service),
):
    record, added = await service.import_playlist(
        queue_id, body.content, get_settings().max_playlist_upload_bytes,
    )
    return _change(record, f"Imported {added} tracks", added)


@router.get("/{queue_id}/export")
async def export_playlist(
    queue_id: UUID, service: QueueService = Depends(get_queue_service),
):
    content = await service.export_m3u(queue_id)
    return Response(
        content=content,
        media_type=M3U_MIME_TYPE,
        headers={"Content-Disposition": 'attachment; filename="playlist.m3u"'},
    )


# ─── Transport ──────────────────────────────────────────────────

@router.post("/{queue_id}/play", response_model=QueueChange)
async def play(queue_id: UUID, service: QueueService = Depends(get_queue_service)):
    return _now_playing(await service.play(queue_id))


@router.post("/{queue_id}/pause", response_model=QueueChange)
async def pause(queue_id: UUID, service: QueueService = Depends(get_queue_service)):
    return _change(await service.pause(queue_id), "Paused")


@router.post("/{queue_id}/select/{index}", response_model=QueueChange)
async def select(
    queue_id: UUID, index: int,
    service: QueueService = Depends(get_queue_service),
):
    return _now_playing(await service.select(queue_id, index))


@router.post("/{queue_id}/next", response_model=QueueChange)
async def next_track(queue_id: UUID, service: QueueService = Depends(get_queue_service)):
    return _now_playing(await service.next(queue_id))


@router.post("/{queue_id}/previous", response_model=QueueChange)
async def previous_track(queue_id: UUID, service: QueueService = Depends(get_queue_service)):
    return _now_playing(await service.previous(queue_id))


def _now_playing(record: PlayQueueRecord) -> QueueChange:
    response = to_response(record)
    if response.current_track is None:
        return QueueChange(queue=response, message="Playlist is empty")
    return QueueChange(queue=response, message=f"Now playing: {response.current_track.title}")
