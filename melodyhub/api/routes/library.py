"""Library Routes — browse the media root, expand directories and playlists, stream files.

Invariants:
    - Path traversal is rejected before any file is opened (INVALID_PATH for
      listings, MEDIA_NOT_FOUND for streams)
    - Streams honour byte ranges (206, multipart for several) and always
      advertise Accept-Ranges
    - Listing keys follow the browser contract: files[], coverArt

Design Decisions:
    - Plain `def` handlers: filesystem calls are blocking, FastAPI runs them in
      its threadpool instead of the event loop
"""

import logging

from fastapi import APIRouter, Depends, Header, Query
from fastapi.responses import FileResponse

from melodyhub.api.dependencies import get_media_library
from melodyhub.infrastructure.media_library import MediaLibrary
from melodyhub.schemas.library import (
    AudioFileOut, AudioFilesOut, DirectoryListingOut, LibraryEntryOut,
    PlaylistOut, TrackOut,
)
from melodyhub.services import library_service
from melodyhub.services.library_service import MediaKind

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/library", tags=["library"])


@router.get(
    "/list", response_model=DirectoryListingOut, response_model_exclude_none=True,
)
def list_directory(
    path: str = Query("", max_length=4096),
    library: MediaLibrary = Depends(get_media_library),
):
    """Directories and playable files directly inside `path`."""
    listing = library_service.list_directory(library, path)
    return DirectoryListingOut(
        files=[LibraryEntryOut.model_validate(e) for e in listing.files],
        cover_art=listing.cover_art,
    )


@router.get("/files", response_model=AudioFilesOut)
def list_audio_files(
    path: str = Query("", max_length=4096),
    library: MediaLibrary = Depends(get_media_library),
):
    """Every audio file below `path`, recursively, sorted by path."""
    files = library_service.collect_directory_tracks(library, path)
    return AudioFilesOut(files=[AudioFileOut.model_validate(f) for f in files])


@router.get("/playlist", response_model=PlaylistOut)
def load_playlist(
    path: str = Query(..., min_length=1, max_length=4096),
    library: MediaLibrary = Depends(get_media_library),
):
    """Entries of an M3U/M3U8/PLS file inside the library."""
    tracks = library_service.load_playlist(library, path)
    return PlaylistOut(files=[TrackOut.model_validate(t) for t in tracks])


@router.get("/stream")
def stream_audio(
    file: str = Query(..., min_length=1, max_length=4096),
    range_header: str | None = Header(None, alias="Range"),
    library: MediaLibrary = Depends(get_media_library),
):
    """Audio bytes with Range support."""
    return media_response(library, file, range_header, MediaKind.AUDIO)


@router.get("/cover")
def serve_cover(
    file: str = Query(..., min_length=1, max_length=4096),
    range_header: str | None = Header(None, alias="Range"),
    library: MediaLibrary = Depends(get_media_library),
):
    """Cover art image."""
    return media_response(library, file, range_header, MediaKind.COVER)


def media_response(
    library: MediaLibrary, file: str, range_header: str | None, kind: MediaKind,
) -> FileResponse:
    """Shared by the library routes and the legacy dispatcher.

    Range headers are checked by open_media; FileResponse then reads the same
    header and sends the 200 or 206 body with ETag and Last-Modified.
    """
    stream = library_service.open_media(library, file, range_header, kind)
    return FileResponse(
        stream.path,
        media_type=stream.media_type,
        stat_result=stream.stat,
        headers={"Accept-Ranges": "bytes"},
    )
