"""Legacy Dispatcher — the original `api.php?action=...` query interface.

Invariants:
    - Each action delegates to the same handler as its /api/v1/library route,
      so responses and errors are identical
    - Unknown or missing action → 400 INVALID_ACTION
    - `path` and `file` keep their original meaning per action
      (list/getDirectoryFiles/loadPlaylist read `path`, play/cover read `file`)

Design Decisions:
    - Kept as one route so existing browser clients work unmodified against
      the new server
"""

import logging

from fastapi import APIRouter, Depends, Header, Query

from melodyhub.api.dependencies import get_media_library
from melodyhub.api.routes import library as library_routes
from melodyhub.core.errors import InvalidActionError
from melodyhub.infrastructure.media_library import MediaLibrary
from melodyhub.services.library_service import MediaKind

logger = logging.getLogger(__name__)
router = APIRouter(tags=["legacy"])


@router.get("/api.php", response_model=None)
def dispatch(
    action: str = Query(""),
    path: str = Query("", max_length=4096),
    file: str = Query("", max_length=4096),
    range_header: str | None = Header(None, alias="Range"),
    library: MediaLibrary = Depends(get_media_library),
):
    logger.debug("Legacy action", extra={"action": action})
    if action == "list":
        listing = library_routes.list_directory(path=path, library=library)
        return listing.model_dump(by_alias=True, exclude_none=True)
    if action == "getDirectoryFiles":
        files = library_routes.list_audio_files(path=path, library=library)
        return files.model_dump(by_alias=True)
    if action == "loadPlaylist":
        playlist = library_routes.load_playlist(path=path, library=library)
        return playlist.model_dump(by_alias=True)
    if action == "play":
        return library_routes.media_response(library, file, range_header, MediaKind.AUDIO)
    if action == "cover":
        return library_routes.media_response(library, file, range_header, MediaKind.COVER)
    raise InvalidActionError(action)
