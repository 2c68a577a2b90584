"""Library Service — browse, recursive collection, playlist loading and media streams.

Invariants:
    - Every operation goes through MediaLibrary (root containment enforced there)
    - Playlist entries carry the cover art of the playlist's own directory
    - open_media rejects missing files and bad Range headers before any
      response is built

Design Decisions:
    - MediaStream is a plain description (path, stat, ranges): the route turns
      it into a FileResponse, so this module stays free of Starlette
"""

import logging
import os
import posixpath
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path

from melodyhub.core.byte_range import parse_range_header
from melodyhub.core.domain_types import Track, audio_mime_type, image_mime_type
from melodyhub.core.playlist_formats import parse_playlist
from melodyhub.infrastructure.media_library import (
    AudioFile, DirectoryListing, MediaLibrary,
)

logger = logging.getLogger(__name__)


class MediaKind(str, Enum):
    AUDIO = "audio"
    COVER = "cover"


@dataclass
class MediaStream:
    path: Path
    media_type: str
    stat: os.stat_result
    ranges: list[tuple[int, int]] | None = None

    @property
    def size(self) -> int:
        return self.stat.st_size

    @property
    def status_code(self) -> int:
        return 206 if self.ranges else 200


def list_directory(library: MediaLibrary, path: str | None) -> DirectoryListing:
    listing = library.list_directory(path)
    logger.debug(
        "Listed directory",
        extra={"media_path": path or "", "track_count": len(listing.files)},
    )
    return listing


def collect_directory_tracks(library: MediaLibrary, path: str | None) -> list[AudioFile]:
    return library.collect_audio_files(path)


def load_playlist(library: MediaLibrary, path: str | None) -> list[Track]:
    """Parse a playlist file inside the library into tracks."""
    fmt, text, playlist_path = library.read_playlist(path)
    base_dir = posixpath.dirname(library.relative_to_root(playlist_path))
    cover_art = library.find_cover_art(playlist_path.parent)
    tracks = [replace(t, cover_art=cover_art) for t in parse_playlist(text, fmt, base_dir)]
    logger.info(
        f"Loaded {fmt.value} playlist",
        extra={"media_path": path or "", "track_count": len(tracks)},
    )
    return tracks


def open_media(
    library: MediaLibrary,
    file: str | None,
    range_header: str | None = None,
    kind: MediaKind = MediaKind.AUDIO,
) -> MediaStream:
    """Describe the bytes to send for an audio file or cover image."""
    path = library.media_file(file)
    stat = path.stat()
    media_type = (
        audio_mime_type(path.name) if kind is MediaKind.AUDIO
        else image_mime_type(path.name)
    )
    ranges = parse_range_header(range_header, stat.st_size)
    if ranges:
        logger.debug(
            "Serving partial content",
            extra={
                "media_path": file,
                "byte_range": ",".join(f"{s}-{e}" for s, e in ranges),
            },
        )
    return MediaStream(path=path, media_type=media_type, stat=stat, ranges=ranges)
