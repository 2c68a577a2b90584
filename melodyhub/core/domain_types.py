"""Domain Types — media vocabulary shared by the library and the play queue.

Invariants:
    - Extensions are stored lower-case, without the leading dot
    - COVER_NAMES order is the cover-art priority order (first = best)
    - Unknown audio extensions stream as audio/mpeg, unknown images as image/jpeg

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
    - Tuples over sets for extension lists: deterministic iteration in tests and docs
"""

import posixpath
from dataclasses import dataclass
from enum import Enum


class EntryType(str, Enum):
    """Kind of a directory listing entry."""
    DIRECTORY = "directory"
    FILE = "file"


class PlaylistFormat(str, Enum):
    """Playlist file formats the library can parse."""
    M3U = "m3u"
    M3U8 = "m3u8"
    PLS = "pls"


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class Track:
    """One playable entry: library-relative POSIX path plus display title."""
    path: str
    title: str
    cover_art: str | None = None

    def to_dict(self) -> dict:
        return {"path": self.path, "title": self.title, "coverArt": self.cover_art}

    @classmethod
    def from_dict(cls, data: dict) -> "Track":
        return cls(
            path=data["path"],
            title=data.get("title") or posixpath.basename(data["path"]),
            cover_art=data.get("coverArt"),
        )


# ─── Extensions ──────────────────────────────────────────────────

AUDIO_EXTENSIONS: tuple[str, ...] = ("mp3", "wav", "ogg", "flac", "m4a", "aac")
PLAYLIST_EXTENSIONS: tuple[str, ...] = tuple(f.value for f in PlaylistFormat)
IMAGE_EXTENSIONS: tuple[str, ...] = ("jpg", "jpeg", "png", "gif", "bmp")

COVER_NAMES: tuple[str, ...] = ("cover", "folder", "album", "front", "artwork")


# ─── MIME types ──────────────────────────────────────────────────

AUDIO_MIME_TYPES: dict[str, str] = {
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "ogg": "audio/ogg",
    "flac": "audio/flac",
    "m4a": "audio/mp4",
    "aac": "audio/aac",
}
DEFAULT_AUDIO_MIME_TYPE = "audio/mpeg"

IMAGE_MIME_TYPES: dict[str, str] = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "bmp": "image/bmp",
}
DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"

M3U_MIME_TYPE = "audio/x-mpegurl"


def extension_of(name: str) -> str:
    """Lower-case extension without the dot; '' when the name has none."""
    return posixpath.splitext(name)[1][1:].lower()


def stem_of(name: str) -> str:
    """Lower-case file name without its extension."""
    return posixpath.splitext(posixpath.basename(name))[0].lower()


def is_audio(name: str) -> bool:
    return extension_of(name) in AUDIO_EXTENSIONS


def is_playlist(name: str) -> bool:
    return extension_of(name) in PLAYLIST_EXTENSIONS


def is_image(name: str) -> bool:
    return extension_of(name) in IMAGE_EXTENSIONS


def audio_mime_type(name: str) -> str:
    return AUDIO_MIME_TYPES.get(extension_of(name), DEFAULT_AUDIO_MIME_TYPE)


def image_mime_type(name: str) -> str:
    return IMAGE_MIME_TYPES.get(extension_of(name), DEFAULT_IMAGE_MIME_TYPE)
