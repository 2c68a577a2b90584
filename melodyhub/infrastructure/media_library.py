"""Media Library — filesystem access confined to the configured media root.

Invariants:
    - Every path is resolved (symlinks followed) and must be the root or lie
      under it; anything else raises InvalidPathError
    - Paths returned to callers are root-relative POSIX strings
    - Hidden entries (leading '.') are never listed or walked
    - Listing order: directories first, then files, each sorted by name

Design Decisions:
    - Path.resolve + is_relative_to over string-prefix checks: '/media/audio2'
      must not pass as inside '/media/audio'
    - Cover art lookup falls back one level into subdirectories so an artist
      folder inherits the first album cover it contains
    - An unreadable directory reads as empty (warning logged): one locked
      folder costs its own cover art and tracks, never the whole listing
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from melodyhub.core.cover_art import is_cover_art_name, pick_cover_art
from melodyhub.core.domain_types import (
    EntryType, PlaylistFormat, extension_of, is_audio, is_image, is_playlist,
)
from melodyhub.core.errors import (
    DirectoryNotFoundError, InvalidPathError, MediaNotFoundError,
    PlaylistNotFoundError,
)
from melodyhub.core.playlist_formats import detect_format

logger = logging.getLogger(__name__)


@dataclass
class LibraryEntry:
    """One row of a directory listing."""
    name: str
    type: EntryType
    path: str
    extension: str | None = None
    cover_art: str | None = None


@dataclass
class DirectoryListing:
    files: list[LibraryEntry] = field(default_factory=list)
    cover_art: str | None = None


@dataclass
class AudioFile:
    """An audio file found by a recursive walk."""
    name: str
    path: str
    extension: str
    cover_art: str | None = None


class MediaLibrary:
    """Read-only view of the media root."""

    def __init__(self, root: str | os.PathLike):
        self.root = Path(root).resolve()

    # ─── Path safety ─────────────────────────────────────────────

    def resolve(self, relative: str | None) -> Path:
        """Resolve a client-supplied path inside the root or raise InvalidPathError."""
        relative = (relative or "").replace("\\", "/").lstrip("/")
        if "\x00" in relative:
            raise InvalidPathError(relative)
        try:
            full = (self.root / relative).resolve()
        except (OSError, RuntimeError):
            raise InvalidPathError(relative) from None
        if full != self.root and not full.is_relative_to(self.root):
            logger.warning(
                "Rejected path outside media root",
                extra={"media_path": relative, "error_code": "INVALID_PATH"},
            )
            raise InvalidPathError(relative)
        return full

    def relative_to_root(self, path: Path) -> str:
        if path == self.root:
            return ""
        return path.relative_to(self.root).as_posix()

    def exists(self) -> bool:
        return self.root.is_dir()

    # ─── Listing ─────────────────────────────────────────────────

    def list_directory(self, relative: str | None) -> DirectoryListing:
        directory = self.resolve(relative)
        if not directory.is_dir():
            raise DirectoryNotFoundError(relative or "")

        directories: list[LibraryEntry] = []
        files: list[LibraryEntry] = []
        cover_art: str | None = None
        for item in sorted(_visible_children(directory), key=lambda p: p.name):
            item_path = self.relative_to_root(item)
            if item.is_dir():
                directories.append(LibraryEntry(
                    name=item.name, type=EntryType.DIRECTORY, path=item_path,
                    cover_art=self.find_cover_art(item),
                ))
            elif is_image(item.name) and is_cover_art_name(item.name):
                if cover_art is None:
                    cover_art = item_path
            elif is_audio(item.name) or is_playlist(item.name):
                files.append(LibraryEntry(
                    name=item.name, type=EntryType.FILE, path=item_path,
                    extension=extension_of(item.name),
                ))

        if cover_art is not None:
            for entry in files:
                entry.cover_art = cover_art
        return DirectoryListing(files=directories + files, cover_art=cover_art)

    def find_cover_art(self, directory: Path) -> str | None:
        """Cover of a directory, else of its first subdirectory that has one."""
        if not directory.is_dir():
            return None
        children = sorted(_visible_children(directory), key=lambda p: p.name)
        found = _pick_cover_in(children)
        if found is not None:
            return self.relative_to_root(found)
        for child in children:
            if child.is_dir():
                found = _pick_cover_in(sorted(_visible_children(child), key=lambda p: p.name))
                if found is not None:
                    return self.relative_to_root(found)
        return None

    def collect_audio_files(self, relative: str | None) -> list[AudioFile]:
        """All audio files below a directory, sorted by path."""
        directory = self.resolve(relative)
        if not directory.is_dir():
            raise DirectoryNotFoundError(relative or "")

        result: list[AudioFile] = []
        covers: dict[Path, str | None] = {}
        for current, dirnames, filenames in os.walk(directory, onerror=_log_unreadable):
            dirnames[:] = [d for d in dirnames if not d.startswith(".")]
            current_path = Path(current)
            for filename in filenames:
                if filename.startswith(".") or not is_audio(filename):
                    continue
                if current_path not in covers:
                    covers[current_path] = self.find_cover_art(current_path)
                result.append(AudioFile(
                    name=filename,
                    path=self.relative_to_root(current_path / filename),
                    extension=extension_of(filename),
                    cover_art=covers[current_path],
                ))
        result.sort(key=lambda f: f.path)
        return result

    # ─── Files ───────────────────────────────────────────────────

    def read_playlist(self, relative: str | None) -> tuple[PlaylistFormat, str, Path]:
        """Read a playlist file: (format, decoded text, resolved path)."""
        path = self.resolve(relative)
        if not path.is_file():
            raise PlaylistNotFoundError(relative or "")
        fmt = detect_format(path.name)
        text = path.read_bytes().decode("utf-8", errors="replace").lstrip("\ufeff")
        return fmt, text, path

    def media_file(self, relative: str | None) -> Path:
        """Existing regular file; traversal attempts are reported as not found."""
        try:
            path = self.resolve(relative)
        except InvalidPathError:
            raise MediaNotFoundError(relative or "") from None
        if not path.is_file():
            raise MediaNotFoundError(relative or "")
        return path


def _visible_children(directory: Path) -> list[Path]:
    try:
        return [p for p in directory.iterdir() if not p.name.startswith(".")]
    except OSError as e:
        _log_unreadable(e)
        return []


def _log_unreadable(error: OSError) -> None:
    logger.warning(
        f"Skipping unreadable directory: {error.strerror}",
        extra={"media_path": error.filename},
    )


def _pick_cover_in(children: list[Path]) -> Path | None:
    by_name = {p.name: p for p in children if p.is_file()}
    name = pick_cover_art(by_name)
    return by_name[name] if name is not None else None
