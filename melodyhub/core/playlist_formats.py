"""Playlist Formats — M3U/M3U8/PLS parsing and M3U export.

Invariants:
    - Entry paths are library-relative POSIX paths, resolved against the
      playlist's own directory (base_dir, '' for the library root)
    - Entries that are absolute, URLs, or normalise to outside the library
      root are dropped, never passed through
    - Entries that normalise to the playlist's own directory are dropped
    - PLS entries containing '..' anywhere are dropped before resolution
    - Entry order is file order (PLS: order of the FileN lines)
    - Pure: text in, tracks out

Design Decisions:
    - #EXTINF and TitleN titles are honoured when present, else the last path
      segment is the title
    - Upload import (parse_imported_lines) keeps the raw line as the path: the
      lines come from the user's machine, not from a file inside the library
"""

import posixpath
import re

from melodyhub.core.domain_types import PlaylistFormat, Track, extension_of
from melodyhub.core.errors import EmptyQueueError, UnsupportedPlaylistFormatError


_EXTINF_RE = re.compile(r"^#EXTINF:[^,]*,(.*)$", re.IGNORECASE)
_PLS_FILE_RE = re.compile(r"^File(\d+)=(.+)$", re.IGNORECASE)
_PLS_TITLE_RE = re.compile(r"^Title(\d+)=(.*)$", re.IGNORECASE)
_URL_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")
_DRIVE_RE = re.compile(r"^[a-zA-Z]:/")

M3U_HEADER = "#EXTM3U"


def detect_format(filename: str) -> PlaylistFormat:
    extension = extension_of(filename)
    try:
        return PlaylistFormat(extension)
    except ValueError:
        raise UnsupportedPlaylistFormatError(extension) from None


def resolve_entry(entry: str, base_dir: str) -> str | None:
    """Join a playlist line onto base_dir; None when it must be dropped."""
    entry = entry.strip().replace("\\", "/")
    if not entry or entry.startswith("/") or _URL_RE.match(entry) or _DRIVE_RE.match(entry):
        return None
    joined = posixpath.normpath(posixpath.join(base_dir, entry))
    if joined in (".", "..") or joined.startswith("../"):
        return None
    # "." or "sub/.." names the playlist's directory, not a track
    if joined == posixpath.normpath(base_dir or "."):
        return None
    return joined


def _title_for(entry: str) -> str:
    return posixpath.basename(entry.strip().replace("\\", "/"))


def parse_m3u(text: str, base_dir: str = "") -> list[Track]:
    tracks: list[Track] = []
    pending_title: str | None = None
    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            continue
        if line.startswith("#"):
            match = _EXTINF_RE.match(line)
            if match:
                pending_title = match.group(1).strip() or None
            continue
        path = resolve_entry(line, base_dir)
        if path is not None:
            tracks.append(Track(path=path, title=pending_title or _title_for(line)))
        pending_title = None
    return tracks


def parse_pls(text: str, base_dir: str = "") -> list[Track]:
    files: list[tuple[str, str]] = []
    titles: dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        match = _PLS_FILE_RE.match(line)
        if match:
            files.append((str(int(match.group(1))), match.group(2)))
            continue
        match = _PLS_TITLE_RE.match(line)
        if match and match.group(2).strip():
            titles[str(int(match.group(1)))] = match.group(2).strip()

    tracks: list[Track] = []
    for number, entry in files:
        if ".." in entry:
            continue
        path = resolve_entry(entry, base_dir)
        if path is None:
            continue
        tracks.append(Track(path=path, title=titles.get(number) or _title_for(entry)))
    return tracks


def parse_playlist(text: str, fmt: PlaylistFormat, base_dir: str = "") -> list[Track]:
    if fmt is PlaylistFormat.PLS:
        return parse_pls(text, base_dir)
    return parse_m3u(text, base_dir)


def parse_imported_lines(text: str) -> list[Track]:
    """Every non-empty, non-comment line becomes a track as written."""
    tracks = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        tracks.append(Track(path=line, title=line.split("/")[-1]))
    return tracks


def format_m3u(tracks: list[Track]) -> str:
    if not tracks:
        raise EmptyQueueError()
    return "".join([f"{M3U_HEADER}\n", *(f"{t.path}\n" for t in tracks)])
