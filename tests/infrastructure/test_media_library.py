"""Media Library — filesystem access against a temporary media tree.

Tests cover:
    - traversal, sibling-prefix and symlink escapes rejected
    - listing order, filtering, cover art propagation
    - recursive audio collection and playlist reading
    - media_file reports traversal as not found
    - unreadable subdirectories are skipped, not fatal
"""

import os
from pathlib import Path

import pytest

from melodyhub.core.domain_types import EntryType, PlaylistFormat
from melodyhub.core.errors import (
    DirectoryNotFoundError, InvalidPathError, MediaNotFoundError,
    PlaylistNotFoundError, UnsupportedPlaylistFormatError,
)
from melodyhub.infrastructure.media_library import MediaLibrary


# ─── resolve ─────────────────────────────────────────────────────

def test_resolve_empty_path_is_root(library, media_root):
    assert library.resolve("") == media_root.resolve()
    assert library.resolve(None) == media_root.resolve()


def test_resolve_leading_slash_is_root_relative(library, media_root):
    assert library.resolve("/Artist") == (media_root / "Artist").resolve()


@pytest.mark.parametrize("path", ["..", "../", "Artist/../../", "..\\..\\etc", "a\x00b"])
def test_resolve_rejects_escapes(library, path):
    with pytest.raises(InvalidPathError) as info:
        library.resolve(path)
    assert info.value.http_status == 400


def test_resolve_rejects_sibling_with_same_prefix(tmp_path, media_root):
    sibling = tmp_path / "audio2"
    sibling.mkdir()
    with pytest.raises(InvalidPathError):
        MediaLibrary(media_root).resolve("../audio2")


def test_resolve_rejects_symlink_out_of_root(tmp_path, media_root):
    outside = tmp_path / "outside"
    outside.mkdir()
    os.symlink(outside, media_root / "link")
    with pytest.raises(InvalidPathError):
        MediaLibrary(media_root).resolve("link")


def test_relative_to_root_uses_posix_separators(library, media_root):
    assert library.relative_to_root(library.root / "Artist" / "Album A") == "Artist/Album A"
    assert library.relative_to_root(library.root) == ""


# ─── list_directory ──────────────────────────────────────────────

def test_list_root_orders_directories_first(library):
    listing = library.list_directory("")
    assert [(e.name, e.type) for e in listing.files] == [
        ("Artist", EntryType.DIRECTORY),
        ("Empty", EntryType.DIRECTORY),
        ("intro.mp3", EntryType.FILE),
        ("mix.m3u", EntryType.FILE),
    ]


def test_list_root_reports_named_cover_and_propagates_it(library):
    listing = library.list_directory("")
    assert listing.cover_art == "cover.jpg"
    files = [e for e in listing.files if e.type is EntryType.FILE]
    assert all(e.cover_art == "cover.jpg" for e in files)


def test_list_directory_entries_carry_their_own_cover(library):
    listing = library.list_directory("")
    by_name = {e.name: e for e in listing.files}
    assert by_name["Artist"].cover_art == "Artist/Album A/folder.png"
    assert by_name["Empty"].cover_art is None


def test_list_file_entries_have_extension_and_relative_path(library):
    listing = library.list_directory("Artist/Album A")
    assert [(e.name, e.extension, e.path) for e in listing.files] == [
        ("01 Song.mp3", "mp3", "Artist/Album A/01 Song.mp3"),
        ("02 Song.flac", "flac", "Artist/Album A/02 Song.flac"),
    ]
    assert listing.cover_art == "Artist/Album A/folder.png"


def test_list_unnamed_image_is_not_directory_cover(library):
    listing = library.list_directory("Artist/Album B")
    assert listing.cover_art is None
    assert [e.name for e in listing.files] == ["track.ogg"]


def test_list_missing_directory(library):
    with pytest.raises(DirectoryNotFoundError) as info:
        library.list_directory("Nope")
    assert info.value.http_status == 404


def test_list_file_is_not_a_directory(library):
    with pytest.raises(DirectoryNotFoundError):
        library.list_directory("intro.mp3")


# ─── find_cover_art ──────────────────────────────────────────────

def test_find_cover_art_falls_back_to_any_image(library):
    assert library.find_cover_art(library.root / "Artist" / "Album B") == "Artist/Album B/random.gif"


def test_find_cover_art_looks_one_level_down(library):
    assert library.find_cover_art(library.root / "Artist") == "Artist/Album A/folder.png"


def test_find_cover_art_none_for_empty_or_missing(library):
    assert library.find_cover_art(library.root / "Empty") is None
    assert library.find_cover_art(library.root / "missing") is None


# ─── collect_audio_files ─────────────────────────────────────────

def test_collect_audio_files_recurses_and_sorts(library):
    files = library.collect_audio_files("")
    assert [f.path for f in files] == [
        "Artist/Album A/01 Song.mp3",
        "Artist/Album A/02 Song.flac",
        "Artist/Album B/track.ogg",
        "intro.mp3",
    ]


def test_collect_audio_files_attach_directory_cover(library):
    by_path = {f.path: f for f in library.collect_audio_files("Artist")}
    assert by_path["Artist/Album A/01 Song.mp3"].cover_art == "Artist/Album A/folder.png"
    assert by_path["Artist/Album B/track.ogg"].cover_art == "Artist/Album B/random.gif"
    assert by_path["Artist/Album B/track.ogg"].extension == "ogg"


def test_collect_audio_files_rejects_traversal(library):
    with pytest.raises(InvalidPathError):
        library.collect_audio_files("../")


# ─── files ───────────────────────────────────────────────────────

def test_read_playlist_returns_format_and_text(library, media_root):
    fmt, text, path = library.read_playlist("Artist/best.pls")
    assert fmt is PlaylistFormat.PLS
    assert text.startswith("[playlist]")
    assert path == (media_root / "Artist" / "best.pls").resolve()


def test_read_playlist_strips_utf8_bom(library, media_root):
    (media_root / "bom.m3u").write_bytes("\ufeffintro.mp3\n".encode("utf-8"))
    _, text, _ = library.read_playlist("bom.m3u")
    assert text == "intro.mp3\n"


def test_read_playlist_missing(library):
    with pytest.raises(PlaylistNotFoundError):
        library.read_playlist("nope.m3u")


def test_read_playlist_unsupported_extension(library):
    with pytest.raises(UnsupportedPlaylistFormatError):
        library.read_playlist("notes.txt")


def test_media_file_reports_traversal_as_not_found(library):
    with pytest.raises(MediaNotFoundError) as info:
        library.media_file("../../etc/passwd")
    assert info.value.http_status == 404


def test_media_file_rejects_directories(library):
    with pytest.raises(MediaNotFoundError):
        library.media_file("Artist")



# ─── unreadable directories ──────────────────────────────────────

@pytest.fixture
def locked_dir(media_root, monkeypatch):
    """A subdirectory whose contents cannot be listed."""
    locked = media_root / "Locked"
    locked.mkdir()
    (locked / "cover.jpg").write_bytes(b"\xff\xd8")
    (locked / "song.mp3").write_bytes(b"x")

    real_iterdir = Path.iterdir
    real_scandir = os.scandir

    def iterdir(self):
        if self.name == "Locked":
            raise PermissionError(13, "Permission denied", str(self))
        return real_iterdir(self)

    def scandir(path="."):
        if os.fspath(path).endswith("Locked"):
            raise PermissionError(13, "Permission denied", os.fspath(path))
        return real_scandir(path)

    monkeypatch.setattr(Path, "iterdir", iterdir)
    monkeypatch.setattr(os, "scandir", scandir)
    return locked


def test_list_directory_survives_unreadable_subdirectory(library, locked_dir):
    listing = library.list_directory("")
    entries = {e.name: e for e in listing.files}
    assert entries["Locked"].type is EntryType.DIRECTORY
    assert entries["Locked"].cover_art is None
    assert entries["Artist"].cover_art == "Artist/Album A/folder.png"
    assert listing.cover_art == "cover.jpg"


def test_unreadable_directory_lists_as_empty(library, locked_dir):
    assert library.list_directory("Locked").files == []


def test_collect_audio_files_skips_unreadable_subdirectory(library, locked_dir):
    paths = [f.path for f in library.collect_audio_files("")]
    assert "Locked/song.mp3" not in paths
    assert "intro.mp3" in paths
    assert "Artist/Album B/track.ogg" in paths


def test_unreadable_directory_is_logged(library, locked_dir, caplog):
    with caplog.at_level("WARNING", logger="melodyhub.infrastructure.media_library"):
        library.list_directory("")
    assert any(
        (getattr(r, "media_path", None) or "").endswith("Locked")
        for r in caplog.records
    )
