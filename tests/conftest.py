"""Root conftest — shared test configuration and a sample media tree."""

import os

import pytest

# Ensure tests never touch a real library or database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("MEDIA_ROOT", "/nonexistent-melodyhub-media")
os.environ.setdefault("STATIC_DIR", "/nonexistent-melodyhub-static")

from melodyhub.infrastructure.media_library import MediaLibrary  # noqa: E402


@pytest.fixture
def media_root(tmp_path):
    """A small library:

        audio/
          intro.mp3
          notes.txt
          cover.jpg
          mix.m3u
          Artist/
            Album A/  01 Song.mp3, 02 Song.flac, folder.png, back.jpg
            Album B/  track.ogg, random.gif
            best.pls
          Empty/
          .hidden/   secret.mp3
    """
    root = tmp_path / "audio"
    root.mkdir()
    (root / "intro.mp3").write_bytes(b"ID3" + bytes(range(97)))
    (root / "notes.txt").write_text("not media")
    (root / "cover.jpg").write_bytes(b"\xff\xd8\xff\xe0jpeg")
    (root / "mix.m3u").write_text(
        "#EXTM3U\n"
        "#EXTINF:123,Opening Theme\n"
        "intro.mp3\n"
        "\n"
        "Artist/Album A/01 Song.mp3\n"
        "../outside.mp3\n"
        "http://radio.example/stream\n",
    )

    album_a = root / "Artist" / "Album A"
    album_a.mkdir(parents=True)
    (album_a / "01 Song.mp3").write_bytes(b"a" * 10)
    (album_a / "02 Song.flac").write_bytes(b"b" * 10)
    (album_a / "folder.png").write_bytes(b"\x89PNG")
    (album_a / "back.jpg").write_bytes(b"\xff\xd8")

    album_b = root / "Artist" / "Album B"
    album_b.mkdir()
    (album_b / "track.ogg").write_bytes(b"OggS")
    (album_b / "random.gif").write_bytes(b"GIF89a")

    (root / "Artist" / "best.pls").write_text(
        "[playlist]\n"
        "File1=Album A/01 Song.mp3\n"
        "Title1=First Song\n"
        "File2=../intro.mp3\n"
        "File3=Album B/track.ogg\n"
        "NumberOfEntries=3\n",
    )
    (root / "Empty").mkdir()
    hidden = root / ".hidden"
    hidden.mkdir()
    (hidden / "secret.mp3").write_bytes(b"x")
    return root


@pytest.fixture
def library(media_root):
    return MediaLibrary(media_root)
