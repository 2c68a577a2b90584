"""Cover Art Selection — picks the image that represents a directory.

Invariants:
    - A name counts as cover art when its lower-cased stem CONTAINS a cover
      keyword ("my_cover_big.jpg" qualifies, "covert.png" too)
    - Named covers always beat arbitrary images
    - Named covers rank keyword by keyword: the first keyword that one stem
      contains and the other does not decides ("folder_album" beats
      "folder_front")
    - Ties keep listing order (stable sort)
    - Pure: receives file names, never touches the disk
"""

from collections.abc import Iterable

from melodyhub.core.domain_types import COVER_NAMES, is_image, stem_of


def is_cover_art_name(filename: str) -> bool:
    stem = stem_of(filename)
    return any(name in stem for name in COVER_NAMES)


def cover_priority(filename: str) -> tuple[int, ...]:
    """Sort key: one flag per cover keyword, 0 when the stem contains it."""
    stem = stem_of(filename)
    return tuple(0 if name in stem else 1 for name in COVER_NAMES)


def pick_cover_art(filenames: Iterable[str]) -> str | None:
    """Best cover among image files: named covers by priority, else first image."""
    images = [f for f in filenames if is_image(f)]
    named = [f for f in images if is_cover_art_name(f)]
    if named:
        return sorted(named, key=cover_priority)[0]
    if images:
        return images[0]
    return None
