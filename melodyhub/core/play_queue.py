"""Play Queue — ordered track list plus transport state for one listener.

Invariants:
    - current_index is -1 (nothing selected) or a valid index into tracks
    - Removing or clearing the current track deselects it and stops playback
    - Reordering keeps current_index pointing at the same track
    - next/previous wrap around both ends of the queue: (cur ± 1) mod len,
      so previous with nothing selected (-1) lands on the second to last track
    - volume is always within [0.0, 1.0]

Design Decisions:
    - Mutable dataclass mutated in place: the service loads one queue, applies
      one operation, persists the snapshot
    - to_snapshot/from_snapshot keep the persisted shape in one place; missing
      keys fall back to defaults (forward-compatible)
"""

from dataclasses import dataclass, field

from melodyhub.core.domain_types import Track
from melodyhub.core.errors import EmptyQueueError, TrackIndexError


DEFAULT_VOLUME: float = 0.5


@dataclass
class PlayQueue:
    """Playlist and player state, the server-side mirror of the browser session."""

    tracks: list[Track] = field(default_factory=list)
    current_index: int = -1
    is_playing: bool = False
    volume: float = DEFAULT_VOLUME
    current_path: str = ""

    def __post_init__(self):
        self.volume = _clamp_volume(self.volume)
        if not -1 <= self.current_index < len(self.tracks):
            self.current_index = -1
            self.is_playing = False

    @property
    def current_track(self) -> Track | None:
        if self.current_index == -1:
            return None
        return self.tracks[self.current_index]

    def __len__(self) -> int:
        return len(self.tracks)

    # ─── Editing ─────────────────────────────────────────────────

    def add(self, tracks: list[Track]) -> int:
        self.tracks.extend(tracks)
        return len(tracks)

    def remove(self, index: int) -> Track:
        self._check_index(index)
        removed = self.tracks.pop(index)
        if index == self.current_index:
            self.current_index = -1
            self.is_playing = False
        elif index < self.current_index:
            self.current_index -= 1
        return removed

    def clear(self) -> None:
        self.tracks.clear()
        self.current_index = -1
        self.is_playing = False

    def move(self, src: int, dest: int) -> None:
        self._check_index(src)
        self._check_index(dest)
        if src == dest:
            return
        self.tracks.insert(dest, self.tracks.pop(src))

        cur = self.current_index
        if cur == src:
            self.current_index = dest
        elif src < cur <= dest:
            self.current_index = cur - 1
        elif dest <= cur < src:
            self.current_index = cur + 1

    # ─── Transport ───────────────────────────────────────────────

    def play(self) -> Track:
        """Play the current track, starting at the first when none is selected."""
        if not self.tracks:
            raise EmptyQueueError()
        if self.current_index == -1:
            self.current_index = 0
        self.is_playing = True
        return self.tracks[self.current_index]

    def pause(self) -> None:
        self.is_playing = False

    def select(self, index: int) -> Track:
        self._check_index(index)
        self.current_index = index
        return self.play()

    def next(self) -> Track | None:
        if not self.tracks:
            return None
        self.current_index = (self.current_index + 1) % len(self.tracks)
        return self.play()

    def previous(self) -> Track | None:
        if not self.tracks:
            return None
        self.current_index = (self.current_index - 1) % len(self.tracks)
        return self.play()

    def set_volume(self, volume: float) -> None:
        self.volume = _clamp_volume(volume)

    # ─── Persistence ─────────────────────────────────────────────

    def to_snapshot(self) -> dict:
        return {
            "tracks": [t.to_dict() for t in self.tracks],
            "current_index": self.current_index,
            "is_playing": self.is_playing,
            "volume": self.volume,
            "current_path": self.current_path,
        }

    @classmethod
    def from_snapshot(cls, data: dict) -> "PlayQueue":
        return cls(
            tracks=[Track.from_dict(t) for t in data.get("tracks", [])],
            current_index=data.get("current_index", -1),
            is_playing=data.get("is_playing", False),
            volume=data.get("volume", DEFAULT_VOLUME),
            current_path=data.get("current_path", ""),
        )

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.tracks):
            raise TrackIndexError(index, len(self.tracks))


def _clamp_volume(volume: float) -> float:
    return min(max(float(volume), 0.0), 1.0)
