"""PlayQueue ORM — persists one listener's playlist and player state.

Invariants:
    - id is UUID primary key (client keeps it, like a browser keeps localStorage)
    - tracks is a JSON list of {path, title, coverArt} dicts, in play order
    - current_index is -1 or a valid index into tracks
    - updated_at refreshed on every write

Design Decisions:
    - JSON column for tracks: the queue is always read and written whole,
      never queried per track
    - Generic Uuid type: same model runs on SQLite and PostgreSQL
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, DateTime, Float, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from melodyhub.core.play_queue import DEFAULT_VOLUME, PlayQueue
from melodyhub.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PlayQueueRecord(Base):
    """Persisted play queue."""
    __tablename__ = "play_queues"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(
        String(200), nullable=False, default="Playlist",
    )
    tracks: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    current_index: Mapped[int] = mapped_column(
        Integer, nullable=False, default=-1,
    )
    is_playing: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    volume: Mapped[float] = mapped_column(
        Float, nullable=False, default=DEFAULT_VOLUME,
    )
    current_path: Mapped[str] = mapped_column(
        String(1024), nullable=False, default="",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
        onupdate=_utcnow,
    )

    def to_domain(self) -> PlayQueue:
        return PlayQueue.from_snapshot({
            "tracks": self.tracks or [],
            "current_index": self.current_index,
            "is_playing": self.is_playing,
            "volume": self.volume,
            "current_path": self.current_path,
        })

    def apply(self, queue: PlayQueue) -> None:
        """Copy domain state back onto the row (new list so JSON change is tracked)."""
        snapshot = queue.to_snapshot()
        self.tracks = list(snapshot["tracks"])
        self.current_index = snapshot["current_index"]
        self.is_playing = snapshot["is_playing"]
        self.volume = snapshot["volume"]
        self.current_path = snapshot["current_path"]
