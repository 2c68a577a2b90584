"""Queue Schemas — Pydantic models with field-level validation for play queue endpoints.

Invariants:
    - AddTracksRequest carries exactly one source (tracks, directory, playlist or file)
    - Volume bounded to [0.0, 1.0] at the boundary (PlayQueue clamps again)
    - Track paths are non-empty and stripped

Design Decisions:
    - model_validator for the one-source rule: Pydantic reports it as a 400
      VALIDATION_ERROR before any filesystem access
"""

from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from melodyhub.schemas.library import TrackOut


class TrackIn(BaseModel):
    """Explicit track supplied by the client."""
    path: str = Field(min_length=1, max_length=4096)
    title: str | None = Field(None, max_length=500)
    cover_art: str | None = Field(None, alias="coverArt", max_length=4096)

    model_config = {"populate_by_name": True}

    @field_validator("path")
    @classmethod
    def strip_path(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("path cannot be empty or whitespace")
        return v


class QueueCreate(BaseModel):
    name: str = Field("Playlist", min_length=1, max_length=200)
    volume: float = Field(0.5, ge=0.0, le=1.0)


class QueueUpdate(BaseModel):
    """Partial update of listener settings."""
    name: str | None = Field(None, min_length=1, max_length=200)
    volume: float | None = Field(None, ge=0.0, le=1.0)
    current_path: str | None = Field(None, max_length=1024)


class AddTracksRequest(BaseModel):
    tracks: list[TrackIn] | None = None
    directory: str | None = None
    playlist: str | None = None
    file: str | None = None

    @model_validator(mode="after")
    def exactly_one_source(self):
        sources = [
            s for s in (self.tracks, self.directory, self.playlist, self.file)
            if s is not None
        ]
        if len(sources) != 1:
            raise ValueError(
                "provide exactly one of: tracks, directory, playlist, file",
            )
        return self


class MoveRequest(BaseModel):
    src: int = Field(ge=0)
    dest: int = Field(ge=0)


class ImportRequest(BaseModel):
    content: str = Field(max_length=10_000_000)


class QueueResponse(BaseModel):
    id: UUID
    name: str
    tracks: list[TrackOut]
    current_index: int
    current_track: TrackOut | None = None
    is_playing: bool
    volume: float
    current_path: str


class QueueChange(BaseModel):
    """Result of an edit: the new queue plus what changed."""
    queue: QueueResponse
    added: int = 0
    message: str
