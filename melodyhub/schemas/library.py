"""Library Schemas — response shapes for browsing, playlists and recursive listings.

Invariants:
    - JSON keys match the browser client's contract (coverArt, not cover_art)
    - Optional keys are omitted from listings when unset (response_model_exclude_none)

Design Decisions:
    - serialization_alias over renaming fields: Python code stays snake_case
"""

from pydantic import BaseModel, ConfigDict, Field

from melodyhub.core.domain_types import EntryType


class _CamelOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class LibraryEntryOut(_CamelOut):
    name: str
    type: EntryType
    path: str
    extension: str | None = None
    cover_art: str | None = Field(None, serialization_alias="coverArt")


class DirectoryListingOut(_CamelOut):
    files: list[LibraryEntryOut]
    cover_art: str | None = Field(None, serialization_alias="coverArt")


class AudioFileOut(_CamelOut):
    name: str
    path: str
    extension: str
    cover_art: str | None = Field(None, serialization_alias="coverArt")


class AudioFilesOut(BaseModel):
    files: list[AudioFileOut]


class TrackOut(_CamelOut):
    path: str
    title: str
    cover_art: str | None = Field(None, serialization_alias="coverArt")


class PlaylistOut(BaseModel):
    files: list[TrackOut]
