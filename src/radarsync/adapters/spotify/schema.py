"""Minimal Pydantic models for the Spotify Web API."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class SpotifyBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class SpotifyArtist(SpotifyBaseModel):
    id: str | None = None
    name: str


class SpotifyPage(SpotifyBaseModel):
    href: str | None = None
    limit: int | None = None
    next: str | None = None
    offset: int | None = None
    previous: str | None = None
    total: int | None = None


class SpotifySimplifiedAlbum(SpotifyBaseModel):
    id: str | None = None
    name: str
    release_date: str | None = None
    artists: list[SpotifyArtist] = Field(default_factory=list["SpotifyArtist"])


class SpotifySimplifiedTrack(SpotifyBaseModel):
    id: str | None = None
    name: str
    duration_ms: int | None = None
    artists: list[SpotifyArtist] = Field(default_factory=list["SpotifyArtist"])


class SimplifiedTracksPage(SpotifyPage):
    items: list[SpotifySimplifiedTrack] = Field(default_factory=list["SpotifySimplifiedTrack"])


class SpotifyAlbum(SpotifySimplifiedAlbum):
    external_ids: dict[str, str] = Field(default_factory=dict)
    tracks: SimplifiedTracksPage = Field(default_factory=SimplifiedTracksPage)


class SpotifyTrack(SpotifyBaseModel):
    type: Literal["track"] = "track"
    id: str | None = None
    name: str
    duration_ms: int | None = None
    is_local: bool = False
    album: SpotifySimplifiedAlbum | None = None
    artists: list[SpotifyArtist] = Field(default_factory=list["SpotifyArtist"])
    external_ids: dict[str, str] = Field(default_factory=dict)


class SpotifyEpisode(SpotifyBaseModel):
    type: Literal["episode"]
    id: str | None = None
    name: str


class PlaylistItem(SpotifyBaseModel):
    added_at: datetime | None = None
    track: SpotifyTrack | SpotifyEpisode | None = None


class PlaylistItemsPage(SpotifyPage):
    items: list[PlaylistItem] = Field(default_factory=list["PlaylistItem"])


class SpotifyPlaylist(SpotifyBaseModel):
    id: str
    name: str
    snapshot_id: str | None = None
    description: str | None = None


class AlbumsResponse(SpotifyBaseModel):
    albums: list[SpotifyAlbum | None] = Field(default_factory=list["SpotifyAlbum | None"])


class TracksResponse(SpotifyBaseModel):
    tracks: list[SpotifyTrack | None] = Field(default_factory=list["SpotifyTrack | None"])


class SavedTrackItem(SpotifyBaseModel):
    added_at: datetime | None = None
    track: SpotifyTrack


class SavedTracksPage(SpotifyPage):
    items: list[SavedTrackItem] = Field(default_factory=list["SavedTrackItem"])


class SpotifyCursor(SpotifyBaseModel):
    after: str | None = None
    before: str | None = None


class FollowedArtistsPage(SpotifyBaseModel):
    href: str | None = None
    limit: int | None = None
    next: str | None = None
    total: int | None = None
    cursors: SpotifyCursor | None = None
    items: list[SpotifyArtist] = Field(default_factory=list["SpotifyArtist"])


class FollowedArtistsResponse(SpotifyBaseModel):
    artists: FollowedArtistsPage
