"""Shared fixtures for Spotify adapter tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import pytest

from radarsync.adapters.spotify.catalog import SpotifyCatalog
from radarsync.adapters.spotify.client import SpotifyClient
from radarsync.config.spotify import SpotifyConfig

if TYPE_CHECKING:
    import spotipy

SpotifyPayload = dict[str, Any]
FIXTURES = Path(__file__).resolve().parents[2] / "data" / "spotify"


def load_fixture(name: str) -> SpotifyPayload:
    return json.loads((FIXTURES / name).read_text(encoding="utf-8"))


class FakeSpotipyClient:
    """Serves captured payloads and records every call by spotipy method name."""

    def __init__(self) -> None:
        self.playlist_payload = load_fixture("playlist_raw.json")
        self.playlist_pages = {
            0: load_fixture("playlist_items_page1_raw.json"),
            4: load_fixture("playlist_items_page2_raw.json"),
        }
        self.albums_payload = load_fixture("albums_raw.json")
        self.album_tracks_payload = load_fixture("album_tracks_raw.json")
        self.tracks_payload = load_fixture("tracks_raw.json")
        self.saved_tracks_payload = load_fixture("saved_tracks_raw.json")
        self.followed_artists_payload = load_fixture("followed_artists_raw.json")
        self.saved_ids = {"x1"}
        self.calls: list[tuple[str, dict[str, object]]] = []
        self.errors: dict[str, Exception] = {}

    def _record(self, method: str, **kwargs: object) -> None:
        self.calls.append((method, kwargs))
        if method in self.errors:
            raise self.errors[method]

    def called(self, method: str) -> list[dict[str, object]]:
        return [kwargs for name, kwargs in self.calls if name == method]

    def playlist(
        self, playlist_id: str, fields: str | None = None, market: str | None = None
    ) -> SpotifyPayload:
        self._record("playlist", playlist_id=playlist_id, fields=fields, market=market)
        return self.playlist_payload

    def playlist_items(
        self, playlist_id: str, *, limit: int, offset: int, market: str | None = None
    ) -> SpotifyPayload:
        self._record("playlist_items", playlist_id=playlist_id, limit=limit, offset=offset)
        return self.playlist_pages[offset]

    def albums(self, albums: list[str], market: str | None = None) -> SpotifyPayload:
        self._record("albums", albums=albums, market=market)
        return self.albums_payload

    def album_tracks(
        self, album_id: str, *, limit: int, offset: int, market: str | None = None
    ) -> SpotifyPayload:
        self._record("album_tracks", album_id=album_id, limit=limit, offset=offset)
        return self.album_tracks_payload

    def tracks(self, tracks: list[str], market: str | None = None) -> SpotifyPayload:
        self._record("tracks", tracks=tracks, market=market)
        return self.tracks_payload

    def current_user_saved_tracks_contains(self, tracks: list[str]) -> list[bool]:
        self._record("current_user_saved_tracks_contains", tracks=tracks)
        return [track_id in self.saved_ids for track_id in tracks]

    def current_user_saved_tracks(
        self, *, limit: int, offset: int, market: str | None = None
    ) -> SpotifyPayload:
        self._record("current_user_saved_tracks", limit=limit, offset=offset)
        return self.saved_tracks_payload

    def current_user_followed_artists(
        self, *, limit: int, after: str | None = None
    ) -> SpotifyPayload:
        self._record("current_user_followed_artists", limit=limit, after=after)
        return self.followed_artists_payload

    def playlist_change_details(self, playlist_id: str, *, description: str) -> None:
        self._record("playlist_change_details", playlist_id=playlist_id, description=description)

    def playlist_replace_items(self, playlist_id: str, items: list[str]) -> SpotifyPayload:
        self._record("playlist_replace_items", playlist_id=playlist_id, items=items)
        return {"snapshot_id": "next"}

    def playlist_add_items(self, playlist_id: str, items: list[str]) -> SpotifyPayload:
        self._record("playlist_add_items", playlist_id=playlist_id, items=items)
        return {"snapshot_id": "next"}

    def playlist_remove_all_occurrences_of_items(
        self, playlist_id: str, items: list[str]
    ) -> SpotifyPayload:
        self._record(
            "playlist_remove_all_occurrences_of_items", playlist_id=playlist_id, items=items
        )
        return {"snapshot_id": "next"}


@pytest.fixture
def fake_spotify_client() -> FakeSpotipyClient:
    return FakeSpotipyClient()


@pytest.fixture
def spotify_config() -> SpotifyConfig:
    return SpotifyConfig(
        client_id="x",
        client_secret="y",  # noqa: S106
        redirect_uri="http://localhost",
        market="DE",
    )


@pytest.fixture
def spotipy_client(
    spotify_config: SpotifyConfig, fake_spotify_client: FakeSpotipyClient
) -> SpotifyClient:
    return SpotifyClient(
        config=spotify_config, client=cast("spotipy.Spotify", fake_spotify_client)
    )


@pytest.fixture
def spotify_catalog(spotipy_client: SpotifyClient) -> SpotifyCatalog:
    return SpotifyCatalog(spotipy_client)
