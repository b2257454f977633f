from __future__ import annotations

import pytest

from radarsync.adapters.spotify.schema import (
    AlbumsResponse,
    PlaylistItemsPage,
    SpotifyPlaylist,
    SpotifyTrack,
    TracksResponse,
)
from radarsync.adapters.spotify.translator import (
    translate_album,
    translate_playlist,
    translate_playlist_items,
    translate_track,
    translate_tracks,
)
from radarsync.domain.model import AlbumRef, ArtistRef
from tests.adapters.spotify.conftest import load_fixture


def test_translate_track_keeps_identity_fields() -> None:
    payload = TracksResponse.model_validate(load_fixture("tracks_raw.json"))
    spotify_track = payload.tracks[0]
    assert spotify_track is not None

    track = translate_track(spotify_track)

    assert track is not None
    assert track.id == "x1"
    assert track.isrc == "GBAAA2400001"
    assert track.duration_ms == 201000
    assert track.artists == (
        ArtistRef(name="Nova", id="artist1"),
        ArtistRef(name="Guest", id="artist9"),
    )
    assert track.album == AlbumRef(name="Dawn", id="albumX")
    assert track.lead_artist == ArtistRef(name="Nova", id="artist1")


def test_translate_track_without_isrc_leaves_it_empty() -> None:
    payload = TracksResponse.model_validate(load_fixture("tracks_raw.json"))

    tracks = translate_tracks(track for track in payload.tracks if track is not None)

    assert [track.id for track in tracks] == ["x1", "x2"]
    assert tracks[1].isrc is None


def test_translate_track_skips_local_files() -> None:
    local = SpotifyTrack.model_validate(
        {"id": None, "name": "Home Recording", "is_local": True, "artists": []}
    )

    assert translate_track(local) is None


def test_playlist_items_skip_removed_tracks_episodes_and_local_files() -> None:
    first = PlaylistItemsPage.model_validate(load_fixture("playlist_items_page1_raw.json"))
    second = PlaylistItemsPage.model_validate(load_fixture("playlist_items_page2_raw.json"))

    tracks = translate_playlist_items([*first.items, *second.items])

    assert [track.id for track in tracks] == ["x1", "y1"]
    assert [track.album_id for track in tracks] == ["albumX", "albumY"]


def test_translate_playlist_builds_a_snapshot() -> None:
    playlist = SpotifyPlaylist.model_validate(load_fixture("playlist_raw.json"))
    page = PlaylistItemsPage.model_validate(load_fixture("playlist_items_page2_raw.json"))

    snapshot = translate_playlist(playlist, page.items)

    assert snapshot.id == "ref"
    assert snapshot.snapshot_id == "MTcsNmQ4"
    assert snapshot.track_ids == ("y1",)


def test_translate_album_appends_later_track_pages() -> None:
    payload = AlbumsResponse.model_validate(load_fixture("albums_raw.json"))
    album = payload.albums[0]
    assert album is not None

    translated = translate_album(album, extra_track_ids=["x3"])

    assert translated.id == "albumX"
    assert translated.track_ids == ("x1", "x2", "x3")


def test_translate_album_requires_an_id() -> None:
    payload = AlbumsResponse.model_validate({"albums": [{"id": None, "name": "Ghost"}]})
    album = payload.albums[0]
    assert album is not None

    with pytest.raises(ValueError, match="Ghost"):
        translate_album(album)
