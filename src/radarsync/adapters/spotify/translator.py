"""Translate Spotify payloads into domain entities."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from radarsync.domain.model import Album, AlbumRef, ArtistRef, PlaylistSnapshot, Track

from .schema import SpotifyTrack

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .schema import (
        PlaylistItem,
        SpotifyAlbum,
        SpotifyArtist,
        SpotifyPlaylist,
        SpotifySimplifiedAlbum,
    )

log = getLogger(__name__)


def translate_artist(artist: SpotifyArtist) -> ArtistRef:
    return ArtistRef(name=artist.name, id=artist.id)


def translate_track(track: SpotifyTrack) -> Track | None:
    """Return the domain track, or ``None`` for local files without a catalog id."""

    if track.is_local or not track.id:
        log.debug("Skipping local track %r", track.name)
        return None
    return Track(
        id=track.id,
        name=track.name,
        artists=tuple(translate_artist(artist) for artist in track.artists),
        album=_build_album_ref(track.album),
        duration_ms=track.duration_ms,
        isrc=track.external_ids.get("isrc"),
    )


def translate_tracks(tracks: Iterable[SpotifyTrack]) -> list[Track]:
    translated = (translate_track(track) for track in tracks)
    return [track for track in translated if track is not None]


def translate_playlist_items(items: Iterable[PlaylistItem]) -> list[Track]:
    """Translate playlist entries, dropping removed tracks, episodes and local files."""

    tracks: list[Track] = []
    for item in items:
        if item.track is None:
            log.debug("Skipping playlist entry without a track")
            continue
        if not isinstance(item.track, SpotifyTrack):
            log.debug("Skipping episode %r", item.track.name)
            continue
        track = translate_track(item.track)
        if track is not None:
            tracks.append(track)
    return tracks


def translate_playlist(
    playlist: SpotifyPlaylist,
    items: Iterable[PlaylistItem],
) -> PlaylistSnapshot:
    return PlaylistSnapshot(
        id=playlist.id,
        name=playlist.name,
        snapshot_id=playlist.snapshot_id,
        tracks=tuple(translate_playlist_items(items)),
    )


def translate_album(album: SpotifyAlbum, *, extra_track_ids: Iterable[str] = ()) -> Album:
    """Build an album from its first embedded track page plus any later pages."""

    if not album.id:
        raise ValueError(f"Album {album.name!r} has no id")
    track_ids = [track.id for track in album.tracks.items if track.id]
    track_ids.extend(extra_track_ids)
    return Album(id=album.id, name=album.name, track_ids=tuple(track_ids))


def _build_album_ref(album: SpotifySimplifiedAlbum | None) -> AlbumRef | None:
    if album is None:
        return None
    return AlbumRef(name=album.name, id=album.id)
