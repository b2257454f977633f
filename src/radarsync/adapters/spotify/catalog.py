"""Spotify implementation of the playlist catalog port."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .translator import translate_album, translate_playlist, translate_tracks

if TYPE_CHECKING:
    from collections.abc import Sequence

    from radarsync.domain.model import Album, PlaylistSnapshot, Track

    from .client import SpotifyClient

log = getLogger(__name__)


class SpotifyCatalog:
    """Read and write playlists through a :class:`SpotifyClient`."""

    def __init__(self, client: SpotifyClient) -> None:
        self._client = client

    def playlist(self, playlist_id: str) -> PlaylistSnapshot:
        metadata = self._client.playlist(playlist_id)
        snapshot = translate_playlist(metadata, self._client.iter_playlist_items(playlist_id))
        log.debug(
            "Playlist %r (%s) has %s tracks at snapshot %s",
            snapshot.name,
            snapshot.id,
            len(snapshot.tracks),
            snapshot.snapshot_id,
        )
        return snapshot

    def albums(self, album_ids: Sequence[str]) -> list[Album]:
        albums: list[Album] = []
        for album in self._client.albums(album_ids):
            if not album.id:
                log.warning("Skipping album %r without an id", album.name)
                continue
            extra_track_ids: list[str] = []
            if album.tracks.next is not None:
                # albums embed only their first page of tracks
                extra_track_ids = [
                    track.id
                    for track in self._client.iter_album_tracks(
                        album.id, start=len(album.tracks.items)
                    )
                    if track.id
                ]
            albums.append(translate_album(album, extra_track_ids=extra_track_ids))
        return albums

    def tracks(self, track_ids: Sequence[str]) -> list[Track]:
        return translate_tracks(self._client.tracks(track_ids))

    def saved_tracks_contains(self, track_ids: Sequence[str]) -> list[bool]:
        return self._client.saved_tracks_contains(track_ids)

    def change_playlist_description(self, playlist_id: str, description: str) -> None:
        self._client.playlist_change_description(playlist_id, description)

    def replace_playlist_items(self, playlist_id: str, track_ids: Sequence[str]) -> None:
        self._client.playlist_replace_items(playlist_id, track_ids)

    def add_playlist_items(self, playlist_id: str, track_ids: Sequence[str]) -> None:
        self._client.playlist_add_items(playlist_id, track_ids)

    def remove_playlist_items(self, playlist_id: str, track_ids: Sequence[str]) -> None:
        self._client.playlist_remove_items(playlist_id, track_ids)
