"""Spotipy-based client wrapper for Spotify Web API."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, TypeVar

import spotipy
from pydantic import ValidationError
from requests.exceptions import RequestException
from spotipy.oauth2 import SpotifyOAuth

from radarsync.domain.batch_limits import BatchLimit, limit_for, require_valid
from radarsync.domain.pagination import Page, paginate
from radarsync.domain.ports.catalog import CatalogFetchError, CatalogWriteError

from .schema import (
    AlbumsResponse,
    FollowedArtistsResponse,
    PlaylistItemsPage,
    SavedTracksPage,
    SimplifiedTracksPage,
    SpotifyPlaylist,
    TracksResponse,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence

    from radarsync.config.spotify import SpotifyConfig

    from .schema import (
        PlaylistItem,
        SavedTrackItem,
        SpotifyAlbum,
        SpotifyArtist,
        SpotifySimplifiedTrack,
        SpotifyTrack,
    )

log = getLogger(__name__)

T = TypeVar("T")

PLAYLIST_FIELDS = "id,name,snapshot_id,description"


def build_spotipy_client(config: SpotifyConfig) -> spotipy.Spotify:
    auth_manager = SpotifyOAuth(
        client_id=config.client_id,
        client_secret=config.client_secret,
        redirect_uri=config.redirect_uri,
        scope=" ".join(config.scope),
        cache_path=config.cache_path,
    )
    retry = config.resilience.retry
    return spotipy.Spotify(
        auth_manager=auth_manager,
        requests_timeout=config.resilience.timeout_seconds,
        retries=retry.total,
        status_retries=retry.status_retries,
        status_forcelist=tuple(sorted(retry.status_forcelist)),
        backoff_factor=retry.backoff_factor,
    )


def _offset_page(items: Sequence[T], *, offset: int, has_next: bool) -> Page[T]:
    next_cursor = str(offset + len(items)) if has_next else None
    return Page(items=items, next_cursor=next_cursor)


class SpotifyClient:
    """Small wrapper around spotipy.Spotify for paging and batch helpers.

    Every remote failure surfaces as :class:`CatalogFetchError` or
    :class:`CatalogWriteError`, including connection drops and timeouts that
    spotipy lets through as ``requests`` exceptions. Malformed payloads count
    as fetch failures.
    """

    def __init__(self, *, config: SpotifyConfig, client: spotipy.Spotify | None = None) -> None:
        self._client = client if client is not None else build_spotipy_client(config)
        self._market = config.market

    def playlist(self, playlist_id: str) -> SpotifyPlaylist:
        return self._fetch(
            "playlist",
            playlist_id,
            lambda: SpotifyPlaylist.model_validate(
                self._client.playlist(playlist_id, fields=PLAYLIST_FIELDS, market=self._market)  # pyright: ignore[reportUnknownMemberType]
            ),
        )

    def iter_playlist_items(
        self,
        playlist_id: str,
        *,
        batch_size: int = limit_for(BatchLimit.PLAYLIST_ITEMS),
        max_items: int | None = None,
    ) -> Iterator[PlaylistItem]:
        require_valid(BatchLimit.PLAYLIST_ITEMS, batch_size)

        def fetch_page(cursor: str | None) -> Page[PlaylistItem]:
            offset = int(cursor) if cursor else 0
            payload = self._fetch(
                "playlist_items",
                playlist_id,
                lambda: PlaylistItemsPage.model_validate(
                    self._client.playlist_items(  # pyright: ignore[reportUnknownMemberType]
                        playlist_id, limit=batch_size, offset=offset, market=self._market
                    )
                ),
            )
            return _offset_page(payload.items, offset=offset, has_next=payload.next is not None)

        return paginate(fetch_page, max_items=max_items, description=f"playlist {playlist_id}")

    def albums(self, album_ids: Sequence[str]) -> list[SpotifyAlbum]:
        require_valid(BatchLimit.ALBUMS, len(album_ids))
        payload = self._fetch(
            "albums",
            ",".join(album_ids),
            lambda: AlbumsResponse.model_validate(
                self._client.albums(list(album_ids), market=self._market)  # pyright: ignore[reportUnknownMemberType]
            ),
        )
        albums = [album for album in payload.albums if album is not None]
        if len(albums) != len(album_ids):
            log.warning("Spotify returned %s of %s requested albums", len(albums), len(album_ids))
        return albums

    def iter_album_tracks(
        self,
        album_id: str,
        *,
        start: int = 0,
        batch_size: int = limit_for(BatchLimit.ALBUM_TRACKS),
    ) -> Iterator[SpotifySimplifiedTrack]:
        require_valid(BatchLimit.ALBUM_TRACKS, batch_size)

        def fetch_page(cursor: str | None) -> Page[SpotifySimplifiedTrack]:
            offset = int(cursor) if cursor else start
            payload = self._fetch(
                "album_tracks",
                album_id,
                lambda: SimplifiedTracksPage.model_validate(
                    self._client.album_tracks(  # pyright: ignore[reportUnknownMemberType]
                        album_id, limit=batch_size, offset=offset, market=self._market
                    )
                ),
            )
            return _offset_page(payload.items, offset=offset, has_next=payload.next is not None)

        return paginate(fetch_page, description=f"album {album_id}")

    def tracks(self, track_ids: Sequence[str]) -> list[SpotifyTrack]:
        require_valid(BatchLimit.TRACKS, len(track_ids))
        payload = self._fetch(
            "tracks",
            ",".join(track_ids),
            lambda: TracksResponse.model_validate(
                self._client.tracks(list(track_ids), market=self._market)  # pyright: ignore[reportUnknownMemberType]
            ),
        )
        tracks = [track for track in payload.tracks if track is not None]
        if len(tracks) != len(track_ids):
            log.warning("Spotify returned %s of %s requested tracks", len(tracks), len(track_ids))
        return tracks

    def saved_tracks_contains(self, track_ids: Sequence[str]) -> list[bool]:
        require_valid(BatchLimit.SAVED_TRACKS_CONTAINS, len(track_ids))
        flags = self._fetch(
            "saved_tracks_contains",
            ",".join(track_ids),
            lambda: self._client.current_user_saved_tracks_contains(list(track_ids)),  # pyright: ignore[reportUnknownMemberType]
        )
        return [bool(flag) for flag in flags]

    def iter_saved_tracks(
        self,
        *,
        batch_size: int = limit_for(BatchLimit.GET_SAVED_TRACKS),
        max_items: int | None = None,
    ) -> Iterator[SavedTrackItem]:
        require_valid(BatchLimit.GET_SAVED_TRACKS, batch_size)

        def fetch_page(cursor: str | None) -> Page[SavedTrackItem]:
            offset = int(cursor) if cursor else 0
            payload = self._fetch(
                "saved_tracks",
                None,
                lambda: SavedTracksPage.model_validate(
                    self._client.current_user_saved_tracks(  # pyright: ignore[reportUnknownMemberType]
                        limit=batch_size, offset=offset, market=self._market
                    )
                ),
            )
            return _offset_page(payload.items, offset=offset, has_next=payload.next is not None)

        return paginate(fetch_page, max_items=max_items, description="saved tracks")

    def iter_followed_artists(
        self,
        *,
        batch_size: int = limit_for(BatchLimit.CURRENT_USER_FOLLOWED_ARTISTS),
        max_items: int | None = None,
    ) -> Iterator[SpotifyArtist]:
        require_valid(BatchLimit.CURRENT_USER_FOLLOWED_ARTISTS, batch_size)

        def fetch_page(cursor: str | None) -> Page[SpotifyArtist]:
            payload = self._fetch(
                "followed_artists",
                None,
                lambda: FollowedArtistsResponse.model_validate(
                    self._client.current_user_followed_artists(limit=batch_size, after=cursor)  # pyright: ignore[reportUnknownMemberType]
                ),
            )
            artists = payload.artists
            after = artists.cursors.after if artists.cursors is not None else None
            return Page(items=artists.items, next_cursor=after)

        return paginate(fetch_page, max_items=max_items, description="followed artists")

    def playlist_change_description(self, playlist_id: str, description: str) -> None:
        self._write(
            "playlist_change_details",
            playlist_id,
            lambda: self._client.playlist_change_details(playlist_id, description=description),  # pyright: ignore[reportUnknownMemberType]
        )

    def playlist_replace_items(self, playlist_id: str, track_ids: Sequence[str]) -> None:
        require_valid(BatchLimit.MODIFY_PLAYLIST_ITEMS, len(track_ids))
        self._write(
            "playlist_replace_items",
            playlist_id,
            lambda: self._client.playlist_replace_items(playlist_id, list(track_ids)),  # pyright: ignore[reportUnknownMemberType]
        )

    def playlist_add_items(self, playlist_id: str, track_ids: Sequence[str]) -> None:
        require_valid(BatchLimit.MODIFY_PLAYLIST_ITEMS, len(track_ids))
        self._write(
            "playlist_add_items",
            playlist_id,
            lambda: self._client.playlist_add_items(playlist_id, list(track_ids)),  # pyright: ignore[reportUnknownMemberType]
        )

    def playlist_remove_items(self, playlist_id: str, track_ids: Sequence[str]) -> None:
        require_valid(BatchLimit.MODIFY_PLAYLIST_ITEMS, len(track_ids))
        self._write(
            "playlist_remove_all_occurrences_of_items",
            playlist_id,
            lambda: self._client.playlist_remove_all_occurrences_of_items(  # pyright: ignore[reportUnknownMemberType]
                playlist_id, list(track_ids)
            ),
        )

    def _fetch(self, operation: str, identifier: str | None, call: Callable[[], T]) -> T:
        try:
            return call()
        except spotipy.SpotifyException as exc:
            raise CatalogFetchError(
                f"Spotify {operation} failed with HTTP {exc.http_status}: {exc.msg}",
                operation=operation,
                identifier=identifier,
            ) from exc
        except RequestException as exc:
            raise CatalogFetchError(
                f"Spotify {operation} could not reach the API: {exc}",
                operation=operation,
                identifier=identifier,
            ) from exc
        except ValidationError as exc:
            raise CatalogFetchError(
                f"Spotify {operation} returned an unexpected payload: {exc}",
                operation=operation,
                identifier=identifier,
            ) from exc

    def _write(self, operation: str, identifier: str, call: Callable[[], object]) -> None:
        try:
            call()
        except spotipy.SpotifyException as exc:
            raise CatalogWriteError(
                f"Spotify {operation} failed with HTTP {exc.http_status}: {exc.msg}",
                operation=operation,
                identifier=identifier,
            ) from exc
        except RequestException as exc:
            raise CatalogWriteError(
                f"Spotify {operation} could not reach the API: {exc}",
                operation=operation,
                identifier=identifier,
            ) from exc
        log.debug("Spotify %s on %s succeeded", operation, identifier)
