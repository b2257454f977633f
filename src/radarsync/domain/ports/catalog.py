"""Port for the remote music catalog and playlist service."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from radarsync.domain.model import Album, PlaylistSnapshot, Track


class CatalogError(RuntimeError):
    """Raised when a call to the remote catalog fails."""

    def __init__(self, message: str, *, operation: str, identifier: str | None = None) -> None:
        self.operation = operation
        self.identifier = identifier
        super().__init__(message)


class CatalogFetchError(CatalogError):
    """Raised when a listing or batch read fails."""


class CatalogWriteError(CatalogError):
    """Raised when a playlist mutation fails."""


@runtime_checkable
class PlaylistCatalog(Protocol):
    """Reads and writes the reconciler needs from the remote service.

    Batch methods accept at most the ceiling of their endpoint (see
    :mod:`radarsync.domain.batch_limits`); splitting is the caller's job.
    """

    def playlist(self, playlist_id: str) -> PlaylistSnapshot: ...

    def albums(self, album_ids: Sequence[str]) -> list[Album]: ...

    def tracks(self, track_ids: Sequence[str]) -> list[Track]: ...

    def saved_tracks_contains(self, track_ids: Sequence[str]) -> list[bool]: ...

    def change_playlist_description(self, playlist_id: str, description: str) -> None: ...

    def replace_playlist_items(self, playlist_id: str, track_ids: Sequence[str]) -> None: ...

    def add_playlist_items(self, playlist_id: str, track_ids: Sequence[str]) -> None: ...

    def remove_playlist_items(self, playlist_id: str, track_ids: Sequence[str]) -> None: ...
