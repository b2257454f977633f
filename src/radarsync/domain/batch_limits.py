"""Per-endpoint batch ceilings of the Spotify Web API and chunk planning.

Every call that carries a list of identifiers is bounded by the ceiling of its
endpoint. The table is pure data; :func:`plan_chunks` splits an identifier
sequence into ordered batches that respect one of those ceilings.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Final, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Sequence

T = TypeVar("T")


class BatchLimit(str, Enum):
    """Remote operation kinds that accept a bounded list of identifiers."""

    ALBUMS = "albums"
    ALBUM_TRACKS = "album_tracks"
    GET_SAVED_ALBUMS = "get_saved_albums"
    MODIFY_CURRENT_USER_ALBUMS = "modify_current_user_albums"
    NEW_RELEASES = "new_releases"
    ARTISTS = "artists"
    ARTIST_ALBUMS = "artist_albums"
    RECENTLY_PLAYED = "recently_played"
    PLAYLIST_ITEMS = "playlist_items"
    MODIFY_PLAYLIST_ITEMS = "modify_playlist_items"
    USER_PLAYLISTS = "user_playlists"
    SEARCH_ITEM = "search_item"
    TRACKS = "tracks"
    GET_SAVED_TRACKS = "get_saved_tracks"
    SAVED_TRACKS_CONTAINS = "saved_tracks_contains"
    MODIFY_CURRENT_USER_TRACKS = "modify_current_user_tracks"
    TRACKS_AUDIO_FEATURES = "tracks_audio_features"
    RECOMMENDATIONS = "recommendations"
    CURRENT_USER_TOP_ITEMS = "current_user_top_items"
    CURRENT_USER_FOLLOWED_ARTISTS = "current_user_followed_artists"
    MODIFY_WHO_CURRENT_USER_FOLLOWS = "modify_who_current_user_follows"
    CURRENT_USER_LISTING = "current_user_listing"


_LIMITS: Final[Mapping[BatchLimit, int]] = {
    BatchLimit.ALBUMS: 20,
    BatchLimit.ALBUM_TRACKS: 50,
    BatchLimit.GET_SAVED_ALBUMS: 50,
    # save, remove and check saved albums
    BatchLimit.MODIFY_CURRENT_USER_ALBUMS: 20,
    BatchLimit.NEW_RELEASES: 50,
    BatchLimit.ARTISTS: 50,
    BatchLimit.ARTIST_ALBUMS: 50,
    BatchLimit.RECENTLY_PLAYED: 50,
    BatchLimit.PLAYLIST_ITEMS: 50,
    # add, remove and reorder/replace playlist items
    BatchLimit.MODIFY_PLAYLIST_ITEMS: 100,
    BatchLimit.USER_PLAYLISTS: 50,
    BatchLimit.SEARCH_ITEM: 50,
    BatchLimit.TRACKS: 50,
    BatchLimit.GET_SAVED_TRACKS: 50,
    BatchLimit.SAVED_TRACKS_CONTAINS: 50,
    BatchLimit.MODIFY_CURRENT_USER_TRACKS: 50,
    BatchLimit.TRACKS_AUDIO_FEATURES: 100,
    BatchLimit.RECOMMENDATIONS: 100,
    BatchLimit.CURRENT_USER_TOP_ITEMS: 50,
    BatchLimit.CURRENT_USER_FOLLOWED_ARTISTS: 50,
    BatchLimit.MODIFY_WHO_CURRENT_USER_FOLLOWS: 50,
    BatchLimit.CURRENT_USER_LISTING: 50,
}


class UnknownBatchLimitError(ValueError):
    """Raised when a batch limit is requested for an operation kind that does not exist."""

    def __init__(self, kind: object) -> None:
        self.kind = kind
        super().__init__(f"Unknown batch operation kind: {kind!r}")


class BatchSizeError(ValueError):
    """Raised when a batch exceeds the ceiling of its operation kind."""

    def __init__(self, kind: BatchLimit, count: int) -> None:
        self.kind = kind
        self.count = count
        super().__init__(
            f"Batch of {count} identifiers exceeds the {kind.value} limit of {limit_for(kind)}"
        )


def _coerce(kind: BatchLimit | str) -> BatchLimit:
    if isinstance(kind, BatchLimit):
        return kind
    try:
        return BatchLimit(kind)
    except ValueError as exc:
        raise UnknownBatchLimitError(kind) from exc


def limit_for(kind: BatchLimit | str) -> int:
    """Return the maximum number of identifiers ``kind`` accepts per call."""

    return _LIMITS[_coerce(kind)]


def is_valid(kind: BatchLimit | str, count: int | None) -> bool:
    """Return whether ``count`` identifiers fit into a single ``kind`` call."""

    if count is None or count < 0:
        return False
    return count <= limit_for(kind)


def require_valid(kind: BatchLimit | str, count: int) -> None:
    """Raise :class:`BatchSizeError` when ``count`` does not fit into one call."""

    if not is_valid(kind, count):
        raise BatchSizeError(_coerce(kind), count)


@dataclass(frozen=True, slots=True)
class Chunk(Generic[T]):
    index: int
    items: tuple[T, ...]

    @property
    def is_first(self) -> bool:
        return self.index == 0

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True, slots=True)
class ChunkPlan(Generic[T]):
    """Ordered batches whose concatenation is the planned sequence."""

    chunks: tuple[Chunk[T], ...]
    size: int

    def __iter__(self) -> Iterator[Chunk[T]]:
        return iter(self.chunks)

    def __len__(self) -> int:
        return len(self.chunks)

    @property
    def total(self) -> int:
        return sum(len(chunk) for chunk in self.chunks)

    def flatten(self) -> list[T]:
        return [item for chunk in self.chunks for item in chunk.items]


def plan_chunks(items: Sequence[T], size: int) -> ChunkPlan[T]:
    """Split ``items`` into ``ceil(len(items) / size)`` ordered chunks."""

    if size < 1:
        raise ValueError(f"Chunk size must be positive, got {size}")
    count = math.ceil(len(items) / size)
    chunks = tuple(
        Chunk(index=index, items=tuple(items[index * size : (index + 1) * size]))
        for index in range(count)
    )
    return ChunkPlan(chunks=chunks, size=size)


def plan_chunks_for(
    items: Sequence[T],
    kind: BatchLimit | str,
    *,
    size: int | None = None,
) -> ChunkPlan[T]:
    """Plan chunks for ``kind``, using its ceiling unless a smaller ``size`` is given."""

    effective = limit_for(kind) if size is None else size
    require_valid(kind, effective)
    return plan_chunks(items, effective)
