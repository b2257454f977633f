"""Exclusion of tracks by blacklisted lead artist.

Only the first credited artist of a track is checked. Features and remix
credits of a blacklisted artist therefore stay in; a track led by one goes.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .model import ArtistRef, Track

log = getLogger(__name__)


@runtime_checkable
class BlacklistStore(Protocol):
    """Read-only membership check against a persisted artist blacklist."""

    def contains(self, artist: ArtistRef) -> bool: ...


def normalize_artist_name(name: str) -> str:
    """Case-fold ``name`` and strip diacritics so "Beyoncé" matches "beyonce"."""

    decomposed = unicodedata.normalize("NFD", name)
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return stripped.casefold().strip()


def _bare_artist_id(value: str) -> str:
    # spotify:artist:<id>
    return value.rsplit(":", 1)[-1] if value.startswith("spotify:") else value


@dataclass(frozen=True, slots=True)
class BlacklistArtist:
    name: str
    id: str | None = None

    def __post_init__(self) -> None:
        if self.id is not None:
            object.__setattr__(self, "id", _bare_artist_id(self.id.strip()) or None)


@dataclass(slots=True)
class InMemoryBlacklist:
    """Blacklist held in memory; matches by id when possible, else by name."""

    artists: set[BlacklistArtist] = field(default_factory=set["BlacklistArtist"])
    _ids: set[str] = field(init=False, repr=False, default_factory=set[str])
    _names: set[str] = field(init=False, repr=False, default_factory=set[str])
    _all_names: set[str] = field(init=False, repr=False, default_factory=set[str])

    def __post_init__(self) -> None:
        for artist in tuple(self.artists):
            self._index(artist)

    def _index(self, artist: BlacklistArtist) -> None:
        name = normalize_artist_name(artist.name)
        self._all_names.add(name)
        if artist.id:
            self._ids.add(artist.id)
        else:
            self._names.add(name)

    def contains(self, artist: ArtistRef) -> bool:
        name = normalize_artist_name(artist.name)
        if not artist.id:
            return name in self._all_names
        return _bare_artist_id(artist.id) in self._ids or name in self._names

    def __len__(self) -> int:
        return len(self.artists)


@dataclass(frozen=True, slots=True)
class BlacklistFilterResult:
    kept: tuple[Track, ...] = ()
    excluded: tuple[Track, ...] = ()


def is_blacklisted(track: Track, store: BlacklistStore) -> bool:
    lead = track.lead_artist
    if lead is None:
        return False
    return store.contains(lead)


def filter_blacklisted(tracks: Iterable[Track], store: BlacklistStore) -> BlacklistFilterResult:
    """Split ``tracks`` into kept and excluded, preserving input order."""

    kept: list[Track] = []
    excluded: list[Track] = []
    for track in tracks:
        if is_blacklisted(track, store):
            lead = track.lead_artist
            log.info(
                "Artist %r is blacklisted, skipping track %r (%s)",
                lead.name if lead else None,
                track.name,
                track.id,
            )
            excluded.append(track)
            continue
        kept.append(track)
    return BlacklistFilterResult(kept=tuple(kept), excluded=tuple(excluded))
