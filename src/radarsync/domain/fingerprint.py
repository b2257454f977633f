"""Content-identity fingerprints for tracks.

Catalog duplicates (remasters, regional re-releases, single and album
versions) get different provider ids but describe the same recording. A
fingerprint keys a track on its ISRC, its credited artists and its duration
in whole seconds; the title is carried for display only because it varies
cosmetically between releases ("(Remastered)", "- Radio Edit", ...).

When a track carries no ISRC the normalised title stands in as the identity
anchor, so two catalog-code-less tracks only collide when artists, duration
and normalised title all agree.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from .model import Track

log = getLogger(__name__)

_FEATURING = re.compile(r"\s*[(\[]?\s*(?:feat\.|featuring)\s.+?(?:[)\]]|$)", re.IGNORECASE)
_REMASTER_MARKER = re.compile(r"\s*[(\[][^)\]]*remaster[^)\]]*[)\]]", re.IGNORECASE)
_SUFFIXES = (" - radio edit", " - remastered")
_WHITESPACE = re.compile(r"\s+")


def normalize_title(title: str) -> str:
    normalized = _FEATURING.sub("", title.lower())
    normalized = _REMASTER_MARKER.sub("", normalized)
    for suffix in _SUFFIXES:
        normalized = normalized.replace(suffix, "")
    return _WHITESPACE.sub(" ", normalized.strip())


@dataclass(frozen=True, slots=True, eq=False)
class TrackFingerprint:
    catalog_code: str | None
    normalized_title: str
    base_artist_names: tuple[str, ...]
    duration_bucket_seconds: int
    source_track_id: str

    @property
    def identity(self) -> tuple[str, str, tuple[str, ...], int]:
        if self.catalog_code is not None:
            anchor = ("isrc", self.catalog_code)
        else:
            anchor = ("title", self.normalized_title)
        return (*anchor, self.base_artist_names, self.duration_bucket_seconds)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TrackFingerprint):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self) -> int:
        return hash(self.identity)


def fingerprint_of(track: Track) -> TrackFingerprint:
    catalog_code = track.isrc.strip().upper() if track.isrc and track.isrc.strip() else None
    if catalog_code is None:
        log.debug("Track %s has no ISRC, falling back to its title for identity", track.id)
    return TrackFingerprint(
        catalog_code=catalog_code,
        normalized_title=normalize_title(track.name),
        base_artist_names=tuple(artist.name.lower() for artist in track.artists),
        duration_bucket_seconds=(track.duration_ms or 0) // 1000,
        source_track_id=track.id,
    )


@dataclass(frozen=True, slots=True)
class FingerprintCollection:
    """Fingerprints of one track list split into first occurrences and repeats.

    ``full`` keeps every fingerprint in input order. Each entry of ``full`` is
    either the first one seen for its identity (``distinct``) or a later
    collision with it (``duplicates``), never both.
    """

    full: tuple[TrackFingerprint, ...] = ()
    distinct: tuple[TrackFingerprint, ...] = ()
    duplicates: tuple[TrackFingerprint, ...] = ()
    _first_by_identity: dict[TrackFingerprint, TrackFingerprint] = field(
        default_factory=dict["TrackFingerprint", "TrackFingerprint"], repr=False, compare=False
    )

    def __contains__(self, fingerprint: object) -> bool:
        return fingerprint in self._first_by_identity

    def __len__(self) -> int:
        return len(self.full)

    def __iter__(self) -> Iterator[TrackFingerprint]:
        return iter(self.full)

    def first_occurrence(self, fingerprint: TrackFingerprint) -> TrackFingerprint | None:
        return self._first_by_identity.get(fingerprint)

    @property
    def distinct_track_ids(self) -> tuple[str, ...]:
        return tuple(fingerprint.source_track_id for fingerprint in self.distinct)

    @property
    def duplicate_track_ids(self) -> tuple[str, ...]:
        return tuple(fingerprint.source_track_id for fingerprint in self.duplicates)


def classify(tracks: Iterable[Track]) -> FingerprintCollection:
    full: list[TrackFingerprint] = []
    distinct: list[TrackFingerprint] = []
    duplicates: list[TrackFingerprint] = []
    first_by_identity: dict[TrackFingerprint, TrackFingerprint] = {}

    for track in tracks:
        fingerprint = fingerprint_of(track)
        full.append(fingerprint)
        if fingerprint in first_by_identity:
            duplicates.append(fingerprint)
            continue
        first_by_identity[fingerprint] = fingerprint
        distinct.append(fingerprint)

    return FingerprintCollection(
        full=tuple(full),
        distinct=tuple(distinct),
        duplicates=tuple(duplicates),
        _first_by_identity=first_by_identity,
    )


def insert(collection: FingerprintCollection, track: Track) -> tuple[FingerprintCollection, bool]:
    """Return ``collection`` extended by ``track`` and whether its identity was new."""

    fingerprint = fingerprint_of(track)
    full = (*collection.full, fingerprint)
    if fingerprint in collection:
        updated = FingerprintCollection(
            full=full,
            distinct=collection.distinct,
            duplicates=(*collection.duplicates, fingerprint),
            _first_by_identity=collection._first_by_identity,  # noqa: SLF001
        )
        return updated, False

    first_by_identity = dict(collection._first_by_identity)  # noqa: SLF001
    first_by_identity[fingerprint] = fingerprint
    updated = FingerprintCollection(
        full=full,
        distinct=(*collection.distinct, fingerprint),
        duplicates=collection.duplicates,
        _first_by_identity=first_by_identity,
    )
    return updated, True


def missing_from(
    reference: FingerprintCollection,
    other: FingerprintCollection,
) -> list[TrackFingerprint]:
    """Return fingerprints of ``reference.distinct`` whose identity ``other`` lacks."""

    return [fingerprint for fingerprint in reference.distinct if fingerprint not in other]
