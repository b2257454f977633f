"""Drive a durable playlist toward the album-expanded content of a reference playlist.

One :meth:`PlaylistReconciler.reconcile` call walks these phases in order::

    RESOLVING_COLLECTIONS -> EXPANDING_ALBUMS -> FILTERING -> DIFFING
        -> WRITING_CHUNKS -> WIPING_SOURCE -> DONE

and ends in ``FAILED`` when any of them raises. The first write chunk replaces
the whole target playlist, every later chunk appends, so a failed run is
repaired by simply running again. Nothing is rolled back: a failure leaves the
target as the last successful chunk left it.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from enum import Enum
from logging import getLogger
from typing import TYPE_CHECKING, TypeVar

from radarsync.config.errors import ConfigurationError, InvalidIdentifierError

from .batch_limits import BatchLimit, Chunk, limit_for, plan_chunks_for, require_valid
from .blacklist import filter_blacklisted
from .fingerprint import classify, missing_from
from .model import parse_spotify_id
from .ports.catalog import CatalogError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .blacklist import BlacklistStore
    from .model import PlaylistSnapshot, Track
    from .ports.catalog import PlaylistCatalog
    from .ports.runtime import CancellationSignal, ConfigProvider

log = getLogger(__name__)

T = TypeVar("T")

DEFAULT_DESCRIPTION_TEMPLATE = (
    "Release Radar playlist with songs from albums included. Updated on {date}."
)
DESCRIPTION_DATE_FORMAT = "%m/%d/%Y"

# OSError covers transport failures (connection drops, timeouts) a catalog lets through
REMOTE_ERRORS: tuple[type[Exception], ...] = (CatalogError, OSError)


class ReconciliationPhase(str, Enum):
    RESOLVING_COLLECTIONS = "resolving_collections"
    EXPANDING_ALBUMS = "expanding_albums"
    FILTERING = "filtering"
    DIFFING = "diffing"
    WRITING_CHUNKS = "writing_chunks"
    WIPING_SOURCE = "wiping_source"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class ReconciliationRequest:
    reference_playlist_id: str
    target_playlist_id: str
    allow_duplicates: bool = False
    wipe_reference: bool = True


@dataclass(frozen=True, slots=True)
class ReconciliationResult:
    """Summary of a completed run."""

    reference_playlist_id: str
    target_playlist_id: str
    reference_tracks: int
    candidates: int
    blacklisted: int
    duplicates_dropped: int
    missing_from_target: int
    chunks_written: int
    wiped: int
    track_ids: tuple[str, ...]
    phase: ReconciliationPhase = ReconciliationPhase.DONE

    @property
    def retained(self) -> int:
        return len(self.track_ids)


class ReconciliationError(RuntimeError):
    """Raised when a run fails; ``phase`` names the phase that failed."""

    def __init__(
        self,
        message: str,
        *,
        phase: ReconciliationPhase,
        identifier: str | None = None,
    ) -> None:
        self.phase = phase
        self.identifier = identifier
        super().__init__(f"[{phase.value}] {message}")


class ReconciliationFetchError(ReconciliationError):
    """Raised when reading a playlist, album or track batch fails."""


class ReconciliationWriteError(ReconciliationError):
    """Raised when a playlist mutation fails part way through a chunk plan."""

    def __init__(
        self,
        message: str,
        *,
        phase: ReconciliationPhase,
        identifier: str | None = None,
        chunk_index: int,
    ) -> None:
        self.chunk_index = chunk_index
        super().__init__(message, phase=phase, identifier=identifier)


class ReconciliationCancelled(ReconciliationError):
    """Raised when the caller's cancellation signal is set between two batches."""


class UnsafeTargetError(ConfigurationError):
    """Raised when a run would write to a playlist it must never write to."""

    def __init__(self, message: str, *, playlist_id: str) -> None:
        self.playlist_id = playlist_id
        self.phase = ReconciliationPhase.RESOLVING_COLLECTIONS
        super().__init__(message)


class StockPlaylistTargetError(UnsafeTargetError):
    """Raised when the target is the externally curated stock playlist."""

    def __init__(self, playlist_id: str) -> None:
        super().__init__(
            f"Refusing to write to the stock playlist {playlist_id}; "
            "configure your own playlist as the target instead",
            playlist_id=playlist_id,
        )


class SameReferenceAndTargetError(UnsafeTargetError):
    """Raised when reference and target are one playlist; the wipe would empty the target."""

    def __init__(self, playlist_id: str) -> None:
        super().__init__(
            f"Reference and target playlist are both {playlist_id}",
            playlist_id=playlist_id,
        )


def normalize_playlist_id(value: str, *, role: str) -> str:
    try:
        return parse_spotify_id(value, "playlist")
    except ValueError as exc:
        raise InvalidIdentifierError(f"{role} playlist id", value, str(exc)) from exc


def render_description(template: str, today: date) -> str:
    return template.format(date=today.strftime(DESCRIPTION_DATE_FORMAT))


class PlaylistReconciler:
    """Rebuild a target playlist from the albums behind a reference playlist."""

    def __init__(
        self,
        *,
        catalog: PlaylistCatalog,
        blacklist: BlacklistStore,
        config: ConfigProvider,
        write_batch_size: int | None = None,
        clock: Callable[[], date] = date.today,
        description_template: str = DEFAULT_DESCRIPTION_TEMPLATE,
    ) -> None:
        if write_batch_size is not None:
            if write_batch_size < 1:
                raise ValueError(f"write_batch_size must be positive, got {write_batch_size}")
            require_valid(BatchLimit.MODIFY_PLAYLIST_ITEMS, write_batch_size)
        self._catalog = catalog
        self._blacklist = blacklist
        self._config = config
        self._write_batch_size = write_batch_size or limit_for(BatchLimit.MODIFY_PLAYLIST_ITEMS)
        self._clock = clock
        self._description_template = description_template
        self.phase: ReconciliationPhase | None = None
        self.failed_phase: ReconciliationPhase | None = None

    def reconcile(
        self,
        request: ReconciliationRequest,
        *,
        cancel: CancellationSignal | None = None,
    ) -> ReconciliationResult:
        try:
            return self._run(request, cancel=cancel)
        except (ReconciliationError, ConfigurationError) as exc:
            log.error("Reconciliation failed during %s: %s", self._fail().value, exc)
            raise
        except Exception:
            log.exception("Reconciliation failed unexpectedly during %s", self._fail().value)
            raise

    def _fail(self) -> ReconciliationPhase:
        failed = self._current_phase()
        self.failed_phase = failed
        self.phase = ReconciliationPhase.FAILED
        return failed

    def _run(
        self,
        request: ReconciliationRequest,
        *,
        cancel: CancellationSignal | None,
    ) -> ReconciliationResult:
        self.failed_phase = None
        self._enter(ReconciliationPhase.RESOLVING_COLLECTIONS)
        reference_id = normalize_playlist_id(request.reference_playlist_id, role="reference")
        target_id = normalize_playlist_id(request.target_playlist_id, role="target")
        stock_id = normalize_playlist_id(self._config.stock_playlist_id, role="stock")

        reference = self._fetch_playlist(reference_id)
        target = self._fetch_playlist(target_id)
        self._guard_target(reference_id=reference_id, target_id=target_id, stock_id=stock_id)
        log.info(
            "Reference %r has %s tracks, target %r has %s tracks",
            reference.name,
            len(reference.tracks),
            target.name,
            len(target.tracks),
        )

        self._enter(ReconciliationPhase.EXPANDING_ALBUMS)
        album_ids = album_ids_of(reference.tracks)
        candidates = self._expand_albums(album_ids, cancel=cancel)
        log.info("Expanded %s albums into %s candidate tracks", len(album_ids), len(candidates))

        self._enter(ReconciliationPhase.FILTERING)
        filtered = filter_blacklisted(candidates, self._blacklist)

        self._enter(ReconciliationPhase.DIFFING)
        fingerprints = classify(filtered.kept)
        if request.allow_duplicates:
            track_ids = tuple(track.id for track in filtered.kept)
            duplicates_dropped = 0
        else:
            track_ids = fingerprints.distinct_track_ids
            duplicates_dropped = len(fingerprints.duplicates)
            for duplicate in fingerprints.duplicates:
                first = fingerprints.first_occurrence(duplicate)
                log.debug(
                    "Dropping %s (%r), same recording as %s",
                    duplicate.source_track_id,
                    duplicate.normalized_title,
                    first.source_track_id if first else None,
                )
        missing = missing_from(fingerprints, classify(target.tracks))
        log.info(
            "Retaining %s tracks (%s duplicates dropped), %s not yet in the target",
            len(track_ids),
            duplicates_dropped,
            len(missing),
        )

        self._enter(ReconciliationPhase.WRITING_CHUNKS)
        chunks_written = self._write(target_id, track_ids, cancel=cancel)

        self._enter(ReconciliationPhase.WIPING_SOURCE)
        wiped = self._wipe(
            reference,
            reference_id=reference_id,
            stock_id=stock_id,
            enabled=request.wipe_reference,
            cancel=cancel,
        )

        self._enter(ReconciliationPhase.DONE)
        return ReconciliationResult(
            reference_playlist_id=reference_id,
            target_playlist_id=target_id,
            reference_tracks=len(reference.tracks),
            candidates=len(candidates),
            blacklisted=len(filtered.excluded),
            duplicates_dropped=duplicates_dropped,
            missing_from_target=len(missing),
            chunks_written=chunks_written,
            wiped=wiped,
            track_ids=track_ids,
        )

    def _enter(self, phase: ReconciliationPhase) -> None:
        self.phase = phase
        log.info("Reconciliation phase: %s", phase.value)

    def _check_cancel(self, cancel: CancellationSignal | None) -> None:
        if cancel is not None and cancel.is_set():
            raise ReconciliationCancelled("Cancelled by caller", phase=self._current_phase())

    def _current_phase(self) -> ReconciliationPhase:
        return self.phase or ReconciliationPhase.RESOLVING_COLLECTIONS

    def _fetch_playlist(self, playlist_id: str) -> PlaylistSnapshot:
        try:
            return self._catalog.playlist(playlist_id)
        except REMOTE_ERRORS as exc:
            raise ReconciliationFetchError(
                f"Could not retrieve playlist {playlist_id}: {exc}",
                phase=self._current_phase(),
                identifier=playlist_id,
            ) from exc

    def _guard_target(self, *, reference_id: str, target_id: str, stock_id: str) -> None:
        if target_id == stock_id:
            log.error("The stock playlist id was used as the target: %s", target_id)
            raise StockPlaylistTargetError(target_id)
        if target_id == reference_id:
            raise SameReferenceAndTargetError(target_id)

    def _expand_albums(
        self,
        album_ids: Sequence[str],
        *,
        cancel: CancellationSignal | None,
    ) -> list[Track]:
        album_plan = plan_chunks_for(album_ids, BatchLimit.ALBUMS)
        track_ids: dict[str, None] = {}
        for chunk in album_plan:
            self._check_cancel(cancel)
            log.debug("Reading album chunk %s/%s", chunk.index + 1, len(album_plan))
            for album in self._read(self._catalog.albums, chunk, what="albums"):
                track_ids.update(dict.fromkeys(album.track_ids))

        track_plan = plan_chunks_for(list(track_ids), BatchLimit.TRACKS)
        tracks: list[Track] = []
        for chunk in track_plan:
            self._check_cancel(cancel)
            log.debug("Reading track chunk %s/%s", chunk.index + 1, len(track_plan))
            tracks.extend(self._read(self._catalog.tracks, chunk, what="tracks"))
        return tracks

    def _read(
        self,
        read: Callable[[Sequence[str]], list[T]],
        chunk: Chunk[str],
        *,
        what: str,
    ) -> list[T]:
        try:
            return read(chunk.items)
        except REMOTE_ERRORS as exc:
            raise ReconciliationFetchError(
                f"Could not read {what} chunk {chunk.index + 1}: {exc}",
                phase=self._current_phase(),
                identifier=", ".join(chunk.items),
            ) from exc

    def _write(
        self,
        target_id: str,
        track_ids: Sequence[str],
        *,
        cancel: CancellationSignal | None,
    ) -> int:
        plan = plan_chunks_for(
            track_ids, BatchLimit.MODIFY_PLAYLIST_ITEMS, size=self._write_batch_size
        )
        log.info(
            "Playlist %s will be updated with %s tracks in %s chunks",
            target_id,
            len(track_ids),
            len(plan),
        )
        # an empty plan still replaces the target so it ends up empty
        chunks = list(plan) or [Chunk(index=0, items=())]
        for chunk in chunks:
            self._check_cancel(cancel)
            log.debug("On chunk %s/%s", chunk.index + 1, len(chunks))
            try:
                self._write_chunk(target_id, chunk)
            except REMOTE_ERRORS as exc:
                raise ReconciliationWriteError(
                    f"Could not write chunk {chunk.index + 1}/{len(chunks)} "
                    f"to playlist {target_id}: {exc}",
                    phase=self._current_phase(),
                    identifier=target_id,
                    chunk_index=chunk.index,
                ) from exc
        return len(chunks)

    def _write_chunk(self, target_id: str, chunk: Chunk[str]) -> None:
        if chunk.is_first:
            description = render_description(self._description_template, self._clock())
            self._catalog.change_playlist_description(target_id, description)
            log.debug("Replacing playlist items with %s tracks", len(chunk))
            self._catalog.replace_playlist_items(target_id, chunk.items)
            return
        log.debug("Adding %s tracks to playlist", len(chunk))
        self._catalog.add_playlist_items(target_id, chunk.items)

    def _wipe(
        self,
        reference: PlaylistSnapshot,
        *,
        reference_id: str,
        stock_id: str,
        enabled: bool,
        cancel: CancellationSignal | None,
    ) -> int:
        if not enabled:
            log.info("Leaving reference playlist %s untouched", reference_id)
            return 0
        if reference_id == stock_id:
            log.warning("Reference playlist %s is the stock playlist, not wiping it", reference_id)
            return 0

        track_ids = list(dict.fromkeys(reference.track_ids))
        plan = plan_chunks_for(track_ids, BatchLimit.MODIFY_PLAYLIST_ITEMS)
        for chunk in plan:
            self._check_cancel(cancel)
            try:
                self._catalog.remove_playlist_items(reference_id, chunk.items)
            except REMOTE_ERRORS as exc:
                raise ReconciliationWriteError(
                    f"Could not remove chunk {chunk.index + 1}/{len(plan)} "
                    f"from playlist {reference_id}: {exc}",
                    phase=self._current_phase(),
                    identifier=reference_id,
                    chunk_index=chunk.index,
                ) from exc
            log.info("Removed %s tracks from reference playlist", len(chunk))
        return len(track_ids)


def album_ids_of(tracks: Iterable[Track]) -> list[str]:
    """Return the album ids of ``tracks`` in first-seen order."""

    album_ids: dict[str, None] = {}
    for track in tracks:
        album_id = track.album_id
        if album_id is None:
            log.warning("Track %r (%s) has no album id, skipping it", track.name, track.id)
            continue
        album_ids.setdefault(album_id, None)
    return list(album_ids)

