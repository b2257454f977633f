"""Smaller playlist maintenance operations built on the same engine pieces."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .batch_limits import BatchLimit, plan_chunks_for
from .fingerprint import classify, missing_from
from .reconciliation import StockPlaylistTargetError, normalize_playlist_id

if TYPE_CHECKING:
    from .model import Track
    from .ports.catalog import PlaylistCatalog
    from .ports.runtime import CancellationSignal, ConfigProvider

log = getLogger(__name__)


class OperationCancelledError(RuntimeError):
    """Raised when a maintenance operation is cancelled between two batches."""


def remove_saved_tracks(
    catalog: PlaylistCatalog,
    playlist_id: str,
    *,
    config: ConfigProvider,
    cancel: CancellationSignal | None = None,
) -> list[str]:
    """Remove every track the current user has saved from ``playlist_id``.

    Returns the removed track ids. Catalog errors propagate unchanged.
    """

    target_id = normalize_playlist_id(playlist_id, role="target")
    if target_id == normalize_playlist_id(config.stock_playlist_id, role="stock"):
        raise StockPlaylistTargetError(target_id)

    snapshot = catalog.playlist(target_id)
    track_ids = list(dict.fromkeys(snapshot.track_ids))
    saved: list[str] = []
    for chunk in plan_chunks_for(track_ids, BatchLimit.SAVED_TRACKS_CONTAINS):
        _check_cancel(cancel)
        flags = catalog.saved_tracks_contains(chunk.items)
        saved.extend(
            track_id for track_id, is_saved in zip(chunk.items, flags, strict=True) if is_saved
        )
    log.info(
        "Removing %s saved tracks from %r (%s tracks, snapshot %s)",
        len(saved),
        snapshot.name,
        len(snapshot.tracks),
        snapshot.snapshot_id,
    )

    for chunk in plan_chunks_for(saved, BatchLimit.MODIFY_PLAYLIST_ITEMS):
        _check_cancel(cancel)
        catalog.remove_playlist_items(target_id, chunk.items)
        log.debug("Removed %s saved tracks", len(chunk))
    return saved


def compare_playlists(catalog: PlaylistCatalog, left_id: str, right_id: str) -> list[Track]:
    """Return tracks of ``left_id`` whose recording is not in ``right_id``.

    Recordings are matched by fingerprint, so a remaster or regional copy in
    the right playlist counts as present even under another track id.
    """

    left = catalog.playlist(normalize_playlist_id(left_id, role="left"))
    right = catalog.playlist(normalize_playlist_id(right_id, role="right"))
    tracks_by_id = {track.id: track for track in left.tracks}
    missing = missing_from(classify(left.tracks), classify(right.tracks))
    log.info(
        "%s of %s recordings in %r are missing from %r",
        len(missing),
        len(left.tracks),
        left.name,
        right.name,
    )
    return [tracks_by_id[fingerprint.source_track_id] for fingerprint in missing]


def _check_cancel(cancel: CancellationSignal | None) -> None:
    if cancel is not None and cancel.is_set():
        raise OperationCancelledError("Cancelled by caller")
