"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from radarsync.adapters.spotify import SpotifyCatalog, SpotifyClient
from radarsync.config import (
    ConfigurationError,
    get_blacklist,
    get_playlist_config,
    get_spotify_config,
    get_sync_config,
)
from radarsync.domain.curation import compare_playlists, remove_saved_tracks
from radarsync.domain.reconciliation import PlaylistReconciler, ReconciliationRequest

if TYPE_CHECKING:
    from radarsync.config import PlaylistConfig, SyncConfig
    from radarsync.domain.blacklist import BlacklistStore
    from radarsync.domain.model import Track
    from radarsync.domain.ports.catalog import PlaylistCatalog
    from radarsync.domain.ports.runtime import CancellationSignal
    from radarsync.domain.reconciliation import ReconciliationResult

CatalogFactory = Callable[[], "PlaylistCatalog"]


log = getLogger(__name__)


def build_spotify_catalog() -> SpotifyCatalog:
    return SpotifyCatalog(SpotifyClient(config=get_spotify_config()))


def update_release_radar(
    *,
    catalog_factory: CatalogFactory | None = None,
    playlists: PlaylistConfig | None = None,
    blacklist: BlacklistStore | None = None,
    sync: SyncConfig | None = None,
    cancel: CancellationSignal | None = None,
) -> ReconciliationResult:
    """Rebuild the custom Release Radar from the albums behind the reference playlist."""

    effective_playlists = playlists or get_playlist_config()
    effective_sync = sync or get_sync_config()
    request = ReconciliationRequest(
        reference_playlist_id=effective_playlists.reference_playlist_id,
        target_playlist_id=effective_playlists.target_playlist_id,
        allow_duplicates=effective_sync.allow_duplicates,
    )
    return _reconcile(
        request,
        catalog_factory=catalog_factory,
        playlists=effective_playlists,
        blacklist=blacklist,
        sync=effective_sync,
        cancel=cancel,
    )


def update_lagging_release_radar(
    *,
    catalog_factory: CatalogFactory | None = None,
    playlists: PlaylistConfig | None = None,
    blacklist: BlacklistStore | None = None,
    sync: SyncConfig | None = None,
    cancel: CancellationSignal | None = None,
) -> ReconciliationResult:
    """Feed the lagging playlist from the custom Release Radar, leaving the latter intact."""

    effective_playlists = playlists or get_playlist_config()
    if effective_playlists.lagging_playlist_id is None:
        raise ConfigurationError("RADARSYNC_LAGGING_PLAYLIST_ID is not configured")
    effective_sync = sync or get_sync_config()
    request = ReconciliationRequest(
        reference_playlist_id=effective_playlists.target_playlist_id,
        target_playlist_id=effective_playlists.lagging_playlist_id,
        allow_duplicates=effective_sync.allow_duplicates,
        wipe_reference=False,
    )
    return _reconcile(
        request,
        catalog_factory=catalog_factory,
        playlists=effective_playlists,
        blacklist=blacklist,
        sync=effective_sync,
        cancel=cancel,
    )


def remove_saved_tracks_from_target(
    *,
    catalog_factory: CatalogFactory | None = None,
    playlists: PlaylistConfig | None = None,
    cancel: CancellationSignal | None = None,
) -> list[str]:
    """Drop tracks the user already saved from the custom Release Radar."""

    effective_playlists = playlists or get_playlist_config()
    catalog = (catalog_factory or build_spotify_catalog)()
    removed = remove_saved_tracks(
        catalog,
        effective_playlists.target_playlist_id,
        config=effective_playlists,
        cancel=cancel,
    )
    log.info(f"Removed {len(removed)} saved tracks from the target playlist")
    return removed


def compare(
    left_playlist_id: str,
    right_playlist_id: str,
    *,
    catalog_factory: CatalogFactory | None = None,
) -> list[Track]:
    catalog = (catalog_factory or build_spotify_catalog)()
    return compare_playlists(catalog, left_playlist_id, right_playlist_id)


def _reconcile(
    request: ReconciliationRequest,
    *,
    catalog_factory: CatalogFactory | None,
    playlists: PlaylistConfig,
    blacklist: BlacklistStore | None,
    sync: SyncConfig,
    cancel: CancellationSignal | None,
) -> ReconciliationResult:
    reconciler = PlaylistReconciler(
        catalog=(catalog_factory or build_spotify_catalog)(),
        blacklist=blacklist if blacklist is not None else get_blacklist(),
        config=playlists,
        write_batch_size=sync.write_batch_size,
    )
    log.info(
        "Starting playlist update: reference=%s, target=%s, batch_size=%s, wipe=%s",
        request.reference_playlist_id,
        request.target_playlist_id,
        sync.write_batch_size,
        request.wipe_reference,
    )

    result = reconciler.reconcile(request, cancel=cancel)

    log.info(
        f"Finished playlist update: retained={result.retained}, "
        f"candidates={result.candidates}, blacklisted={result.blacklisted}, "
        f"duplicates={result.duplicates_dropped}, chunks={result.chunks_written}, "
        f"wiped={result.wiped}"
    )
    return result
