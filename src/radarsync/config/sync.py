"""Batch size defaults for reconciliation runs."""

from __future__ import annotations

from dataclasses import dataclass

from radarsync.domain.batch_limits import BatchLimit, limit_for

DEFAULT_WRITE_BATCH_SIZE = limit_for(BatchLimit.MODIFY_PLAYLIST_ITEMS)


@dataclass(frozen=True, slots=True)
class SyncConfig:
    write_batch_size: int = DEFAULT_WRITE_BATCH_SIZE
    allow_duplicates: bool = False


def get_sync_config() -> SyncConfig:
    return SyncConfig()
