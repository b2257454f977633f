"""Collaborators injected into a reconciliation run."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ConfigProvider(Protocol):
    """Supplies the id of the externally curated playlist that must never be written."""

    @property
    def stock_playlist_id(self) -> str: ...


@runtime_checkable
class CancellationSignal(Protocol):
    """Checked between remote batches; ``threading.Event`` satisfies it."""

    def is_set(self) -> bool: ...
