"""Shared logging helpers for radarsync."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Set up the root logger for script runs.

    Phase changes show at INFO and per-chunk progress at DEBUG. Pass
    ``force=True`` to replace handlers that are already installed.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    # spotipy logs every retry at WARNING; keep its request chatter out of INFO runs
    logging.getLogger("spotipy").setLevel(max(level, logging.WARNING))
