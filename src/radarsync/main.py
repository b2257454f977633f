#!/usr/bin/env python3

# ruff: noqa: T201

from __future__ import annotations

import sys
from signal import SIGINT, signal
from threading import Event
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from radarsync.app import update_release_radar
from radarsync.config import ConfigurationError, configure_logging
from radarsync.domain.reconciliation import ReconciliationCancelled

if TYPE_CHECKING:
    from types import FrameType


cancel_requested = Event()


def main() -> None:
    """Main application entry point."""
    configure_logging()
    try:
        result = update_release_radar(cancel=cancel_requested)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        sys.exit(2)
    except ReconciliationCancelled:
        print("\nStopped before the next batch (Ctrl+C)")
        sys.exit(130)
    except Exception as e:  # noqa: BLE001
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(
        f"Updated playlist {result.target_playlist_id} with {result.retained} tracks "
        f"({result.blacklisted} blacklisted, {result.duplicates_dropped} duplicates dropped)"
    )


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C): finish the current batch, then stop; exit on the second press."""
    if cancel_requested.is_set():
        print("\nClosed by user (Ctrl+C)")
        sys.exit(0)
    cancel_requested.set()


if __name__ == "__main__":
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()
