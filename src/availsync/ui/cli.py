from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from availsync.app import (
    build_availability_sync,
    close_availability_sync,
    run_availability_sync,
)
from availsync.config import ConfigurationError, configure_logging
from availsync.domain.availability import RunOutcome

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from availsync.domain.availability import AvailabilitySync

log = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an integer: {value}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value}")
    return parsed


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Reconcile media availability with the media server and fulfillment services"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Run one availability sync pass")
    run.add_argument(
        "--page-size",
        type=_positive_int,
        default=None,
        help="Number of records loaded per page (defaults to config)",
    )
    run.add_argument(
        "--verbose",
        action="store_true",
        help="Log probe details at DEBUG level",
    )

    return parser.parse_args(list(argv))


def _install_sigint_handler(sync: AvailabilitySync) -> None:
    def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
        """Cancel the run cooperatively on Ctrl+C."""
        log.info("Cancellation requested (Ctrl+C); stopping after the current record")
        sync.cancel()

    signal(SIGINT, sigint_handler)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
    except SystemExit as exc:
        sys.exit(2 if exc.code else 0)

    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO, force=True)

    try:
        sync = build_availability_sync(page_size=parsed_args.page_size)
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except Exception:
        log.exception("Failed to initialise availability sync")
        sys.exit(1)

    _install_sigint_handler(sync)
    try:
        result = run_availability_sync(sync=sync)
    except Exception:
        log.exception("Fatal error during sync")
        sys.exit(1)
    finally:
        close_availability_sync(sync)

    log.info(
        "Availability sync finished with outcome %s (processed=%s, updated=%s, failed=%s)",
        result.outcome,
        result.stats.processed,
        result.stats.updated,
        result.stats.failed,
    )
    if result.outcome is RunOutcome.FAILED:
        sys.exit(1)


if __name__ == "__main__":
    main()
