from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from actioncatalog.app import (
    build_catalog,
    discovery_status,
    run_discovery_service,
    run_discovery_update,
)
from actioncatalog.config import ConfigurationError, configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build and maintain the action catalog")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("build", help="Merge the source files into the canonical catalog")

    discover = subparsers.add_parser("discover", help="Run one discovery update")
    discover.add_argument(
        "--force",
        action="store_true",
        help="Update even if the last successful update is recent",
    )
    discover.add_argument(
        "--external",
        action="store_true",
        help="Also fetch identifier listings from ACTIONCATALOG_EXTERNAL_URLS",
    )

    watch = subparsers.add_parser("watch", help="Run the discovery scheduler until interrupted")
    watch.add_argument(
        "--external",
        action="store_true",
        help="Also fetch identifier listings from ACTIONCATALOG_EXTERNAL_URLS",
    )

    subparsers.add_parser("status", help="Show when the catalog was last updated")

    return parser.parse_args(list(argv))


def _run_command(args: argparse.Namespace) -> None:
    if args.command == "build":
        result = build_catalog()
        log.info(
            "Catalog built: actions=%s, loaded=%s, missing=%s, unreadable=%s",
            len(result.database),
            len(result.loaded),
            len(result.missing),
            len(result.unreadable),
        )
    elif args.command == "discover":
        outcome = run_discovery_update(force=args.force, external=args.external)
        if outcome is None or not outcome.ran:
            log.info("Catalog is up to date; nothing to do")
        elif outcome.report is not None:
            log.info(
                "Discovery finished: found=%s, new=%s, updated=%s",
                outcome.report.actions_found,
                outcome.report.new_actions,
                outcome.report.updated_actions,
            )
        elif outcome.error is not None:
            error = outcome.error
            raise RuntimeError(f"Discovery failed in {error.phase}: {error.message}")
    elif args.command == "watch":
        run_discovery_service(external=args.external)
    elif args.command == "status":
        status = discovery_status()
        log.info(
            "Last update: %s, next update: %s, due: %s, actions: %s",
            status.last_update.isoformat(),
            status.next_update.isoformat(),
            status.update_due,
            status.total_actions,
        )
        if status.last_successful_run is not None:
            log.info(
                "Last successful run: %s (new=%s)",
                status.last_successful_run.finished_at.isoformat(),
                status.last_successful_run.new_actions,
            )
        for run in status.recent_runs:
            log.info(
                "  %s %s found=%s new=%s%s",
                run.finished_at.isoformat(),
                "ok" if run.success else "FAILED",
                run.actions_found,
                run.new_actions,
                f" ({run.phase}: {run.message})" if not run.success else "",
            )
    else:
        raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        _run_command(parsed_args)
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
