from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from setsync.app import (
    build_sync_service,
    clear_sync_throttle,
    delete_category,
    sync_all_product_sets,
    sync_category,
)
from setsync.config import (
    ConfigurationError,
    configure_logging,
    level_from_environment,
    optional_env_var,
)
from setsync.domain import CategoryIdentity, Err, Ok

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from setsync.domain import Result, SyncOutcome

log = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid integer: {value}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError(f"Expected a positive integer, got {value}")
    return parsed


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sync local categories to catalog product sets")
    parser.add_argument(
        "--taxonomy-file",
        type=Path,
        help="JSON export of the category taxonomy (defaults to SETSYNC_TAXONOMY_FILE)",
    )
    parser.add_argument(
        "--debug-log",
        type=Path,
        help="Append a detailed trace with structured context to this file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log at DEBUG level on the console",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync_all = subparsers.add_parser(
        "sync-all",
        help="Reconcile every category (at most once per throttle window)",
    )
    sync_all.add_argument(
        "--force",
        action="store_true",
        help="Ignore the throttle flag and run the pass now",
    )

    upsert = subparsers.add_parser("upsert", help="Create or update one category's product set")
    upsert.add_argument("--category-id", type=_positive_int, required=True)

    delete = subparsers.add_parser("delete", help="Delete the product set of a removed category")
    delete.add_argument(
        "--taxonomy-instance-id",
        type=_positive_int,
        required=True,
        help="Retailer identifier of the deleted category",
    )
    delete.add_argument("--category-id", type=_positive_int, default=0)
    delete.add_argument("--name", type=str, default=None)

    subparsers.add_parser("clear-throttle", help="Allow the next sync-all to run immediately")

    return parser.parse_args(list(argv))


def _report(result: Result[SyncOutcome]) -> int:
    match result:
        case Ok(value=outcome):
            log.info(
                "Product set %s for retailer id %s: %s",
                outcome.remote_set_id or "-",
                outcome.retailer_id,
                outcome.action,
            )
            return 0
        case Err(error=error):
            log.error("Product set sync failed: %s", error.describe())
            return 1


def _run(args: argparse.Namespace) -> int:
    service = build_sync_service(taxonomy_path=args.taxonomy_file)
    if args.command == "sync-all":
        summary = sync_all_product_sets(service=service, force=args.force)
        if summary.throttled:
            log.info("Skipped: product sets were synced within the throttle window")
            return 0
        log.info(
            "Product set sync finished: visited=%s, created=%s, updated=%s, failed=%s",
            summary.visited,
            summary.created,
            summary.updated,
            summary.failed,
        )
        return 1 if summary.failed or summary.error else 0
    if args.command == "upsert":
        return _report(sync_category(args.category_id, service=service))
    if args.command == "delete":
        identity = CategoryIdentity(
            category_id=args.category_id,
            taxonomy_instance_id=args.taxonomy_instance_id,
            name=args.name,
        )
        return _report(delete_category(identity, service=service))
    if args.command == "clear-throttle":
        clear_sync_throttle(service=service)
        return 0
    raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    debug_log = parsed_args.debug_log or optional_env_var("SETSYNC_DEBUG_LOG")
    configure_logging(
        level=logging.DEBUG if parsed_args.verbose else level_from_environment(),
        debug_log_path=Path(debug_log) if debug_log else None,
    )

    try:
        exit_code = _run(parsed_args)
    except ConfigurationError:
        log.exception("Invalid configuration")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during product set sync")
        sys.exit(1)
    if exit_code:
        sys.exit(exit_code)


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
