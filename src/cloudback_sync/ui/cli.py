# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from cloudback_sync.app import (
    apply_definitions,
    import_definition,
    list_definitions,
    plan_definitions,
    refresh_definitions,
)
from cloudback_sync.config import ConfigurationError, configure_logging
from cloudback_sync.domain.errors import (
    DuplicateDefinitionError,
    IdentityError,
    ImportIdFormatError,
)
from cloudback_sync.domain.import_id import format_import_id

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from cloudback_sync.domain.model import BackupDefinition

log = logging.getLogger(__name__)

# User input problems: exit code 2 instead of 1.
_VALIDATION_ERRORS = (
    ConfigurationError,
    DuplicateDefinitionError,
    IdentityError,
    ImportIdFormatError,
    ValueError,
)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage Cloudback backup definitions")
    parser.add_argument(
        "--api-key",
        type=str,
        default=None,
        help="Cloudback API key (defaults to CLOUDBACK_API_KEY)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every remote update at DEBUG level",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    apply = subparsers.add_parser("apply", help="Reconcile declared definitions")
    apply.add_argument("file", type=Path, help="TOML file with [[backup_definition]] tables")

    plan = subparsers.add_parser("plan", help="Show the actions apply would take")
    plan.add_argument("file", type=Path, help="TOML file with [[backup_definition]] tables")

    subparsers.add_parser("refresh", help="Read persisted definitions from Cloudback")

    import_ = subparsers.add_parser("import", help="Import a definition by identifier")
    import_.add_argument(
        "import_id",
        type=str,
        help="platform/account/repository or platform/account/subject_type/subject_name",
    )

    subparsers.add_parser("show", help="List persisted definitions")

    return parser.parse_args(list(argv))


def _describe(record: BackupDefinition) -> str:
    settings = record.settings
    state = "enabled" if settings.enabled else "disabled"
    return (
        f"{format_import_id(record)} [{state}] schedule={settings.schedule!r} "
        f"storage={settings.storage!r} retention={settings.retention!r}"
    )


def _run(args: argparse.Namespace) -> None:
    if args.command == "apply":
        apply_definitions(args.file, api_key=args.api_key)
    elif args.command == "plan":
        plan = plan_definitions(args.file)
        if not plan.actions:
            print("No backup definitions declared or persisted.")
        for action in plan.actions:
            print(f"{action.kind:>6} {action.key}")
    elif args.command == "refresh":
        for record in refresh_definitions(api_key=args.api_key):
            print(_describe(record))
    elif args.command == "import":
        record = import_definition(args.import_id, api_key=args.api_key)
        print(_describe(record))
    elif args.command == "show":
        for record in list_definitions():
            print(_describe(record))
    else:
        raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        _run(parsed_args)
    except _VALIDATION_ERRORS:
        log.exception("Invalid input")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
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
