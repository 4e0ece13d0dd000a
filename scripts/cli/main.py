"""inventory-diagnostics: run the reconciliation checks from the command line."""

import argparse
import json
import logging
import os
import sys

from inventory_config import get_active_config
from inventory_engines.diagnostics import (
    CheckRegistry,
    CheckStatus,
    default_check_registry,
)
from inventory_kernel.db.engine import get_session_factory, init_engine_from_url, reset_engine
from inventory_kernel.domain.clock import SystemClock
from inventory_kernel.exceptions import (
    ConfigurationError,
    DiagnosticAbortedError,
    InventoryKernelError,
)
from inventory_kernel.logging_config import configure_logging, get_logger
from inventory_kernel.selectors import InventorySelector, SnapshotSelector
from inventory_services import InventoryDiagnosticRunner, VehicleInventoryService
from scripts.cli.render import print_report, print_vehicle_report

logger = get_logger("cli")

DATABASE_URL_ENV_VAR = "INVENTORY_DATABASE_URL"

EXIT_CODES = {
    CheckStatus.PASS: 0,
    CheckStatus.WARNING: 1,
    CheckStatus.FAIL: 2,
}
EXIT_ERROR = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="inventory-diagnostics",
        description="Run inventory reconciliation checks and print the report.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "exit codes:\n"
            "  0 PASS, 1 WARNING, 2 FAIL, 3 aborted or error\n"
            "\n"
            "examples:\n"
            "  inventory-diagnostics --database-url postgresql+psycopg://.../fieldops\n"
            "  inventory-diagnostics --snapshot export.yaml --check duplicate_records\n"
            "  inventory-diagnostics --snapshot export.yaml --vehicle 'Truck 1' --json\n"
        ),
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--database-url", type=str, default=None,
        help=f"SQLAlchemy database URL (default: ${DATABASE_URL_ENV_VAR})",
    )
    source.add_argument(
        "--snapshot", type=str, default=None,
        help="YAML/JSON snapshot file to audit instead of a database",
    )
    parser.add_argument(
        "--config", type=str, default=None,
        help="Diagnostics config YAML (default: packaged defaults)",
    )
    parser.add_argument(
        "--check", action="append", default=None, metavar="NAME",
        help="Run only this check (id or display name); repeatable",
    )
    parser.add_argument(
        "--vehicle", type=str, default=None, metavar="NAME",
        help="Print the inventory report for one vehicle instead of running checks",
    )
    parser.add_argument(
        "--timeout", type=float, default=None,
        help="Abort the run after this many seconds",
    )
    parser.add_argument(
        "--json", action="store_true",
        help="Output JSON instead of formatted text",
    )
    parser.add_argument(
        "--list-checks", action="store_true",
        help="List registered checks and exit",
    )
    parser.add_argument(
        "--log-level", type=str, default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Structured log level on stderr (default: WARNING)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return 0 if exc.code == 0 else EXIT_ERROR

    configure_logging(level=getattr(logging, args.log_level))

    try:
        config = get_active_config(args.config)
    except (FileNotFoundError, ConfigurationError) as exc:
        print(f"  ERROR: {exc}", file=sys.stderr)
        return EXIT_ERROR

    if args.list_checks:
        for check in default_check_registry(config):
            print(f"{check.check_id:<20} {check.name}")
        return 0

    database_url = args.database_url or os.environ.get(DATABASE_URL_ENV_VAR)
    if args.snapshot is None and not database_url:
        print(
            f"  ERROR: provide --snapshot, --database-url or ${DATABASE_URL_ENV_VAR}",
            file=sys.stderr,
        )
        return EXIT_ERROR

    using_db = args.snapshot is None
    try:
        if using_db:
            init_engine_from_url(database_url, echo=False)
            gateway = InventorySelector(
                get_session_factory(),
                vehicle_location_type=config.vehicle_location_type,
            )
        else:
            gateway = SnapshotSelector.from_file(
                args.snapshot,
                vehicle_location_type=config.vehicle_location_type,
            )
    except Exception as exc:
        print(f"  ERROR: Cannot open inventory source: {exc}", file=sys.stderr)
        return EXIT_ERROR

    try:
        if args.vehicle is not None:
            return _vehicle_report(gateway, config, args)
        return _diagnostics(gateway, config, args)
    finally:
        if using_db:
            reset_engine()


def _vehicle_report(gateway, config, args) -> int:
    service = VehicleInventoryService(gateway, config=config)
    try:
        report = service.get_vehicle_inventory_report(args.vehicle)
    except InventoryKernelError as exc:
        print(f"  ERROR: {exc}", file=sys.stderr)
        return EXIT_ERROR

    if args.json:
        print(json.dumps(report.to_dict(), indent=2, default=str))
    else:
        print_vehicle_report(report)
    return 0


def _selected_registry(config, names) -> CheckRegistry:
    """Registry holding only the named checks, in the order given."""
    available = default_check_registry(config)
    selected = CheckRegistry()
    for name in names:
        check = available.get(name)
        if check.check_id not in selected:
            selected.register(check)
    return selected


def _diagnostics(gateway, config, args) -> int:
    try:
        registry = _selected_registry(config, args.check) if args.check else None
        runner = InventoryDiagnosticRunner(
            gateway, clock=SystemClock(), registry=registry, config=config,
        )
        report = runner.run_full_diagnostic(timeout=args.timeout)
    except DiagnosticAbortedError as exc:
        print(f"  ABORTED: {exc}", file=sys.stderr)
        return EXIT_ERROR
    except InventoryKernelError as exc:
        print(f"  ERROR: {exc}", file=sys.stderr)
        return EXIT_ERROR

    if args.json:
        print(json.dumps(report.to_dict(), indent=2, default=str))
    else:
        print_report(report)

    logger.info(
        "cli_diagnostics_finished",
        extra={"overall_status": report.overall_status.value},
    )
    return EXIT_CODES[report.overall_status]


if __name__ == "__main__":
    sys.exit(main())
