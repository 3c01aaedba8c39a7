"""Composition root for the bankrules host.

This module is the ONLY location that imports both core domain logic
and concrete adapter implementations. All wiring of dependencies
happens here, creating a clear entry point for the application.

Module Structure:
- Configuration loading via config module
- Adapter instantiation
- Core service initialization
- Command selection (report, variants, demo)
"""

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from decimal import Decimal

from bankrules.adapters.authorizer.http import HTTPTransferAuthorizer
from bankrules.adapters.authorizer.static import StaticAuthorizer
from bankrules.adapters.clock import SystemClock
from bankrules.adapters.report.json_report import JSONReportAdapter
from bankrules.adapters.report.stdout import StdoutReportAdapter
from bankrules.adapters.store.memory import InMemoryAccountRepository
from bankrules.config import Settings, load_settings
from bankrules.core.account_service import AccountService
from bankrules.core.models import Account, AccountType
from bankrules.core.ports import AccountServicePort, AuthorizerPort
from bankrules.core.rules import StandardRuleSet
from bankrules.harness.runner import MutationRunner
from bankrules.harness.suite import SpecificationSuite, SpecWorld
from bankrules.harness.variants import VARIANTS, get_variant

logger = logging.getLogger(__name__)


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.INFO)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
        force=True,
    )


def build_authorizer(settings: Settings) -> AuthorizerPort:
    """Instantiate the transfer authorizer selected by configuration."""
    if settings.authorizer_backend == "http":
        logger.info(f"Authorizer: HTTP ({settings.authorizer_url})")
        return HTTPTransferAuthorizer(
            base_url=settings.authorizer_url,
            timeout_seconds=settings.authorizer_timeout_seconds,
            api_key=settings.authorizer_api_key,
        )
    approve = settings.authorizer_backend == "static_allow"
    logger.info(f"Authorizer: static ({'allow' if approve else 'deny'})")
    return StaticAuthorizer(approve=approve)


def build_reference_factory(settings: Settings):
    """Return a world -> service factory using the configured policy."""

    def build(world: SpecWorld) -> AccountServicePort:
        return AccountService(
            world.repository,
            world.authorizer,
            world.clock,
            StandardRuleSet(settings.personal_daily_transfer_limit),
        )

    return build


def run_report(settings: Settings, variant_names: Sequence[str], verbose: bool) -> int:
    """Run the mutation report. Returns the process exit code."""
    variants = [get_variant(name) for name in variant_names] if variant_names else None
    runner = MutationRunner(
        suite=SpecificationSuite(),
        reference=build_reference_factory(settings),
        variants=variants,
    )
    report = runner.run()

    if settings.report_format == "json":
        JSONReportAdapter().report(report)
    else:
        StdoutReportAdapter(verbose=verbose).report(report)

    return 0 if report.succeeded else 1


def run_list_variants() -> int:
    for variant in VARIANTS.values():
        print(f"{variant.name:<30} {variant.kind:<7} {variant.description}")
    return 0


def run_demo(settings: Settings) -> int:
    """Walk a fresh personal checking account up to its daily transfer limit.

    Uses the configured authorizer and policy with the system clock.
    """
    repository = InMemoryAccountRepository(
        [
            Account("C1", AccountType.PERSONAL_CHECKING),
            Account("S1", AccountType.SAVINGS),
        ]
    )
    authorizer = build_authorizer(settings)
    service = AccountService(
        repository,
        authorizer,
        SystemClock(),
        StandardRuleSet(settings.personal_daily_transfer_limit),
    )

    steps = [
        ("deposit C1 20000", lambda: service.deposit("C1", Decimal("20000"))),
        ("transfer C1 -> S1 10000", lambda: service.transfer("C1", "S1", Decimal("10000"))),
        ("transfer C1 -> S1 0.01", lambda: service.transfer("C1", "S1", Decimal("0.01"))),
    ]
    results = []
    try:
        for label, step in steps:
            decision = step()
            results.append(
                {"step": label, "outcome": decision.outcome.value, "reason": decision.reason}
            )
    finally:
        if isinstance(authorizer, HTTPTransferAuthorizer):
            authorizer.close()

    output = {
        "steps": results,
        "balances": {account.id: str(account.balance) for account in repository.list_accounts()},
    }
    print(json.dumps(output, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bankrules",
        description="Bank rule engine and mutation-testing harness",
    )
    parser.add_argument("--env-file", default=None, help="Path to a .env file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    report = subparsers.add_parser(
        "report", help="Run the specification suite against the reference and variants"
    )
    report.add_argument(
        "--variant",
        action="append",
        default=[],
        dest="variants",
        help="Only evaluate this variant (repeatable)",
    )
    report.add_argument(
        "--format", choices=["text", "json"], default=None, help="Override report format"
    )
    report.add_argument(
        "-v", "--verbose", action="store_true", help="List the scenarios that caught each variant"
    )

    subparsers.add_parser("variants", help="List registered variants")
    subparsers.add_parser("demo", help="Run the daily-limit walkthrough")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Application entry point.

    Exit codes:
        0: Success (for report: reference passed and every variant was killed)
        1: Report found survivors or a failing reference, or a fatal error
        2: Invalid command-line usage
        130: Interrupted by user (SIGINT/KeyboardInterrupt)
    """
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args.env_file)
        if getattr(args, "format", None):
            settings = settings.model_copy(update={"report_format": args.format})
        configure_logging(settings.log_level, settings.log_format)

        if args.command == "report":
            return run_report(settings, args.variants, args.verbose)
        if args.command == "variants":
            return run_list_variants()
        if args.command == "demo":
            return run_demo(settings)

        logger.error(f"Unknown command: {args.command}")
        return 2
    except KeyboardInterrupt:
        logger.warning("Interrupted by user (SIGINT)")
        return 130
    except ValueError as e:
        logger.error(f"Error: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
