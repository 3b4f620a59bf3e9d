"""Command-line entry point."""

import argparse
import sys
from typing import Optional

from asg_rollout import __version__
from asg_rollout.bootstrap import create_rollout_service
from asg_rollout.config.loader import load_config
from asg_rollout.config.schemas.rollout_schema import (
    DEFAULT_ASG_NEW_TIME,
    DEFAULT_BATCH_SIZE,
    DEFAULT_MIN_INSTANCES_IN_SERVICE,
    DEFAULT_PAUSE_TIME,
)
from asg_rollout.domain.base.exceptions import (
    ConfigValidationError,
    InstancePageFetchError,
    RolloutError,
)
from asg_rollout.infrastructure.adapters.console_output_adapter import ConsoleOutputAdapter
from asg_rollout.infrastructure.logging.logger import setup_logging

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="asg-rollout",
        description="Replace Auto Scaling Group instances not running the active launch configuration",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING, or ASG_ROLLOUT_LOG_LEVEL)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    apply_parser = subparsers.add_parser("apply", help="Terminate stale instances in batches")
    apply_parser.add_argument("-c", "--config", help="Settings file (YAML, TOML or JSON)")
    apply_parser.add_argument("--asg-name", help="The name of the AutoScaling Group to manage")
    apply_parser.add_argument("--region", help="AWS region")
    apply_parser.add_argument("--profile", help="AWS shared configuration profile")
    apply_parser.add_argument("--access-key", help="AWS access key")
    apply_parser.add_argument("--secret-key", help="AWS secret key")
    apply_parser.add_argument("--token", help="AWS session token")
    apply_parser.add_argument(
        "--batch-size",
        type=int,
        help=f"Maximum instances updated per batch, 0 for desired capacity (default: {DEFAULT_BATCH_SIZE})",
    )
    apply_parser.add_argument(
        "--min-instances-in-service",
        type=int,
        help=f"Instances kept in service while updating (default: {DEFAULT_MIN_INSTANCES_IN_SERVICE})",
    )
    apply_parser.add_argument(
        "--pause-time",
        help=f"Pause between batches, e.g. 30s or 1m30s (default: {DEFAULT_PAUSE_TIME})",
    )
    apply_parser.add_argument(
        "--asg-new-time",
        help=f"Groups younger than this are skipped (default: {DEFAULT_ASG_NEW_TIME})",
    )
    return parser


def run_apply(args: argparse.Namespace) -> int:
    """Run the apply command and map its result to an exit code."""
    console = ConsoleOutputAdapter()
    try:
        config = load_config(
            args.config,
            asg_name=args.asg_name,
            region=args.region,
            profile=args.profile,
            access_key=args.access_key,
            secret_key=args.secret_key,
            token=args.token,
            batch_size=args.batch_size,
            min_instances_in_service=args.min_instances_in_service,
            pause_time=args.pause_time,
            asg_new_time=args.asg_new_time,
        )
    except ConfigValidationError as e:
        console.error(str(e))
        return EXIT_CONFIG_ERROR

    try:
        report = create_rollout_service(config, output=console).apply(config)
    except InstancePageFetchError as e:
        terminated = len(e.report.terminated) if e.report else 0
        console.error(f"Rollout of {config.asg_name} stopped after {terminated} terminations: {e}")
        return EXIT_FAILED
    except RolloutError as e:
        console.error(str(e))
        return EXIT_FAILED

    if report.skipped:
        return EXIT_OK

    summary = f"Rollout of {report.asg_name} complete: {len(report.terminated)} instances terminated"
    if report.warnings:
        console.output(f"{summary}, {len(report.warnings)} warnings")
    else:
        console.success(summary)
    return EXIT_OK


def main(argv: Optional[list[str]] = None) -> int:
    """Parse arguments and dispatch the command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(log_level=args.log_level)

    if args.command == "apply":
        return run_apply(args)

    parser.print_help()
    return EXIT_CONFIG_ERROR


def cli_main() -> None:
    """Entry point function for console scripts."""
    sys.exit(main())
