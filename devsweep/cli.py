#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Command-line interface for devsweep.

Parses the command line into a RunConfig, then runs every cleaner in a fixed
order and reports disk usage before and after.
"""

import argparse
import logging
import os
import sys
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from devsweep import __version__
from devsweep.cleaners import CLEANER_REGISTRY
from devsweep.core.config import DEFAULT_DOWNLOADS_AGE_DAYS, RunConfig, build_context
from devsweep.core.prompt import AskFunction, ConfirmationGate, ask_yes_no
from devsweep.core.runlog import RunLog
from devsweep.core.cleaner import log_header
from devsweep.core.utils import SUCCESS, disk_usage_summary

# Configure logging
logger = logging.getLogger("devsweep")

BANNER = """
+---------------------------------------------------------------+
|                                                               |
|                           devsweep                            |
|            Disk cleanup for developer workstations            |
|                                                               |
+---------------------------------------------------------------+
"""


class SymbolFormatter(logging.Formatter):
    """Prefix console messages with a marker for their level."""

    SYMBOLS = {
        logging.DEBUG: "·",
        logging.INFO: "ℹ",
        SUCCESS: "✓",
        logging.WARNING: "⚠",
        logging.ERROR: "✗",
        logging.CRITICAL: "✗",
    }

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if getattr(record, "plain", False) or not record.getMessage():
            return message
        return f"{self.SYMBOLS.get(record.levelno, '')} {message}"


def setup_logging(verbose: bool = False) -> None:
    """
    Set up console logging for the devsweep loggers.

    Args:
        verbose: Whether to enable verbose output (DEBUG level)
    """
    log_level = logging.DEBUG if verbose else logging.INFO

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(SymbolFormatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(log_level)


def non_negative_int(value: str) -> int:
    try:
        days = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number of days: {value!r}")
    if days < 0:
        raise argparse.ArgumentTypeError(f"days must be 0 or more, got {days}")
    return days


def create_parser() -> argparse.ArgumentParser:
    """
    Create the command-line argument parser.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="devsweep",
        description="devsweep - cleans caches, logs and temporary files on a developer workstation",
        epilog=(
            "examples:\n"
            "  devsweep --dry-run        Preview what will be cleaned\n"
            "  devsweep --yes            Run cleanup without prompts\n"
            "  devsweep -d -v            Dry run with verbose output\n"
            "  devsweep -a 60            Clean downloads older than 60 days\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"devsweep {__version__}"
    )
    parser.add_argument(
        "-d", "--dry-run", action="store_true",
        help="Show what would be cleaned without actually cleaning"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Show detailed output"
    )
    parser.add_argument(
        "-y", "--yes", action="store_true",
        help="Skip confirmation prompts (use with caution!)"
    )
    parser.add_argument(
        "-a", "--age", type=non_negative_int, default=DEFAULT_DOWNLOADS_AGE_DAYS, metavar="DAYS",
        help=f"Age threshold for Downloads cleanup (default: {DEFAULT_DOWNLOADS_AGE_DAYS})"
    )
    parser.add_argument(
        "--only", action="append", choices=list(CLEANER_REGISTRY.keys()), metavar="CLEANER",
        help="Run only this cleaner (repeatable). See --list"
    )
    parser.add_argument(
        "--list", action="store_true", help="List available cleaners and exit"
    )
    return parser


def parse_config(args: Optional[List[str]] = None) -> Tuple[RunConfig, argparse.Namespace]:
    """
    Parse the command line into a RunConfig.

    Invalid arguments print usage and exit with status 2.
    """
    parsed_args = create_parser().parse_args(args)
    config = RunConfig(
        dry_run=parsed_args.dry_run,
        verbose=parsed_args.verbose,
        skip_confirmation=parsed_args.yes,
        downloads_age_days=parsed_args.age,
    )
    return config, parsed_args


def list_cleaners() -> None:
    print("Available cleaners (in the order they run):")
    for name, cleaner_class in CLEANER_REGISTRY.items():
        cleaner = cleaner_class()
        print(f"  - {name}: {cleaner.description}")


def run(config: RunConfig, home: Optional[str] = None, system_root: str = "/",
        temp_dir: Optional[str] = None, ask: AskFunction = ask_yes_no,
        only: Optional[Iterable[str]] = None, log_dir: Optional[str] = None) -> int:
    """
    Run the cleaners.

    Args:
        config: Options for this run
        home: Home directory to clean (default: the user's)
        system_root: Root for system-wide locations
        temp_dir: Temporary directory to empty (default: the system's)
        ask: Yes/no prompt used by the confirmation gate
        only: Names of the cleaners to run, all of them if None
        log_dir: Where the run log is written (default: the home directory)

    Returns:
        Exit code, always 0: failures of single items are reported, not fatal
    """
    gate = ConfirmationGate(config, ask)
    selected = set(only) if only else None

    logger.info(BANNER, extra={"plain": True})
    if config.dry_run:
        logger.warning("DRY RUN MODE - No changes will be made")

    log_header("Initial Disk Usage")
    logger.info(disk_usage_summary(system_root))

    home = home or os.path.expanduser("~")
    try:
        run_log = RunLog.for_start_time(log_dir or home, datetime.now())
    except OSError as e:
        logger.error(f"Could not create log file in {log_dir or home}: {e}")
        logger.warning("Continuing without a log file")
        run_log = RunLog(None)

    with run_log:
        context = build_context(config, gate, run_log, home=home,
                                system_root=system_root, temp_dir=temp_dir)
        run_log.record(f"Cleanup started - Mode: {config.mode}")

        for name, cleaner_class in CLEANER_REGISTRY.items():
            if selected is not None and name not in selected:
                continue
            run_cleaner(cleaner_class(), context)

        log_header("Final Disk Usage")
        logger.info(disk_usage_summary(system_root))

        run_log.record("Cleanup completed")

    report = context.report
    log_header("Cleanup Complete!")
    logger.info(f"{report.cleaned} cleaned, {report.skipped} skipped, {report.failed} warnings")
    if report.failed:
        logger.warning(f"{report.failed} cleanup operations failed:")
        for failure in report.failures:
            logger.warning(f"  {failure}")
    if run_log.path:
        logger.log(SUCCESS, f"Log file saved to: {run_log.path}")

    if config.dry_run:
        logger.info("This was a dry run. Run without --dry-run to perform actual cleanup.")
    return 0


def run_cleaner(cleaner, context) -> None:
    """Run one cleaner, containing anything it raises."""
    logger.debug(f"Running cleaner: {cleaner.name}")
    try:
        cleaner.clean(context)
    except Exception as e:
        message = f"Error running cleaner '{cleaner.name}': {e}"
        logger.error(message)
        logger.debug("Exception details:", exc_info=True)
        context.report.record_failure(message)


def main(args: Optional[List[str]] = None) -> int:
    """
    Main entry point for the application.

    Args:
        args: Command-line arguments (if None, use sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    config, parsed_args = parse_config(args)

    if parsed_args.list:
        list_cleaners()
        return 0

    setup_logging(config.verbose)
    return run(config, only=parsed_args.only)


if __name__ == "__main__":
    sys.exit(main())
