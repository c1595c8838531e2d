#!/usr/bin/env python3
# run_monitor.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Command-line interface for replaying call logs against behaviour specifications

import sys
import argparse
from pathlib import Path
from typing import List, Optional

from core.exceptions import FormulaError
from logic.runner import ReplayReport, SpecAndTraceMonitor
from utils.trace_reader import validate_call_log_file, TraceFormatError
from utils.logger import configure_logging, get_logger
from parser.exceptions import ParseError


def print_violations(report: ReplayReport) -> None:
    """Print every failed check with its residual formula.

    Args:
        report: Completed replay report
    """
    logger = get_logger()

    if report.conclusive:
        logger.warning(f"❌ Behaviour violated: {report.summary()}")
    else:
        logger.warning(f"❓ Behaviour undecided for this call log: {report.summary()}")

    for outcome in report.violations:
        logger.warning(f"\n{outcome.describe()}")


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser for command line interface.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="SpecObject Behavioural Runtime Verification",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_monitor.py -s kv_store.spec -t calls.csv
  python run_monitor.py -s kv_store.spec -t calls.csv -v
  python run_monitor.py -s kv_store.spec -t calls.csv --debug
  python run_monitor.py -s kv_store.spec -t calls.csv --validate-only

Specification file format:
  kv_store.spec:
    behaviour set(args, output) = output == nil;
    behaviour get(args, output) =
        exists t: received(set).at(t).with(args[0], output);

Exit codes:
  0 all behaviours hold     4 interrupted
  1 call log error          5 unexpected error
  2 specification error     6 behaviour violation
  3 malformed formula
        """,
    )

    parser.add_argument(
        "-s", "--spec", required=True, type=Path, help="Path to behaviour specification file"
    )

    parser.add_argument(
        "-t", "--trace", required=True, type=Path, help="Path to CSV call log file"
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )

    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output (overrides --verbose)"
    )

    parser.add_argument(
        "--validate-only",
        action="store_true",
        help="Only compile the specification and validate the call log",
    )

    parser.add_argument(
        "--stop-on-violation",
        action="store_true",
        help="Stop replaying at the first failed check",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for call log replay.

    Args:
        argv: Command line arguments; defaults to sys.argv

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, debug=args.debug)
    logger = get_logger()

    try:
        monitor = SpecAndTraceMonitor(str(args.spec), str(args.trace))
        logger.info(f"📋 Specification loaded: {', '.join(sorted(monitor.specification))}")

        if args.validate_only:
            logger.info(f"🔍 Validating call log: {args.trace}")
            count = validate_call_log_file(str(args.trace))
            logger.info(f"✅ Validation successful ({count} calls). Exiting.")
            return 0

        report = monitor.run(stop_on_violation=args.stop_on_violation)

        if not report.passed:
            print_violations(report)
            return 6

        return 0

    except TraceFormatError as e:
        logger.error(f"Call log error: {e}")
        return 1

    except ParseError as e:
        logger.error(f"Specification parsing error: {e}")
        return 2

    except FormulaError as e:
        logger.error(f"Malformed formula: {e}")
        return 3

    except KeyboardInterrupt:
        logger.error("Monitoring interrupted by user")
        return 4

    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        import traceback

        traceback.print_exc()
        return 5


if __name__ == "__main__":
    sys.exit(main())
