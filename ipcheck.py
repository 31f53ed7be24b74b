#!/usr/bin/env python3
"""ipcheck - Connection Identity and Speed Check.

Main entry point for the ipcheck command-line tool.
"""

import argparse
import sys
import traceback
from pathlib import Path

from config import ExitCode
from display import format_output
from enums import MeasurementPhase
from logging_config import get_logger, setup_logging
from network import ProgressChannel
from orchestrator import run_cycle
from utils import sanitize_for_log


def parse_arguments() -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments namespace.

    Exits:
        Code 4 if invalid argument combinations.
    """
    parser = argparse.ArgumentParser(
        description="Public IP, location, VPN/proxy and speed check",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  ipcheck                     # Full check
  ipcheck --skip-speedtest    # Identity and anonymity only
  ipcheck -v --log-file debug.log  # Log to file

Exit codes:
  0 - Success
  1 - General error
  4 - Invalid arguments
        """,
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        metavar="PATH",
        help="Write logs to file",
    )

    parser.add_argument(
        "--skip-speedtest",
        action="store_true",
        help="Do not measure latency and throughput",
    )

    parser.add_argument(
        "--skip-anonymity",
        action="store_true",
        help="Do not check for VPN/proxy/Tor",
    )

    args = parser.parse_args()

    if args.log_file and args.log_file.is_dir():
        print("Error: --log-file must be a file path", file=sys.stderr)
        sys.exit(ExitCode.INVALID_ARGUMENTS)

    return args


def print_progress(phase: MeasurementPhase) -> None:
    """Write a bandwidth phase notification to stderr."""
    print(phase.value, file=sys.stderr)


def main() -> None:
    """Main execution flow.

    Exit codes:
        0: Success
        1: General error
        4: Invalid arguments
    """
    args = parse_arguments()

    # Setup logging (must be called before any logger usage)
    setup_logging(
        verbose=args.verbose,
        log_file=args.log_file,
        use_colors=True,
    )

    logger = get_logger(__name__)

    progress = ProgressChannel()
    progress.subscribe(print_progress)

    try:
        result = run_cycle(
            check_anonymity=not args.skip_anonymity,
            measure_bandwidth=not args.skip_speedtest,
            progress=progress,
        )

        format_output(result)

        if result.failure:
            logger.error("%s: %s", result.failure.message, result.failure.detail)
            sys.exit(ExitCode.GENERAL_ERROR)

        sys.exit(ExitCode.SUCCESS)

    except KeyboardInterrupt:
        logger.error("Interrupted by user")
        sys.exit(ExitCode.GENERAL_ERROR)
    except (OSError, ValueError, RuntimeError) as e:
        logger.error("Error during execution: %s", sanitize_for_log(str(e)))
        if args.verbose:
            traceback.print_exc()
        sys.exit(ExitCode.GENERAL_ERROR)


if __name__ == "__main__":
    main()
