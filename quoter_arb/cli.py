"""
Quoter arbitrage monitor CLI.

Polls two DEX quoters for the same pair and reports round-trip
opportunities. Read-only: never submits transactions.

Usage:
    quoter-arb
    quoter-arb --config configs/quoter_arb.yaml
    quoter-arb --config configs/quoter_arb.yaml --once
"""

import argparse
import asyncio
import dataclasses
import sys
from typing import List, Optional

from . import logging_config
from .config import ConfigError, load_config
from .exceptions import NetworkError
from .runner import QuoterArbRunner


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Two-venue DEX quoter arbitrage monitor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Settings from environment / .env only
  quoter-arb

  # YAML config (environment variables still override)
  quoter-arb --config configs/quoter_arb.yaml

  # Single cycle (for testing/CI)
  quoter-arb --config configs/quoter_arb.yaml --once
        """,
    )

    parser.add_argument(
        "--config",
        default=None,
        help="Path to config YAML file (default: environment variables only)",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single cycle and exit (overrides config setting)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override the configured log level",
    )
    parser.add_argument(
        "--color",
        action="store_true",
        help="Colorize the per-cycle report",
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"❌ Config error: {e}", file=sys.stderr)
        return 1

    if args.once:
        config = dataclasses.replace(config, once=True)

    log_level = args.log_level or config.log_level
    if log_level == "DEBUG":
        logging_config.setup_debug()
    else:
        logging_config.setup(log_level)

    runner = QuoterArbRunner(config, use_color=args.color)
    try:
        runner.connect()
        runner.build_engine()
    except (NetworkError, ValueError) as e:
        print(f"❌ Initialization failed: {e}", file=sys.stderr)
        return 1

    try:
        asyncio.run(runner.run())
    except KeyboardInterrupt:
        print("\n\n⏸ Stopped by user")
        return 0
    except Exception as e:
        print(f"❌ Runner failed: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
