"""
Application Initialization
==========================
Parses the command line, sets up logging and hands over to the Qt bootstrap.

Why is this file needed?
------------------------
It keeps the ambient setup (logging, CLI options) out of the window code:
1. Parses the options (debug logging, log file, seed, window size).
2. Configures the 'balloonspots' logger.
3. Starts the Qt application with a configured BalloonScreen.
"""
from __future__ import annotations

import argparse
import logging
from typing import Sequence

from balloonspots.logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="balloonspots",
        description="Balloons on a ring: drag to spread them, click to let them go, then open the black hole.",
    )
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    parser.add_argument("--log-file", default=None, help="also write the log to this file")
    parser.add_argument("--seed", type=int, default=None, help="seed for the shuffle random generator")
    parser.add_argument("--width", type=float, default=414.0, help="screen width in px")
    parser.add_argument("--height", type=float, default=820.0, help="screen height in px")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.width <= 0 or args.height <= 0:
        raise SystemExit("Width and height must be positive.")

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO, log_file=args.log_file)

    # 2. Qt application, screen and window
    from balloonspots.app.main import main as run_app
    return run_app(width=args.width, height=args.height, seed=args.seed)
