#!/usr/bin/env python3
"""
Contact form intake runner.

Starts the FastAPI app under uvicorn with loguru as the log sink.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

import uvicorn
from loguru import logger

from contactsheet import __version__

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), backtrace=False, diagnose=False)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Contact form intake service")
    parser.add_argument("--version", action="version", version=f"contactsheet {__version__}")
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes (development)")
    parser.add_argument("--log-level", default="INFO", type=str.upper, choices=LOG_LEVELS)
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    logger.info("Starting contactsheet {} on {}:{}", __version__, args.host, args.port)
    uvicorn.run(
        "contactsheet.api.run:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level.lower(),
    )


if __name__ == "__main__":
    main()
