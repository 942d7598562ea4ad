#!/usr/bin/env python3
"""Run the EliteRank lifecycle service.

Usage:
    python run.py [--host HOST] [--port PORT] [--reload] [--no-reconcile]
"""

import argparse
import os

import uvicorn


def main():
    parser = argparse.ArgumentParser(description="Run the EliteRank lifecycle service")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to (default: 8000)")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload on code changes (development mode)",
    )
    parser.add_argument(
        "--no-reconcile",
        action="store_true",
        help="Do not start the background reconciliation loop",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
        default="info",
        help="Logging level (default: info)",
    )
    args = parser.parse_args()

    os.environ.setdefault("ELITERANK_LOG_LEVEL", args.log_level.upper())
    if args.no_reconcile:
        os.environ["ELITERANK_RECONCILE_ENABLED"] = "false"

    uvicorn.run(
        "eliterank.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
