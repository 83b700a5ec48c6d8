#!/usr/bin/env python3
"""
Expense Tracker CLI.

USAGE:
  expense-tracker serve                       # Start API server on $PORT (default 3000)
  expense-tracker serve --port 8000 --reload
  expense-tracker serve --no-scheduler        # Skip the daily/weekly summaries
  expense-tracker categories                  # List accepted categories
"""
from __future__ import annotations

import argparse
import os

from expense_tracker.config import CATEGORIES, HOST, PORT
from expense_tracker.logging_setup import configure_logging


def cmd_serve(args):
    """Start the API server."""
    import uvicorn

    if args.no_scheduler:
        # inherited by reload workers
        os.environ["EXPENSE_TRACKER_SCHEDULER"] = "0"

    configure_logging(args.log_level)
    print(f"\nStarting Expense Tracker API on http://{args.host}:{args.port} ...")
    uvicorn.run(
        "expense_tracker.main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


def cmd_categories(args):
    """Print the category registry."""
    for category in CATEGORIES:
        print(category)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Expense Tracker — in-memory expense tracking API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--host", default=HOST, help=f"Bind address (default {HOST})")
    serve_parser.add_argument("--port", type=int, default=PORT, help=f"Port (default {PORT})")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.add_argument("--no-scheduler", action="store_true", help="Disable scheduled summaries")
    serve_parser.add_argument("--log-level", default=None, help="Log level (default $EXPENSE_TRACKER_LOG_LEVEL or INFO)")
    serve_parser.set_defaults(func=cmd_serve)

    categories_parser = subparsers.add_parser("categories", help="List accepted categories")
    categories_parser.set_defaults(func=cmd_categories)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return

    args.func(args)


if __name__ == "__main__":
    main()
