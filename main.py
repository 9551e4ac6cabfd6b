#!/usr/bin/env python3
"""
EarnWale CLI: run and inspect the games API.

Commands:
  serve: Start the API with uvicorn
  games: List games from the configured store, highest rating first
"""

import argparse
import json
import logging
import sys

from pymongo.errors import PyMongoError

from config import config
from store import get_client, get_database, list_games

# Constants for output formatting
MAX_NAME_WIDTH = 40


def cmd_serve(args: argparse.Namespace) -> int:
    """Serve command: Start the API with uvicorn.

    Args:
        args: Parsed arguments with host, port, reload and log_level

    Returns:
        Exit code (0 on success, non-zero on failure)
    """
    import uvicorn

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not config.has_admin_token:
        print("Warning: ADMIN_TOKEN is not set; every /api/admin request will be rejected.", file=sys.stderr)
    if not config.has_blob_token:
        print("Warning: BLOB_READ_WRITE_TOKEN is not set; /api/upload will fail.", file=sys.stderr)

    print(f"Serving EarnWale API at http://{args.host}:{args.port}/api (Ctrl+C to stop)")
    try:
        uvicorn.run(
            "api.app:app",
            host=args.host,
            port=args.port,
            reload=args.reload,
            log_level=args.log_level,
        )
    except OSError as e:
        print(f"Failed to start server: {e}", file=sys.stderr)
        return 1

    return 0


def pretty_print_games(games: list[dict]) -> None:
    for game in games:
        name = str(game.get("name") or game.get("title") or "(untitled)")[:MAX_NAME_WIDTH]
        rating = game.get("rating")
        rating_text = f"{rating}" if rating is not None else "-"
        print(f"{game.get('_id', '')}  {rating_text:>6}  {name}")


def cmd_games(args: argparse.Namespace) -> int:
    """Games command: print every game sorted by rating (descending)."""
    try:
        db = get_database(get_client(args.uri), args.database)
        games = list_games(db)
    except PyMongoError as e:
        print(f"Failed to fetch games: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(games, indent=2))
    elif not games:
        print("No games.")
    else:
        pretty_print_games(games)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser with subcommands.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="earnwale",
        description="EarnWale CLI: serve, games",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command")

    # serve subcommand
    serve_parser = subparsers.add_parser("serve", help="Start the API with uvicorn")
    serve_parser.add_argument("--host", type=str, default="127.0.0.1", help="Interface to bind (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on (default: 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes (development)")
    serve_parser.add_argument(
        "--log-level",
        type=str,
        default="info",
        choices=["critical", "error", "warning", "info", "debug"],
        help="Log level for the app and uvicorn (default: info)",
    )
    serve_parser.epilog = (
        "Examples:\n"
        "  earnwale serve --port 8000\n"
        "  earnwale serve --host 0.0.0.0 --reload\n"
    )

    # games subcommand
    games_parser = subparsers.add_parser("games", help="List games, highest rating first")
    games_parser.add_argument("--json", action="store_true", help="Output raw JSON")
    games_parser.add_argument(
        "--uri",
        type=str,
        default=None,
        help="MongoDB connection string (overrides MONGODB_URI from config)",
    )
    games_parser.add_argument(
        "--database",
        type=str,
        default=None,
        help="Database name (overrides MONGODB_DATABASE from config)",
    )

    return parser


def main() -> None:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args()

    if args.command == "serve":
        rc = cmd_serve(args)
    elif args.command == "games":
        rc = cmd_games(args)
    else:
        parser.print_help()
        rc = 2

    sys.exit(rc)


if __name__ == "__main__":
    main()
