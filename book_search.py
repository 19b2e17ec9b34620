#!/usr/bin/env python3
"""Book Search CLI - look up books by ISBN, title, author or keyword."""
import argparse
import asyncio
import logging
import sys

from booksearch.async_client import AsyncFetchClient
from booksearch.client import FetchClient
from booksearch.config import Config
from booksearch.display import FORMATS, render_history, render_outcome
from booksearch.history import HistoryStore, JsonFileStorage
from booksearch.models import SearchMode, SearchStatus
from booksearch.providers import GoogleBooksProvider
from booksearch.service import AsyncBookSearchService, BookSearchService

logger = logging.getLogger(__name__)

MODES = [mode.value for mode in SearchMode]


def setup_storage(config: Config):
    """Pick the history storage backend."""
    if config.HISTORY_BACKEND == "postgres":
        from booksearch.database import PostgresStorage

        storage = PostgresStorage(config.DATABASE_URL)
        storage.init_schema()
        return storage
    return JsonFileStorage(config.HISTORY_DIR)


def setup_history(config: Config, storage) -> HistoryStore:
    return HistoryStore(
        storage,
        key=config.HISTORY_KEY,
        limit=config.HISTORY_LIMIT
    )


def run_search_sync(args, config: Config, history: HistoryStore):
    """Search using the blocking client."""
    with FetchClient(timeout=config.DEFAULT_TIMEOUT) as client:
        service = BookSearchService(
            client,
            history,
            primary=GoogleBooksProvider(max_results=config.MAX_RESULTS)
        )
        if args.history_index is not None:
            return service.search_from_history(args.history_index, args.mode)
        return service.search(args.mode, args.query)


async def run_search_async(args, config: Config, history: HistoryStore):
    """Search using the async client."""
    async with AsyncFetchClient(timeout=config.DEFAULT_TIMEOUT) as client:
        service = AsyncBookSearchService(
            client,
            history,
            primary=GoogleBooksProvider(max_results=config.MAX_RESULTS)
        )
        if args.history_index is not None:
            return await service.search_from_history(args.history_index, args.mode)
        return await service.search(args.mode, args.query)


def search_books(args, config: Config) -> int:
    storage = setup_storage(config)
    try:
        history = setup_history(config, storage)
        if args.use_async:
            outcome = asyncio.run(run_search_async(args, config, history))
        else:
            outcome = run_search_sync(args, config, history)
    finally:
        storage.close()

    print(render_outcome(outcome, args.format))
    return 1 if outcome.status == SearchStatus.FAILED else 0


def show_history(args, config: Config) -> int:
    storage = setup_storage(config)
    try:
        history = setup_history(config, storage)
        print(render_history(history.entries))
    finally:
        storage.close()
    return 0


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Book Search - find book metadata on Google Books and Open Library",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Look up an ISBN (falls back to Open Library)
  %(prog)s search 978-0-14-044913-6

  # Title search as JSON
  %(prog)s search "war and peace" --mode title --format json

  # Re-run the most recent query as an author search
  %(prog)s search --from-history 0 --mode author

  # Show recent queries
  %(prog)s history
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Search command
    search_parser = subparsers.add_parser("search", help="Search for books")
    search_parser.add_argument("query", nargs="?", default="", help="Search query")
    search_parser.add_argument("--mode", choices=MODES, default="isbn", help="Search mode (default: isbn)")
    search_parser.add_argument("--format", choices=FORMATS, default="table", help="Output format")
    search_parser.add_argument("--from-history", dest="history_index", type=int, metavar="N",
                               help="Re-run history entry N instead of QUERY")
    search_parser.add_argument("--async", dest="use_async", action="store_true", help="Use async client")

    # History command
    subparsers.add_parser("history", help="Show recent searches")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    config = Config()

    # Configure logging
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    try:
        if args.command == "search":
            sys.exit(search_books(args, config))

        elif args.command == "history":
            sys.exit(show_history(args, config))

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
