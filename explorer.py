#!/usr/bin/env python3
"""Green Pages Book Explorer CLI - dashboard aggregates in the terminal."""
import argparse
import asyncio
import sys
import json
from tabulate import tabulate
from greenpages.client import BooksSourceClient, load_records, is_url
from greenpages.async_client import AsyncBooksSourceClient
from greenpages.dashboard import build_dashboard
from greenpages.labels import LABELS, get_labels
from greenpages.models import AuthorFilter, YearFilter
from greenpages import aggregate
from greenpages.config import Config
import logging

logger = logging.getLogger(__name__)

TOP_VIEWS = ("authors", "publishers", "rated", "pages", "ratings-count")


def load_books_sync(args, config: Config):
    """Load records using the sync client."""
    with BooksSourceClient(
        timeout=config.DEFAULT_TIMEOUT,
        max_retries=config.DEFAULT_MAX_RETRIES
    ) as client:
        return load_records(args.source, client)


async def load_books_async(args, config: Config):
    """Load records using the async client (URLs only)."""
    async with AsyncBooksSourceClient(timeout=config.DEFAULT_TIMEOUT) as client:
        return await client.load_records(args.source)


def load_books(args, config: Config):
    """Pick a loader; local files always go through the sync client."""
    if args.use_async and is_url(args.source):
        books = asyncio.run(load_books_async(args, config))
    else:
        books = load_books_sync(args, config)
    logger.info(f"Loaded {len(books)} books from {args.source}")
    return books


def display_ranked(title: str, entries, format_type: str, value_header: str = "Value"):
    """Display a top-N list in specified format."""
    if format_type == "table":
        rows = [
            [i, e.label[:60] + "..." if len(e.label) > 60 else e.label, e.value]
            for i, e in enumerate(entries, 1)
        ]
        print(f"\n{title}")
        print(tabulate(rows, headers=["#", "Label", value_header], tablefmt="grid"))

    elif format_type == "json":
        print(json.dumps([{"label": e.label, "value": e.value} for e in entries], indent=2, ensure_ascii=False))

    elif format_type == "compact":
        print(f"{title}:")
        for i, e in enumerate(entries, 1):
            print(f"{i}. {e.label} - {e.value}")


def display_years(title: str, years, format_type: str):
    """Display (year, count) pairs."""
    if format_type == "table":
        print(f"\n{title}")
        print(tabulate(years, headers=["Year", "Books"], tablefmt="grid"))

    elif format_type == "json":
        print(json.dumps([{"year": y, "count": c} for y, c in years], indent=2))

    elif format_type == "compact":
        print(f"{title}:")
        for year, count in years:
            print(f"{year}: {count}")


def display_titles(title: str, titles, format_type: str):
    """Display the list of titles."""
    if format_type == "json":
        print(json.dumps(titles, indent=2, ensure_ascii=False))
    else:
        print(f"\n{title} ({len(titles)})")
        for t in titles:
            print(f"  {t}")


def show_summary(args, config: Config):
    """Show every dashboard view."""
    books = load_books(args, config)
    view = build_dashboard(
        books,
        year_filter=YearFilter.from_key(args.year_filter),
        author_filter=AuthorFilter.author(args.author) if args.author else AuthorFilter.all(),
        language=args.lang,
        top_n=args.limit,
        author_options=config.AUTHOR_OPTIONS
    )

    if args.format == "json":
        print(json.dumps(view.as_dict(), indent=2, ensure_ascii=False))
        return

    labels = view.labels
    print("\n" + "=" * 50)
    print(labels["dashboard_title"])
    print("=" * 50)

    if view.is_empty:
        print("No book data available.\n")
        return

    print(f"{labels['book_titles']}: {len(view.titles)}")
    display_years(labels["year_chart_title"], view.books_by_year, args.format)
    display_ranked(labels["top_authors"], view.top_authors, args.format, "Books")
    display_ranked(labels["top_publishers"], view.top_publishers, args.format, "Books")
    rated_title = f"{labels['top_rated']} ({args.author or labels['all_books']})"
    display_ranked(rated_title, view.top_rated, args.format, "Rating")
    print(f"\nAuthor filter options: {', '.join(view.author_options)}\n")


def show_titles(args, config: Config):
    """List all titles, sorted."""
    books = load_books(args, config)
    labels = get_labels(args.lang)
    display_titles(labels["book_titles"], aggregate.all_titles(books, sort=True), args.format)


def show_years(args, config: Config):
    """Show books per publication year."""
    books = load_books(args, config)
    labels = get_labels(args.lang)
    years = aggregate.count_by_year(books, YearFilter.from_key(args.year_filter))
    display_years(labels["year_chart_title"], years, args.format)


def show_top(args, config: Config):
    """Show one top-N view."""
    books = load_books(args, config)
    labels = get_labels(args.lang)

    if args.view == "authors":
        display_ranked(labels["top_authors"], aggregate.top_authors(books, args.limit), args.format, "Books")
    elif args.view == "publishers":
        display_ranked(labels["top_publishers"], aggregate.top_publishers(books, args.limit), args.format, "Books")
    elif args.view == "rated":
        author_filter = AuthorFilter.author(args.author) if args.author else AuthorFilter.all()
        entries = aggregate.top_rated(books, author_filter, args.limit)
        display_ranked(labels["top_rated"], entries, args.format, "Rating")
    elif args.view == "pages":
        display_ranked("Longest Books", aggregate.top_by_pages(books, args.limit), args.format, "Pages")
    elif args.view == "ratings-count":
        display_ranked("Most Rated Books", aggregate.top_by_ratings_count(books, args.limit), args.format, "Ratings")


def build_parser(config: Config) -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Green Pages Book Explorer - dashboard aggregates from a books CSV",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Full dashboard from the default source
  %(prog)s summary

  # Books per year before 1990, in French
  %(prog)s --lang fr years --filter before1990

  # Top rated books of one author
  %(prog)s top rated --author "J.K. Rowling" --limit 5

  # Fetch a remote CSV asynchronously
  %(prog)s --source https://example.com/books.csv --async summary --format json
        """
    )

    parser.add_argument("--source", default=config.BOOKS_SOURCE, help=f"CSV path or URL (default: {config.BOOKS_SOURCE})")
    parser.add_argument("--lang", choices=sorted(LABELS), default=config.DEFAULT_LANGUAGE, help="Label set")
    parser.add_argument("--async", dest="use_async", action="store_true", help="Use async client for URLs")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Summary command
    summary_parser = subparsers.add_parser("summary", help="Show every dashboard view")
    summary_parser.add_argument("--filter", dest="year_filter", choices=YearFilter.KEYS, default="all", help="Year filter")
    summary_parser.add_argument("--author", help="Restrict top rated books to one author")
    summary_parser.add_argument("--limit", type=int, default=config.DEFAULT_TOP_N, help=f"Top-N size (default: {config.DEFAULT_TOP_N})")
    summary_parser.add_argument("--format", choices=["table", "json", "compact"], default="table", help="Output format")

    # Titles command
    titles_parser = subparsers.add_parser("titles", help="List all book titles")
    titles_parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format")

    # Years command
    years_parser = subparsers.add_parser("years", help="Books per publication year")
    years_parser.add_argument("--filter", dest="year_filter", choices=YearFilter.KEYS, default="all", help="Year filter")
    years_parser.add_argument("--format", choices=["table", "json", "compact"], default="table", help="Output format")

    # Top command
    top_parser = subparsers.add_parser("top", help="Show a top-N list")
    top_parser.add_argument("view", choices=TOP_VIEWS, help="Which ranking")
    top_parser.add_argument("--limit", type=int, default=config.DEFAULT_TOP_N, help=f"Top-N size (default: {config.DEFAULT_TOP_N})")
    top_parser.add_argument("--author", help="Author for 'top rated'")
    top_parser.add_argument("--format", choices=["table", "json", "compact"], default="table", help="Output format")

    return parser


def main(argv=None):
    """Main CLI entry point."""
    config = Config()
    parser = build_parser(config)
    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        if args.command == "summary":
            show_summary(args, config)

        elif args.command == "titles":
            show_titles(args, config)

        elif args.command == "years":
            show_years(args, config)

        elif args.command == "top":
            show_top(args, config)

    except KeyboardInterrupt:
        logger.info("\n⚠️  Interrupted by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"❌ Error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
