"""Aggregate views over parsed book records.

Every function here is pure: it takes the record sequence (and any filter
selector) as arguments and returns a fresh result. Dict results keep first
encounter order, which ranking relies on to break ties.
"""
from collections.abc import Mapping
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from greenpages.models import AuthorFilter, BookRecord, RankedEntry, YearFilter

Rankable = Union[Mapping, Iterable[RankedEntry], Iterable[Tuple[str, Union[int, float]]]]


def count_by_year(
    records: Sequence[BookRecord],
    year_filter: Optional[YearFilter] = None
) -> List[Tuple[int, int]]:
    """
    Count books per publication year.

    Args:
        records: Parsed records
        year_filter: Which years to keep (default: all)

    Returns:
        (year, count) pairs in ascending year order
    """
    year_filter = year_filter or YearFilter.all()

    counts: Dict[int, int] = {}
    for record in records:
        if record.publication_year is None:
            continue
        counts[record.publication_year] = counts.get(record.publication_year, 0) + 1

    return [(year, counts[year]) for year in sorted(counts) if year_filter.matches(year)]


def count_by_author(records: Sequence[BookRecord]) -> Dict[str, int]:
    """Count books per author; co-authored books count for each author."""
    counts: Dict[str, int] = {}
    for record in records:
        for author in record.authors:
            counts[author] = counts.get(author, 0) + 1
    return counts


def count_by_publisher(records: Sequence[BookRecord]) -> Dict[str, int]:
    """Count books per publisher, at most once per record."""
    counts: Dict[str, int] = {}
    for record in records:
        if record.publisher:
            counts[record.publisher] = counts.get(record.publisher, 0) + 1
    return counts


def _entries(data: Rankable) -> List[RankedEntry]:
    if isinstance(data, Mapping):
        return [RankedEntry(str(label), value) for label, value in data.items()]

    entries = []
    for item in data:
        if isinstance(item, RankedEntry):
            entries.append(item)
        else:
            label, value = item
            entries.append(RankedEntry(str(label), value))
    return entries


def top_n(data: Rankable, n: int) -> List[RankedEntry]:
    """
    Rank entries by value, highest first, and keep the first n.

    Ties keep the order in which the entries were given. This is the one
    ranking routine behind every top-N chart.

    Args:
        data: Mapping of label to value, (label, value) pairs or RankedEntry items
        n: Maximum number of entries to return

    Returns:
        At most n RankedEntry items
    """
    if n <= 0:
        return []
    # sorted() is stable, so equal values stay in input order
    return sorted(_entries(data), key=lambda entry: entry.value, reverse=True)[:n]


def ratings_grouped_by_author(records: Sequence[BookRecord]) -> Dict[str, List[RankedEntry]]:
    """
    Collect (title, average rating) entries per author.

    A book with several authors is listed under each of them. Authors whose
    books lack a title or rating are still present, with an empty list.
    """
    grouped: Dict[str, List[RankedEntry]] = {}
    for record in records:
        for author in record.authors:
            books = grouped.setdefault(author, [])
            if record.title and record.average_rating is not None:
                books.append(RankedEntry(record.title, record.average_rating))
    return grouped


def all_titles(records: Sequence[BookRecord], sort: bool = False) -> List[str]:
    """Every non-empty title, one per record, optionally sorted."""
    titles = [record.title for record in records if record.title]
    return sorted(titles) if sort else titles


def top_authors(records: Sequence[BookRecord], n: int = 10) -> List[RankedEntry]:
    return top_n(count_by_author(records), n)


def top_publishers(records: Sequence[BookRecord], n: int = 10) -> List[RankedEntry]:
    return top_n(count_by_publisher(records), n)


def top_rated(
    records: Sequence[BookRecord],
    author_filter: Optional[AuthorFilter] = None,
    n: int = 10
) -> List[RankedEntry]:
    """
    Highest rated books, optionally for a single author.

    Without an author, the per-author groups are concatenated, so a
    co-authored book can show up once per author.
    """
    author_filter = author_filter or AuthorFilter.all()
    grouped = ratings_grouped_by_author(records)

    if author_filter.is_all:
        ratings = [entry for books in grouped.values() for entry in books]
    else:
        ratings = grouped.get(author_filter.name, [])

    return top_n(ratings, n)


def _by_title(records: Sequence[BookRecord], attribute: str) -> List[RankedEntry]:
    entries = []
    for record in records:
        value = getattr(record, attribute)
        if record.title and value is not None:
            entries.append(RankedEntry(record.title, value))
    return entries


def top_by_pages(records: Sequence[BookRecord], n: int = 10) -> List[RankedEntry]:
    return top_n(_by_title(records, "page_count"), n)


def top_by_ratings_count(records: Sequence[BookRecord], n: int = 10) -> List[RankedEntry]:
    return top_n(_by_title(records, "ratings_count"), n)


def author_filter_options(records: Sequence[BookRecord], n: int = 5) -> List[str]:
    """Author names offered by the top-rated selector."""
    return [entry.label for entry in top_authors(records, n)]
