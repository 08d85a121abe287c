"""The full set of named aggregates handed to a rendering layer."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from greenpages import aggregate
from greenpages.config import Config
from greenpages.labels import get_labels
from greenpages.models import AuthorFilter, BookRecord, RankedEntry, YearFilter


@dataclass
class DashboardView:
    """Every chart's data for one record sequence and one set of selectors."""
    titles: List[str]
    books_by_year: List[Tuple[int, int]]
    top_authors: List[RankedEntry]
    top_publishers: List[RankedEntry]
    top_rated: List[RankedEntry]
    author_options: List[str]
    year_filter: YearFilter
    author_filter: AuthorFilter
    labels: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        """True when there was nothing to aggregate."""
        return not (self.titles or self.books_by_year or self.top_authors or self.top_publishers)

    def as_dict(self) -> Dict[str, Any]:
        """Plain structures, ready for JSON."""
        def ranked(entries):
            return [{"label": e.label, "value": e.value} for e in entries]

        return {
            "titles": list(self.titles),
            "books_by_year": [{"year": year, "count": count} for year, count in self.books_by_year],
            "top_authors": ranked(self.top_authors),
            "top_publishers": ranked(self.top_publishers),
            "top_rated": ranked(self.top_rated),
            "author_options": list(self.author_options),
            "year_filter": {"mode": self.year_filter.mode, "threshold": self.year_filter.threshold},
            "author_filter": self.author_filter.name,
            "labels": self.labels,
        }


def build_dashboard(
    records: Sequence[BookRecord],
    year_filter: Optional[YearFilter] = None,
    author_filter: Optional[AuthorFilter] = None,
    language: Optional[str] = None,
    top_n: Optional[int] = None,
    author_options: Optional[int] = None
) -> DashboardView:
    """
    Recompute every aggregate from scratch.

    Args:
        records: Parsed records
        year_filter: Year selector for the by-year chart
        author_filter: Author selector for the top-rated chart
        language: Label set to pass through
        top_n: Size of each top-N chart
        author_options: Number of authors offered by the author selector

    Returns:
        DashboardView with fresh results
    """
    year_filter = year_filter or YearFilter.all()
    author_filter = author_filter or AuthorFilter.all()
    top_n = Config.DEFAULT_TOP_N if top_n is None else top_n
    author_options = Config.AUTHOR_OPTIONS if author_options is None else author_options

    return DashboardView(
        titles=aggregate.all_titles(records, sort=True),
        books_by_year=aggregate.count_by_year(records, year_filter),
        top_authors=aggregate.top_authors(records, top_n),
        top_publishers=aggregate.top_publishers(records, top_n),
        top_rated=aggregate.top_rated(records, author_filter, top_n),
        author_options=aggregate.author_filter_options(records, author_options),
        year_filter=year_filter,
        author_filter=author_filter,
        labels=get_labels(language or Config.DEFAULT_LANGUAGE),
    )
