"""Data models for book records and dashboard selectors."""
from dataclasses import dataclass
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class BookRecord:
    """One parsed book row. Every attribute may be missing."""
    title: Optional[str] = None
    authors: Tuple[str, ...] = ()
    publisher: Optional[str] = None
    publication_year: Optional[int] = None
    average_rating: Optional[float] = None
    ratings_count: Optional[int] = None
    page_count: Optional[int] = None


@dataclass(frozen=True)
class RankedEntry:
    """A single row of a top-N list."""
    label: str
    value: Union[float, int]


@dataclass(frozen=True)
class YearFilter:
    """
    Selector narrowing which publication years are kept.

    mode is one of "all", "before" or "after"; threshold is exclusive.
    """
    mode: str = "all"
    threshold: Optional[int] = None

    # Dashboard selector keys
    KEYS = ("all", "before1990", "after1986")

    @classmethod
    def all(cls) -> "YearFilter":
        return cls("all")

    @classmethod
    def before(cls, threshold: int) -> "YearFilter":
        return cls("before", threshold)

    @classmethod
    def after(cls, threshold: int) -> "YearFilter":
        return cls("after", threshold)

    @classmethod
    def from_key(cls, key: str) -> "YearFilter":
        """Map a dashboard selector key to a filter."""
        if key == "all":
            return cls.all()
        if key == "before1990":
            return cls.before(1990)
        if key == "after1986":
            return cls.after(1986)
        raise ValueError(f"Unknown year filter: {key!r} (expected one of {', '.join(cls.KEYS)})")

    def matches(self, year: int) -> bool:
        if self.mode == "before":
            return year < self.threshold
        if self.mode == "after":
            return year > self.threshold
        return True


@dataclass(frozen=True)
class AuthorFilter:
    """Either every author, or a single author name passed through as-is."""
    name: Optional[str] = None

    @classmethod
    def all(cls) -> "AuthorFilter":
        return cls(None)

    @classmethod
    def author(cls, name: str) -> "AuthorFilter":
        return cls(name)

    @property
    def is_all(self) -> bool:
        return self.name is None
