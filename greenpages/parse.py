"""Parse raw books CSV text into BookRecord objects."""
import csv
import io
import logging
import math
import re
from typing import Dict, List, Optional, Tuple

from greenpages.models import BookRecord

logger = logging.getLogger(__name__)

TITLE = "title"
AUTHORS = "authors"
PUBLISHER = "publisher"
PUBLICATION_DATE = "publication_date"
AVERAGE_RATING = "average_rating"
RATINGS_COUNT = "ratings_count"
NUM_PAGES = "num_pages"

RECOGNIZED_COLUMNS = (
    TITLE, AUTHORS, PUBLISHER, PUBLICATION_DATE,
    AVERAGE_RATING, RATINGS_COUNT, NUM_PAGES,
)

_DIGITS = re.compile(r"[0-9]+")
_INTEGER = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")

# Default limit is 128 KiB per cell
FIELD_SIZE_LIMIT = 2 ** 31 - 1
csv.field_size_limit(FIELD_SIZE_LIMIT)


def _clean(value: Optional[str]) -> Optional[str]:
    """Trim a cell; blank cells become None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_publication_year(value: Optional[str]) -> Optional[int]:
    """
    Take the year from a date like "12/1/1987".

    The last "/" component must be made of digits only; anything else
    leaves the year unset.
    """
    if value is None:
        return None
    last = value.split("/")[-1].strip()
    if not _DIGITS.fullmatch(last):
        return None
    return int(last)


def split_authors(value: Optional[str]) -> Tuple[str, ...]:
    """Split "A. Smith/B. Jones" into trimmed, non-empty names."""
    if value is None:
        return ()
    return tuple(name.strip() for name in value.split("/") if name.strip())


def parse_rating(value: Optional[str]) -> Optional[float]:
    """
    Parse an average rating.

    A blank or missing cell leaves the rating unset; a present but
    malformed value such as "N/A", "NaN" or "1_000" counts as 0.0.
    """
    value = _clean(value)
    if value is None:
        return None
    rating = float(value) if _DECIMAL.fullmatch(value) else None
    if rating is None or not math.isfinite(rating):
        logger.debug(f"Unparsable rating {value!r}, using 0.0")
        return 0.0
    return rating


def parse_count(value: Optional[str]) -> Optional[int]:
    """Parse an integer count; malformed values count as 0."""
    value = _clean(value)
    if value is None:
        return None
    if not _INTEGER.fullmatch(value):
        logger.debug(f"Unparsable count {value!r}, using 0")
        return 0
    return int(value)


def parse_row(row: Dict[str, str]) -> BookRecord:
    """
    Build a record from a header-keyed row.

    Missing keys mean the column (or cell) was absent.
    """
    return BookRecord(
        title=_clean(row.get(TITLE)),
        authors=split_authors(row.get(AUTHORS)),
        publisher=_clean(row.get(PUBLISHER)),
        publication_year=parse_publication_year(row.get(PUBLICATION_DATE)),
        average_rating=parse_rating(row.get(AVERAGE_RATING)),
        ratings_count=parse_count(row.get(RATINGS_COUNT)),
        page_count=parse_count(row.get(NUM_PAGES)),
    )


def parse_records(text: Optional[str]) -> List[BookRecord]:
    """
    Parse a whole CSV blob.

    Args:
        text: CSV text with a header row first

    Returns:
        Records in input row order (empty if there is no data)
    """
    if not text:
        return []

    # Excel exports carry a BOM
    if text.startswith("\ufeff"):
        text = text[1:]

    reader = csv.reader(io.StringIO(text))
    try:
        header = next(reader, None)
    except csv.Error as e:
        logger.warning(f"Unreadable header row: {e}")
        return []
    if header is None:
        return []

    columns = [name.strip() for name in header]
    wanted = [(i, name) for i, name in enumerate(columns) if name in RECOGNIZED_COLUMNS]

    records = []
    while True:
        try:
            cells = next(reader)
        except StopIteration:
            break
        except csv.Error as e:
            # The reader resumes at the next line
            logger.warning(f"Skipping unreadable CSV line {reader.line_num}: {e}")
            continue

        # Blank line; a row of empty cells still counts as a record
        if not cells or (len(cells) == 1 and not cells[0].strip()):
            continue

        if len(cells) != len(columns):
            logger.debug(
                f"Line {reader.line_num} has {len(cells)} cells, header has {len(columns)}; mapping by position"
            )

        row = {name: cells[i] for i, name in wanted if i < len(cells)}
        records.append(parse_row(row))

    logger.info(f"Parsed {len(records)} book records")
    return records
