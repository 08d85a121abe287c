"""Tests for aggregate views."""
from greenpages import aggregate
from greenpages.aggregate import (
    count_by_year,
    count_by_author,
    count_by_publisher,
    top_n,
    ratings_grouped_by_author,
    all_titles,
)
from greenpages.models import AuthorFilter, BookRecord, RankedEntry, YearFilter
from greenpages.parse import parse_records


def make_books():
    return [
        BookRecord(title="Alpha", authors=("A. Smith", "B. Jones"), publisher="Acme",
                   publication_year=1985, average_rating=4.5, ratings_count=100, page_count=300),
        BookRecord(title="Beta", authors=("A. Smith",), publisher="Acme",
                   publication_year=1990, average_rating=3.9, ratings_count=50, page_count=120),
        BookRecord(title="Gamma", authors=("C. Brown",), publisher="Zenith",
                   publication_year=1995, average_rating=4.1, ratings_count=900, page_count=None),
        BookRecord(title=None, authors=("C. Brown",), publisher=None,
                   publication_year=None, average_rating=5.0, ratings_count=None, page_count=800),
    ]


def test_author_and_publisher_scenario():
    """Two books, one co-authored, same publisher."""
    books = [
        BookRecord(authors=("A. Smith", "B. Jones"), publisher="Acme"),
        BookRecord(authors=("A. Smith",), publisher="Acme"),
    ]

    assert count_by_author(books) == {"A. Smith": 2, "B. Jones": 1}
    assert count_by_publisher(books) == {"Acme": 2}


def test_author_totals_match_author_occurrences():
    """Every author occurrence is counted once."""
    books = make_books()

    assert sum(count_by_author(books).values()) == sum(len(b.authors) for b in books)


def test_publisher_total_bounded_by_records():
    """A record contributes at most one publisher count."""
    books = make_books()

    assert sum(count_by_publisher(books).values()) <= len(books)
    assert count_by_publisher(books) == {"Acme": 2, "Zenith": 1}


def test_count_by_year_sorted_and_skips_missing():
    """Years ascend; records without a year are left out."""
    books = [
        BookRecord(publication_year=2001),
        BookRecord(publication_year=1999),
        BookRecord(publication_year=None),
        BookRecord(publication_year=2001),
    ]

    assert count_by_year(books) == [(1999, 1), (2001, 2)]


def test_count_by_year_filters():
    """Filters apply to the years present."""
    books = make_books()

    assert count_by_year(books, YearFilter.before(1990)) == [(1985, 1)]
    assert count_by_year(books, YearFilter.after(1986)) == [(1990, 1), (1995, 1)]
    assert count_by_year(books, YearFilter.all()) == [(1985, 1), (1990, 1), (1995, 1)]


def test_year_filter_keys():
    """Dashboard selector keys map to fixed thresholds."""
    assert YearFilter.from_key("before1990") == YearFilter.before(1990)
    assert YearFilter.from_key("after1986") == YearFilter.after(1986)
    assert YearFilter.from_key("all") == YearFilter.all()

    try:
        YearFilter.from_key("sometime")
    except ValueError:
        pass
    else:
        raise AssertionError("expected ValueError")


def test_blank_date_excluded_from_year_counts():
    """A blank date is not counted under any year."""
    text = "title,publication_date\nDated,12/1/1987\nUndated,\n"

    assert count_by_year(parse_records(text)) == [(1987, 1)]


def test_top_n_orders_descending_with_stable_ties():
    """Ties keep their original order."""
    data = {"a": 1, "b": 3, "c": 3, "d": 2}

    result = top_n(data, 3)

    assert result == [RankedEntry("b", 3), RankedEntry("c", 3), RankedEntry("d", 2)]


def test_top_n_bounds():
    """n larger than the data returns everything; n of 0 returns nothing."""
    data = [("x", 1.5), ("y", 2.5)]

    assert top_n(data, 10) == [RankedEntry("y", 2.5), RankedEntry("x", 1.5)]
    assert top_n(data, 0) == []
    assert top_n({}, 5) == []


def test_top_n_accepts_ranked_entries():
    """RankedEntry input is ranked as-is."""
    entries = [RankedEntry("low", 1), RankedEntry("high", 9)]

    assert [e.label for e in top_n(entries, 2)] == ["high", "low"]


def test_ratings_grouped_by_author():
    """Each author lists their titled, rated books; co-authored books repeat."""
    grouped = ratings_grouped_by_author(make_books())

    assert grouped["A. Smith"] == [RankedEntry("Alpha", 4.5), RankedEntry("Beta", 3.9)]
    assert grouped["B. Jones"] == [RankedEntry("Alpha", 4.5)]
    # untitled book is skipped, author still present
    assert grouped["C. Brown"] == [RankedEntry("Gamma", 4.1)]


def test_malformed_rating_still_ranked():
    """A rating of N/A takes part in rating views as 0.0."""
    text = "title,authors,average_rating\nGood,A,4.0\nOdd,A,N/A\nUnrated,A,\n"
    books = parse_records(text)

    assert aggregate.top_rated(books, AuthorFilter.author("A"), 10) == [
        RankedEntry("Good", 4.0),
        RankedEntry("Odd", 0.0),
    ]


def test_nan_rating_does_not_outrank_real_ratings():
    """A NaN rating sorts as 0.0 and keeps the ranking ordered."""
    text = "title,authors,average_rating\nA,X,4.0\nB,X,NaN\nC,X,3.0\nD,X,4.5\n"
    books = parse_records(text)

    assert aggregate.top_rated(books, AuthorFilter.all(), 10) == [
        RankedEntry("D", 4.5),
        RankedEntry("A", 4.0),
        RankedEntry("C", 3.0),
        RankedEntry("B", 0.0),
    ]


def test_top_rated_all_and_single_author():
    """Top rated across all authors repeats co-authored books."""
    books = make_books()

    everyone = aggregate.top_rated(books, AuthorFilter.all(), 10)
    assert [e.label for e in everyone] == ["Alpha", "Alpha", "Gamma", "Beta"]

    smith = aggregate.top_rated(books, AuthorFilter.author("A. Smith"), 1)
    assert smith == [RankedEntry("Alpha", 4.5)]

    assert aggregate.top_rated(books, AuthorFilter.author("Nobody"), 10) == []


def test_all_titles_not_deduplicated():
    """Titles appear once per record and can be sorted."""
    books = [BookRecord(title="Zed"), BookRecord(title="Alpha"), BookRecord(), BookRecord(title="Zed")]

    assert all_titles(books) == ["Zed", "Alpha", "Zed"]
    assert all_titles(books, sort=True) == ["Alpha", "Zed", "Zed"]


def test_top_by_pages_and_ratings_count():
    """Records missing the title or the field are skipped."""
    books = make_books()

    assert aggregate.top_by_pages(books, 5) == [RankedEntry("Alpha", 300), RankedEntry("Beta", 120)]
    assert aggregate.top_by_ratings_count(books, 2) == [RankedEntry("Gamma", 900), RankedEntry("Alpha", 100)]


def test_author_filter_options():
    """The selector offers the most prolific authors."""
    books = make_books()

    assert aggregate.author_filter_options(books, 2) == ["A. Smith", "C. Brown"]


def test_empty_records_give_empty_views():
    """No records means every view is empty."""
    assert count_by_year([]) == []
    assert count_by_author([]) == {}
    assert count_by_publisher([]) == {}
    assert ratings_grouped_by_author([]) == {}
    assert all_titles([]) == []
    assert aggregate.top_rated([]) == []
    assert aggregate.top_authors([]) == []
    assert aggregate.top_by_pages([]) == []


def test_views_are_idempotent():
    """Recomputing from the same records gives the same answer."""
    books = make_books()

    assert count_by_author(books) == count_by_author(books)
    assert count_by_year(books, YearFilter.after(1986)) == count_by_year(books, YearFilter.after(1986))
    assert aggregate.top_rated(books) == aggregate.top_rated(books)
