"""Tests for the deterministic preference summary."""

from __future__ import annotations

from cinesage.models import LikedTitle
from cinesage.services.analyzer import EMPTY_PROFILE, PreferenceAnalyzer


def _title(identifier: int, genre: str, year: int) -> LikedTitle:
    return LikedTitle(id=identifier, title=f"Title {identifier}", genre=genre, year=year)


def test_empty_selection_returns_placeholder() -> None:
    assert PreferenceAnalyzer().summarize([]) == EMPTY_PROFILE


def test_genre_ties_keep_first_encountered_order() -> None:
    """Equal counts are ordered by first appearance in the liked list."""

    liked = [
        _title(1, "Crime", 1994),
        _title(2, "Drama", 1994),
        _title(3, "Sci-Fi", 2010),
        _title(4, "Drama", 1999),
        _title(5, "Crime", 1972),
    ]

    assert PreferenceAnalyzer().genre_preferences(liked) == ["Crime", "Drama", "Sci-Fi"]


def test_decade_preferences_sort_by_count_then_first_seen() -> None:
    liked = [
        _title(1, "Drama", 2014),
        _title(2, "Drama", 1994),
        _title(3, "Drama", 1999),
        _title(4, "Drama", 2016),
        _title(5, "Drama", 0),
    ]

    assert PreferenceAnalyzer().decade_preferences(liked) == [2010, 1990, 0]


def test_summary_names_top_two_genres_and_top_decade() -> None:
    liked = [
        _title(1, "Drama", 1994),
        _title(2, "Crime", 1994),
        _title(3, "Drama", 1999),
        _title(4, "Sci-Fi", 2010),
    ]

    summary = PreferenceAnalyzer().summarize(liked)

    assert "drama and crime films" in summary
    assert "particularly drawn to 1990s classics" in summary
    assert summary.endswith("challenge conventional narratives.")


def test_summary_with_single_genre_and_unknown_years() -> None:
    summary = PreferenceAnalyzer().summarize([_title(1, "Horror", 0)])

    assert "preference for horror films" in summary
    assert "every era" in summary
    assert "0s classics" not in summary
