"""Static TMDB genre tables used when the live lists cannot be loaded."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GenreDefinition:
    """A TMDB genre identifier and its display name."""

    id: int
    name: str


FILM_GENRES: tuple[GenreDefinition, ...] = (
    GenreDefinition(28, "Action"),
    GenreDefinition(12, "Adventure"),
    GenreDefinition(16, "Animation"),
    GenreDefinition(35, "Comedy"),
    GenreDefinition(80, "Crime"),
    GenreDefinition(99, "Documentary"),
    GenreDefinition(18, "Drama"),
    GenreDefinition(10751, "Family"),
    GenreDefinition(14, "Fantasy"),
    GenreDefinition(36, "History"),
    GenreDefinition(27, "Horror"),
    GenreDefinition(10402, "Music"),
    GenreDefinition(9648, "Mystery"),
    GenreDefinition(10749, "Romance"),
    GenreDefinition(878, "Science Fiction"),
    GenreDefinition(10770, "TV Movie"),
    GenreDefinition(53, "Thriller"),
    GenreDefinition(10752, "War"),
    GenreDefinition(37, "Western"),
)

SERIES_GENRES: tuple[GenreDefinition, ...] = (
    GenreDefinition(10759, "Action & Adventure"),
    GenreDefinition(16, "Animation"),
    GenreDefinition(35, "Comedy"),
    GenreDefinition(80, "Crime"),
    GenreDefinition(99, "Documentary"),
    GenreDefinition(18, "Drama"),
    GenreDefinition(10751, "Family"),
    GenreDefinition(10762, "Kids"),
    GenreDefinition(9648, "Mystery"),
    GenreDefinition(10763, "News"),
    GenreDefinition(10764, "Reality"),
    GenreDefinition(10765, "Sci-Fi & Fantasy"),
    GenreDefinition(10766, "Soap"),
    GenreDefinition(10767, "Talk"),
    GenreDefinition(10768, "War & Politics"),
    GenreDefinition(37, "Western"),
)


def genre_map(definitions: tuple[GenreDefinition, ...]) -> dict[int, str]:
    """Return an ``id -> name`` lookup for a genre table."""

    return {definition.id: definition.name for definition in definitions}
