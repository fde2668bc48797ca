"""Deterministic taste summaries derived from the liked titles."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from ..models import LikedTitle
from ..utils import decade_of

EMPTY_PROFILE = (
    "Exploring cinematic preferences - ready to discover new favorites across "
    "all genres and styles."
)
PROFILE_OPENING = "You have sophisticated taste in cinema with a preference for "
PROFILE_CLOSING = (
    ". Your selections suggest an appreciation for strong storytelling, complex "
    "characters, and films that challenge conventional narratives."
)


class PreferenceAnalyzer:
    """Summarise genre and decade patterns of the liked titles."""

    def __init__(self, genre_limit: int = 3):
        self._genre_limit = genre_limit

    def genre_preferences(self, liked: Sequence[LikedTitle]) -> list[str]:
        """Return genres by descending count, ties in first-seen order."""

        # Counter keeps insertion order and most_common() sorts stably.
        counts = Counter(title.genre for title in liked)
        return [genre for genre, _ in counts.most_common(self._genre_limit)]

    def decade_preferences(self, liked: Sequence[LikedTitle]) -> list[int]:
        counts = Counter(decade_of(title.year) for title in liked)
        return [decade for decade, _ in counts.most_common()]

    def summarize(self, liked: Sequence[LikedTitle]) -> str:
        if not liked:
            return EMPTY_PROFILE

        genres = self.genre_preferences(liked)
        decades = self.decade_preferences(liked)

        profile = PROFILE_OPENING
        if genres:
            profile += " and ".join(genres[:2]).lower() + " films"
        if decades:
            if decades[0] > 0:
                profile += f", particularly drawn to {decades[0]}s classics"
            else:
                profile += ", drawn to stories from every era"
        return profile + PROFILE_CLOSING
