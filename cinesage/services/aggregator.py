"""Cross-occurrence aggregation of related-title lookups."""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Protocol, Sequence

from ..models import (
    UNKNOWN_GENRE,
    CatalogPage,
    LikedTitle,
    MediaKind,
    Recommendation,
    RecommendationCategory,
    ScoredCandidate,
)

logger = logging.getLogger(__name__)

DEFAULT_CANDIDATE_LIMIT = 20
DEFAULT_RESULT_LIMIT = 10


class CatalogClient(Protocol):
    """Catalog operations the aggregator relies on.

    ``get_related`` must resolve to an empty page on failure instead of
    raising.
    """

    async def get_related(self, kind: MediaKind, title_id: int) -> CatalogPage: ...

    def resolve_genre(self, genre_id: int, kind: MediaKind = "film") -> str: ...


class RecommendationAggregator:
    """Rank catalog candidates by how many liked titles surfaced them."""

    def __init__(
        self,
        catalog: CatalogClient,
        *,
        candidate_limit: int = DEFAULT_CANDIDATE_LIMIT,
        result_limit: int = DEFAULT_RESULT_LIMIT,
    ):
        self._catalog = catalog
        self._candidate_limit = candidate_limit
        self._result_limit = result_limit

    async def aggregate(
        self,
        liked: Sequence[LikedTitle],
        *,
        excluded_ids: Iterable[int] = (),
    ) -> list[Recommendation]:
        """Return at most ``result_limit`` recommendations, strongest first."""

        if not liked:
            return []

        pages = await asyncio.gather(
            *(self._catalog.get_related(title.kind, title.id) for title in liked)
        )

        skip_ids = {title.id for title in liked}
        skip_ids.update(excluded_ids)
        scored = self._accumulate(pages, skip_ids)
        if not scored:
            return []

        ranked = sorted(
            scored.values(), key=lambda entry: entry.occurrence_count, reverse=True
        )[: self._candidate_limit]
        recommendations = [self._to_recommendation(entry) for entry in ranked]

        logger.info(
            "Aggregated %s candidates from %s liked titles into %s recommendations",
            len(scored),
            len(liked),
            min(len(recommendations), self._result_limit),
        )
        return recommendations[: self._result_limit]

    @staticmethod
    def _accumulate(
        pages: Sequence[CatalogPage], skip_ids: set[int]
    ) -> dict[int, ScoredCandidate]:
        """Count sightings per candidate id, preserving first-sighting order."""

        scored: dict[int, ScoredCandidate] = {}
        for page in pages:
            for candidate in page.results:
                if candidate.id in skip_ids:
                    continue
                entry = scored.get(candidate.id)
                if entry is None:
                    scored[candidate.id] = ScoredCandidate(candidate=candidate)
                else:
                    entry.occurrence_count += 1
        return scored

    def _to_recommendation(self, entry: ScoredCandidate) -> Recommendation:
        candidate = entry.candidate
        count = entry.occurrence_count

        if count > 1:
            category = RecommendationCategory.STRONG_MATCH
        else:
            category = RecommendationCategory.SURPRISING_PICK

        if candidate.genre_ids:
            genre = self._catalog.resolve_genre(candidate.genre_ids[0], candidate.kind)
        else:
            genre = UNKNOWN_GENRE

        plural = "s" if count > 1 else ""
        return Recommendation(
            id=candidate.id,
            title=candidate.title,
            year=candidate.year,
            reason=f"Recommended based on {count} of your selection{plural}.",
            category=category,
            genre=genre,
            poster=candidate.poster_path,
            rating=candidate.rating,
            popularity=candidate.popularity,
            kind=candidate.kind,
            overview=candidate.overview,
            occurrence_count=count,
        )
