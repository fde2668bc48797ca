"""Compose the taste summary, recommendations and AI insights."""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Protocol, Sequence

from ..models import AnalysisResult, LikedTitle
from ..utils import INSIGHTS_HEADING
from .aggregator import RecommendationAggregator
from .analyzer import PreferenceAnalyzer

logger = logging.getLogger(__name__)

INSIGHTS_UNAVAILABLE = (
    "\n*AI insights are currently unavailable. Showing standard recommendations.*"
)


class AdvisoryClient(Protocol):
    async def generate(
        self,
        liked: Sequence[LikedTitle],
        *,
        disliked: Iterable[LikedTitle] = (),
    ) -> str: ...


class AnalysisOrchestrator:
    """Run a single analysis of the liked titles.

    The advisory call is the only failure the orchestrator absorbs itself; the
    aggregator degrades on its own to fewer recommendations.
    """

    def __init__(
        self,
        analyzer: PreferenceAnalyzer,
        aggregator: RecommendationAggregator,
        advisory: AdvisoryClient,
    ):
        self._analyzer = analyzer
        self._aggregator = aggregator
        self._advisory = advisory

    async def analyze(
        self,
        liked: Sequence[LikedTitle],
        *,
        disliked: Sequence[LikedTitle] = (),
    ) -> AnalysisResult:
        summary = self._analyzer.summarize(liked)

        recommendations, insights = await asyncio.gather(
            self._aggregator.aggregate(
                liked, excluded_ids=[title.id for title in disliked]
            ),
            self._insights(liked, disliked),
        )

        return AnalysisResult(
            taste_profile=f"{summary}\n\n{insights}",
            recommendations=recommendations,
        )

    async def _insights(
        self,
        liked: Sequence[LikedTitle],
        disliked: Sequence[LikedTitle],
    ) -> str:
        if not liked:
            return ""
        try:
            passage = await self._advisory.generate(liked, disliked=disliked)
        except Exception:
            logger.exception("Failed to generate AI insights")
            return INSIGHTS_UNAVAILABLE
        return f"\n{INSIGHTS_HEADING}\n\n{passage}"
