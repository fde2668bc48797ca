"""Pydantic models describing titles, catalog pages and analysis results."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .utils import parse_year

logger = logging.getLogger(__name__)

MediaKind = Literal["film", "series"]

UNKNOWN_TITLE = "Unknown Title"
UNKNOWN_GENRE = "Unknown"


class LikedTitle(BaseModel):
    """A film or series the user marked as a preference signal."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    year: int = 0
    genre: str = UNKNOWN_GENRE
    kind: MediaKind = "film"

    def label(self) -> str:
        """Return ``Title (Year)`` when the year is known."""

        if self.year > 0:
            return f"{self.title} ({self.year})"
        return self.title


class CandidateTitle(BaseModel):
    """A catalog title surfaced as related to one of the liked titles."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str = UNKNOWN_TITLE
    year: int = 0
    genre_ids: list[int] = Field(default_factory=list)
    popularity: float = 0.0
    rating: float = 0.0
    poster_path: str | None = None
    overview: str | None = None
    kind: MediaKind = "film"

    @classmethod
    def from_catalog_payload(
        cls,
        payload: Mapping[str, Any],
        *,
        default_kind: MediaKind = "film",
    ) -> "CandidateTitle":
        """Normalise a raw TMDB result into a fully-populated candidate.

        Films carry ``title``/``release_date`` while series carry
        ``name``/``first_air_date``; an explicit ``media_type`` wins over both.
        Raises ``ValueError`` when the payload has no usable identifier.
        """

        raw_id = payload.get("id")
        if isinstance(raw_id, bool) or raw_id is None:
            raise ValueError("Catalog payload is missing an identifier")
        try:
            identifier = int(raw_id)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid catalog identifier: {raw_id!r}") from exc

        kind = cls._infer_kind(payload, default_kind)
        if kind == "film":
            title = payload.get("title") or payload.get("name")
            release = payload.get("release_date") or payload.get("first_air_date")
        else:
            title = payload.get("name") or payload.get("title")
            release = payload.get("first_air_date") or payload.get("release_date")

        genre_ids: list[int] = []
        for entry in payload.get("genre_ids") or []:
            try:
                genre_ids.append(int(entry))
            except (TypeError, ValueError):
                continue

        return cls(
            id=identifier,
            title=str(title).strip() if title and str(title).strip() else UNKNOWN_TITLE,
            year=parse_year(release),
            genre_ids=genre_ids,
            popularity=_as_float(payload.get("popularity")),
            rating=_as_float(payload.get("vote_average")),
            poster_path=_as_text(payload.get("poster_path")),
            overview=_as_text(payload.get("overview")),
            kind=kind,
        )

    @staticmethod
    def _infer_kind(payload: Mapping[str, Any], default_kind: MediaKind) -> MediaKind:
        media_type = payload.get("media_type")
        if media_type == "movie":
            return "film"
        if media_type == "tv":
            return "series"
        if "title" in payload or "release_date" in payload:
            return "film"
        if "name" in payload or "first_air_date" in payload:
            return "series"
        return default_kind


def _as_text(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _as_float(value: object) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


class CatalogPage(BaseModel):
    """A page of catalog candidates returned by lookups and searches."""

    page: int = 1
    results: list[CandidateTitle] = Field(default_factory=list)
    total_pages: int = 0
    total_results: int = 0

    @classmethod
    def empty(cls) -> "CatalogPage":
        return cls()

    @classmethod
    def from_payload(
        cls,
        data: Mapping[str, Any],
        *,
        default_kind: MediaKind = "film",
    ) -> "CatalogPage":
        """Build a page from a TMDB list response, skipping malformed entries."""

        raw_results = data.get("results") or []
        results: list[CandidateTitle] = []
        for entry in raw_results:
            if not isinstance(entry, Mapping):
                continue
            # People show up in multi-search results and are never candidates.
            if entry.get("media_type") == "person":
                continue
            try:
                candidate = CandidateTitle.from_catalog_payload(
                    entry, default_kind=default_kind
                )
            except (ValueError, ValidationError) as exc:
                logger.debug("Skipping malformed catalog entry %r: %s", entry, exc)
                continue
            results.append(candidate)

        return cls(
            page=_as_int(data.get("page"), 1),
            results=results,
            total_pages=_as_int(data.get("total_pages"), 0),
            total_results=_as_int(data.get("total_results"), 0),
        )


def _as_int(value: object, default: int) -> int:
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default


@dataclass(slots=True)
class ScoredCandidate:
    """Aggregation accumulator pairing a candidate with its sighting count."""

    candidate: CandidateTitle
    occurrence_count: int = 1


class RecommendationCategory(str, Enum):
    """Qualitative bucket attached to every recommendation."""

    STRONG_MATCH = "Strong Match"
    HIDDEN_GEM = "Hidden Gem"
    SURPRISING_PICK = "Surprising Pick"
    RECENT_RELEASE = "Recent Release"


class Recommendation(BaseModel):
    """A ranked title suggested to the user."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    year: int = 0
    reason: str
    category: RecommendationCategory
    genre: str = UNKNOWN_GENRE
    poster: str | None = None
    rating: float = 0.0
    popularity: float = 0.0
    kind: MediaKind = "film"
    overview: str | None = None
    occurrence_count: int = Field(default=1, ge=1)


class AnalysisResult(BaseModel):
    """Taste profile text plus recommendations in rank order."""

    taste_profile: str
    recommendations: list[Recommendation] = Field(default_factory=list)


class AnalyzeRequest(BaseModel):
    """Request body accepted by the analysis endpoint."""

    liked: list[LikedTitle] = Field(default_factory=list)
    disliked: list[LikedTitle] = Field(default_factory=list)
