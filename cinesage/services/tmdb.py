"""Client for The Movie Database (TMDB) catalog API."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Literal

import httpx

from ..config import Settings
from ..genres import FILM_GENRES, SERIES_GENRES, GenreDefinition, genre_map
from ..models import UNKNOWN_GENRE, CatalogPage, MediaKind

logger = logging.getLogger(__name__)

SearchKind = Literal["film", "series", "multi"]
TrendingKind = Literal["all", "film", "series"]
TrendingWindow = Literal["day", "week"]

TMDB_MEDIA_TYPES: dict[str, str] = {"film": "movie", "series": "tv"}


class TMDBClient:
    """Fail-soft wrapper around the TMDB v3 endpoints used by CineSage.

    Every list lookup resolves to an empty :class:`CatalogPage` on failure so
    callers never have to guard against network errors.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient):
        self._settings = settings
        self._client = http_client
        self._genres: dict[str, dict[int, str]] = {}

    async def load_genres(self) -> None:
        """Load the film and series genre lists, falling back to static tables."""

        film_payload, series_payload = await asyncio.gather(
            self._get_json("/genre/movie/list"),
            self._get_json("/genre/tv/list"),
        )
        film = self._parse_genres(film_payload)
        series = self._parse_genres(series_payload)
        if not film or not series:
            logger.warning("Failed to load TMDB genres, using the static tables")
            film = genre_map(FILM_GENRES)
            series = genre_map(SERIES_GENRES)
        self._genres = {"film": film, "series": series}

    def resolve_genre(self, genre_id: int, kind: MediaKind = "film") -> str:
        """Return the display name for a genre id, or ``"Unknown"``."""

        table = self._genres.get(kind)
        if table is None:
            table = genre_map(FILM_GENRES if kind == "film" else SERIES_GENRES)
        return table.get(genre_id, UNKNOWN_GENRE)

    def genre_definitions(self, kind: MediaKind) -> list[GenreDefinition]:
        table = self._genres.get(kind)
        if table is None:
            return list(FILM_GENRES if kind == "film" else SERIES_GENRES)
        return [GenreDefinition(id=key, name=name) for key, name in table.items()]

    async def get_related(self, kind: MediaKind, title_id: int) -> CatalogPage:
        """Return TMDB's recommendations for a title; empty on any failure."""

        media_type = TMDB_MEDIA_TYPES[kind]
        payload = await self._get_json(f"/{media_type}/{title_id}/recommendations")
        if payload is None:
            return CatalogPage.empty()
        return CatalogPage.from_payload(payload, default_kind=kind)

    async def search(
        self, query: str, page: int = 1, kind: SearchKind = "film"
    ) -> CatalogPage:
        """Search titles by free text."""

        normalized_query = (query or "").strip()
        if not normalized_query:
            return CatalogPage.empty()

        endpoint = "/search/multi" if kind == "multi" else f"/search/{TMDB_MEDIA_TYPES[kind]}"
        payload = await self._get_json(
            endpoint,
            params={"query": normalized_query, "page": page, "include_adult": "false"},
        )
        if payload is None:
            return CatalogPage.empty()
        return CatalogPage.from_payload(
            payload, default_kind="film" if kind == "multi" else kind
        )

    async def popular(self, kind: MediaKind = "film", page: int = 1) -> CatalogPage:
        payload = await self._get_json(
            f"/{TMDB_MEDIA_TYPES[kind]}/popular", params={"page": page}
        )
        if payload is None:
            return CatalogPage.empty()
        return CatalogPage.from_payload(payload, default_kind=kind)

    async def trending(
        self, window: TrendingWindow = "week", kind: TrendingKind = "all"
    ) -> CatalogPage:
        media_type = "all" if kind == "all" else TMDB_MEDIA_TYPES[kind]
        payload = await self._get_json(f"/trending/{media_type}/{window}")
        if payload is None:
            return CatalogPage.empty()
        return CatalogPage.from_payload(
            payload, default_kind="film" if kind == "all" else kind
        )

    async def discover(
        self,
        kind: MediaKind = "film",
        *,
        genre: int | None = None,
        year: int | None = None,
        sort_by: str = "popularity.desc",
        page: int = 1,
    ) -> CatalogPage:
        """Browse titles filtered by genre and release year."""

        params: dict[str, Any] = {
            "sort_by": sort_by,
            "page": page,
            "include_adult": "false",
        }
        if genre is not None:
            params["with_genres"] = genre
        if year:
            params["year" if kind == "film" else "first_air_date_year"] = year
        payload = await self._get_json(
            f"/discover/{TMDB_MEDIA_TYPES[kind]}", params=params
        )
        if payload is None:
            return CatalogPage.empty()
        return CatalogPage.from_payload(payload, default_kind=kind)

    async def details(self, kind: MediaKind, title_id: int) -> dict[str, Any] | None:
        return await self._get_json(f"/{TMDB_MEDIA_TYPES[kind]}/{title_id}")

    async def _get_json(
        self, path: str, params: dict[str, Any] | None = None
    ) -> dict[str, Any] | None:
        """GET a TMDB endpoint, returning ``None`` instead of raising."""

        if not self._settings.tmdb_api_key:
            logger.info("TMDB API key missing, skipping request to %s", path)
            return None

        query = dict(params or {})
        query["api_key"] = self._settings.tmdb_api_key
        if self._settings.tmdb_language:
            query.setdefault("language", self._settings.tmdb_language)

        try:
            response = await self._client.get(path, params=query)
        except httpx.HTTPError as exc:
            logger.warning("TMDB request to %s failed: %s", path, exc)
            return None

        if response.status_code >= 400:
            logger.warning(
                "TMDB request to %s returned %s: %s",
                path,
                response.status_code,
                response.text,
            )
            return None

        try:
            data = response.json()
        except ValueError:
            logger.warning("TMDB returned invalid JSON for %s", path)
            return None
        if not isinstance(data, dict):
            logger.warning("TMDB returned an unexpected payload for %s", path)
            return None
        return data

    @staticmethod
    def _parse_genres(payload: dict[str, Any] | None) -> dict[int, str]:
        if not payload:
            return {}
        genres: dict[int, str] = {}
        for entry in payload.get("genres") or []:
            if not isinstance(entry, dict):
                continue
            try:
                genre_id = int(entry["id"])
            except (KeyError, TypeError, ValueError):
                continue
            name = str(entry.get("name") or "").strip()
            if name:
                genres[genre_id] = name
        return genres
