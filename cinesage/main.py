"""Entry point for the FastAPI-powered CineSage API."""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Any, get_args

import httpx
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .models import AnalysisResult, AnalyzeRequest, CatalogPage, MediaKind
from .services.aggregator import RecommendationAggregator
from .services.analyzer import PreferenceAnalyzer
from .services.openrouter import OpenRouterClient
from .services.orchestrator import AnalysisOrchestrator
from .services.tmdb import SearchKind, TMDBClient, TrendingKind, TrendingWindow

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app: FastAPI


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    exit_stack = AsyncExitStack()
    tmdb_http_client = await exit_stack.enter_async_context(
        httpx.AsyncClient(
            base_url=str(settings.tmdb_api_url),
            timeout=httpx.Timeout(settings.tmdb_timeout_seconds, connect=5.0),
        )
    )
    openrouter_http_client = await exit_stack.enter_async_context(
        httpx.AsyncClient(
            base_url=str(settings.openrouter_api_url),
            timeout=httpx.Timeout(settings.openrouter_timeout_seconds, connect=10.0),
        )
    )

    tmdb = TMDBClient(settings, tmdb_http_client)
    await tmdb.load_genres()
    openrouter = OpenRouterClient(settings, openrouter_http_client)
    if not settings.openrouter_api_key:
        logger.warning("OPENROUTER_API_KEY not set; AI insights will be unavailable")

    aggregator = RecommendationAggregator(
        tmdb,
        candidate_limit=settings.recommendation_candidate_limit,
        result_limit=settings.recommendation_limit,
    )
    orchestrator = AnalysisOrchestrator(PreferenceAnalyzer(), aggregator, openrouter)

    fastapi_app.state.catalog = tmdb
    fastapi_app.state.orchestrator = orchestrator

    try:
        yield
    finally:  # pragma: no cover - teardown path exercised at runtime
        await exit_stack.aclose()


def create_app() -> FastAPI:
    fastapi_app = FastAPI(
        title=settings.app_name,
        description="Taste profiles and TMDB-backed recommendations with AI insights",
        version="1.0.0",
        lifespan=lifespan,
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    register_routes(fastapi_app)
    return fastapi_app


def get_orchestrator(app: FastAPI) -> AnalysisOrchestrator:
    orchestrator = getattr(app.state, "orchestrator", None)
    if not isinstance(orchestrator, AnalysisOrchestrator):
        raise RuntimeError("Analysis orchestrator not initialised")
    return orchestrator


def get_catalog(app: FastAPI) -> TMDBClient:
    catalog = getattr(app.state, "catalog", None)
    if not isinstance(catalog, TMDBClient):
        raise RuntimeError("TMDB client not initialised")
    return catalog


def _require_choice(value: str, allowed: tuple[str, ...], label: str) -> None:
    if value not in allowed:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported {label} '{value}'; expected one of {', '.join(allowed)}",
        )


def register_routes(fastapi_app: FastAPI) -> None:
    @fastapi_app.get("/healthz")
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @fastapi_app.post("/api/analyze", response_model=AnalysisResult)
    async def analyze(request: AnalyzeRequest) -> AnalysisResult:
        orchestrator = get_orchestrator(fastapi_app)
        return await orchestrator.analyze(request.liked, disliked=request.disliked)

    @fastapi_app.get("/api/search", response_model=CatalogPage)
    async def search(
        query: str = Query(default=""),
        page: int = Query(default=1, ge=1, le=500),
        kind: str = Query(default="multi"),
    ) -> CatalogPage:
        _require_choice(kind, get_args(SearchKind), "kind")
        return await get_catalog(fastapi_app).search(query, page, kind)  # type: ignore[arg-type]

    @fastapi_app.get("/api/popular", response_model=CatalogPage)
    async def popular(
        kind: str = Query(default="film"),
        page: int = Query(default=1, ge=1, le=500),
    ) -> CatalogPage:
        _require_choice(kind, get_args(MediaKind), "kind")
        return await get_catalog(fastapi_app).popular(kind, page)  # type: ignore[arg-type]

    @fastapi_app.get("/api/trending", response_model=CatalogPage)
    async def trending(
        window: str = Query(default="week"),
        kind: str = Query(default="all"),
    ) -> CatalogPage:
        _require_choice(window, get_args(TrendingWindow), "window")
        _require_choice(kind, get_args(TrendingKind), "kind")
        return await get_catalog(fastapi_app).trending(window, kind)  # type: ignore[arg-type]

    @fastapi_app.get("/api/discover", response_model=CatalogPage)
    async def discover(
        kind: str = Query(default="film"),
        genre: int | None = Query(default=None, ge=1),
        year: int | None = Query(default=None, ge=1800, le=2200),
        sort_by: str = Query(default="popularity.desc"),
        page: int = Query(default=1, ge=1, le=500),
    ) -> CatalogPage:
        _require_choice(kind, get_args(MediaKind), "kind")
        return await get_catalog(fastapi_app).discover(
            kind,  # type: ignore[arg-type]
            genre=genre,
            year=year,
            sort_by=sort_by,
            page=page,
        )

    @fastapi_app.get("/api/titles/{kind}/{title_id}")
    async def title_details(kind: str, title_id: int) -> dict[str, Any]:
        _require_choice(kind, get_args(MediaKind), "kind")
        details = await get_catalog(fastapi_app).details(kind, title_id)  # type: ignore[arg-type]
        if details is None:
            raise HTTPException(status_code=404, detail="Title not found")
        return details

    @fastapi_app.get("/api/genres/{kind}")
    async def genres(kind: str) -> dict[str, Any]:
        _require_choice(kind, get_args(MediaKind), "kind")
        definitions = get_catalog(fastapi_app).genre_definitions(kind)  # type: ignore[arg-type]
        return {
            "genres": [
                {"id": definition.id, "name": definition.name}
                for definition in definitions
            ]
        }


app = create_app()
