"""FastAPI application backing the PostFinder web UI."""

from __future__ import annotations

import asyncio
import logging
import threading
from pathlib import Path
from typing import Any, List

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from postfinder.config import AppConfig
from postfinder.index.indexer import build_engine
from postfinder.index.search import SearchEngine, SearchResult
from postfinder.web.frontend import get_site
from postfinder.web.frontend import router as frontend_router

LOGGER = logging.getLogger(__name__)


class SearchResponse(BaseModel):
    query: str
    results: List[SearchResult]


class PostResponse(BaseModel):
    id: str
    title: str
    slug: str
    date: str
    tags: List[str]
    body: str


def _resolve_content_dir(config: AppConfig) -> Path:
    return config.resolve_content_dir(Path.cwd())


def create_app(engine: SearchEngine | None = None, config: AppConfig | None = None) -> FastAPI:
    """Build the web app around ``engine``, or load one lazily from ``config``."""
    app = FastAPI(title="PostFinder Web", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(frontend_router)

    app.state.config = config or AppConfig()
    app.state.engine = engine
    app.state.engine_lock = threading.Lock()
    app.state.site = None

    @app.on_event("startup")
    async def startup_event() -> None:
        logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
        try:
            await asyncio.to_thread(_get_engine, app)
        except HTTPException as exc:
            LOGGER.warning("Starting without posts: %s", exc.detail)

    @app.get("/search")
    async def search_posts(request: Request, q: str = "") -> SearchResponse:
        engine = await asyncio.to_thread(_get_engine, request.app)
        documents = await asyncio.to_thread(engine.search, q)
        return SearchResponse(
            query=q,
            results=[SearchResult.from_document(document) for document in documents],
        )

    @app.get("/api/suggestions")
    async def suggestions(request: Request, q: str = "") -> List[str]:
        engine = await asyncio.to_thread(_get_engine, request.app)
        limit = request.app.state.config.suggestion_limit
        return await asyncio.to_thread(engine.suggest, q, limit=limit)

    @app.get("/api/posts")
    async def list_posts(request: Request) -> List[SearchResult]:
        engine = await asyncio.to_thread(_get_engine, request.app)
        documents = await asyncio.to_thread(engine.posts)
        return [SearchResult.from_document(document) for document in documents]

    @app.get("/post/{slug}")
    async def get_post(request: Request, slug: str) -> PostResponse:
        engine = await asyncio.to_thread(_get_engine, request.app)
        document = await asyncio.to_thread(engine.get_post, slug)
        if document is None:
            raise HTTPException(status_code=404, detail=f"Post not found: {slug}")
        result = SearchResult.from_document(document)
        return PostResponse(
            id=result.id,
            title=result.title,
            slug=result.slug,
            date=result.date,
            tags=result.tags,
            body=document.body,
        )

    @app.get("/search-index.json")
    async def search_index(request: Request) -> dict[str, Any]:
        engine = await asyncio.to_thread(_get_engine, request.app)
        snapshot = await asyncio.to_thread(engine.export_snapshot)
        return snapshot.to_dict()

    @app.get("/api/site")
    async def site_info(request: Request) -> dict[str, str]:
        site = get_site(request.app)
        return {"blog_name": site.blog_name, "introduction": site.introduction}

    return app


def _get_engine(app: FastAPI) -> SearchEngine:
    with app.state.engine_lock:
        if app.state.engine is None:
            content_dir = _resolve_content_dir(app.state.config)
            if not content_dir.exists():
                raise HTTPException(
                    status_code=404,
                    detail=f"Content directory not found at {content_dir}.",
                )
            engine, stats = build_engine([content_dir])
            LOGGER.info(
                "Loaded %d posts from %s (skipped: %d, failed: %d)",
                stats.loaded,
                content_dir,
                stats.skipped,
                stats.failed,
            )
            app.state.engine = engine
        return app.state.engine


app = create_app()
