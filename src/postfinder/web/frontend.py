"""Static HTML frontend for PostFinder web UI."""

from __future__ import annotations

import html
from importlib.resources import files
from pathlib import Path

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import HTMLResponse

from postfinder.config import SiteConfig

router = APIRouter()


def _load_template() -> str:
    template = files("postfinder.web").joinpath("templates", "index.html")
    return template.read_text(encoding="utf-8")


def get_site(app: FastAPI) -> SiteConfig:
    if app.state.site is None:
        app.state.site = app.state.config.site(Path.cwd())
    return app.state.site


def render_index(site: SiteConfig) -> str:
    return (
        _load_template()
        .replace("__BLOG_NAME__", html.escape(site.blog_name))
        .replace("__INTRODUCTION__", html.escape(site.introduction))
    )


@router.get("/", response_class=HTMLResponse)
async def index(request: Request) -> HTMLResponse:
    return HTMLResponse(content=render_index(get_site(request.app)))
