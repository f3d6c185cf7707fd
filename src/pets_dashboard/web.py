"""
FastAPI application serving the dashboard pages.

Routes:
- GET /            dashboard (query: q, type)
- GET /pet/{id}    detail page
- GET /health      liveness probe

One HttpClient, CredentialHolder and PetfinderAPI live for the lifetime of
the app; every page view gets its own ViewLoader and cancellation signal.
"""
from __future__ import annotations

import argparse
import asyncio
import contextlib
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import httpx
from fastapi import FastAPI, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from starlette.concurrency import run_in_threadpool

from . import __version__
from .api import PetfinderAPI
from .auth import CredentialHolder
from .charts import bar_chart_svg, pie_chart_svg
from .config import settings_from_env
from .http_client import HttpClient
from .viewmodel import ALL_TYPES, make_filter
from .views import Status, ViewLoader

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
DISCONNECT_POLL_SECONDS = 0.5

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


async def _cancel_on_disconnect(request: Request, cancel: asyncio.Event) -> None:
    """Set `cancel` once the browser goes away."""
    while not cancel.is_set():
        if await request.is_disconnected():
            cancel.set()
            return
        await asyncio.sleep(DISCONNECT_POLL_SECONDS)


@asynccontextmanager
async def _page_loader(request: Request):
    loader = ViewLoader(request.app.state.credentials, request.app.state.api)
    watcher = asyncio.create_task(_cancel_on_disconnect(request, loader.cancel))
    try:
        async with loader:
            yield loader
    finally:
        watcher.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await watcher


def create_app(
    settings: Optional[argparse.Namespace] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Return a configured FastAPI app; `transport` replaces the network (tests)."""
    settings = settings or settings_from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with HttpClient(
            base_url=settings.base_url,
            connect_timeout=settings.connect_timeout,
            read_timeout=settings.read_timeout,
            transport=transport,
        ) as http:
            credentials = CredentialHolder(http, settings.client_id, settings.client_secret)
            app.state.credentials = credentials
            app.state.api = PetfinderAPI(http, credentials)
            yield

    app = FastAPI(title="Pets Dashboard", version=__version__, lifespan=lifespan)

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    async def dashboard(request: Request, q: str = "", type_filter: str = Query(ALL_TYPES, alias="type")):
        filters = make_filter(q, type_filter)
        async with _page_loader(request) as loader:
            state = await loader.load_dashboard(filters)

        context = {"state": state, "filters": filters, "Status": Status}
        if state.status is Status.READY:
            view = state.data
            context.update(
                view=view,
                type_chart_svg=await run_in_threadpool(pie_chart_svg, view.type_chart),
                age_chart_svg=await run_in_threadpool(bar_chart_svg, view.age_chart),
            )
        return templates.TemplateResponse(request, "dashboard.html", context)

    @app.get("/pet/{animal_id}", response_class=HTMLResponse)
    async def pet_detail(request: Request, animal_id: str):
        async with _page_loader(request) as loader:
            state = await loader.load_detail(animal_id)
        return templates.TemplateResponse(
            request, "detail.html", {"state": state, "pet": state.data, "Status": Status}
        )

    return app


def app_factory() -> FastAPI:
    """Entry point for `uvicorn --factory pets_dashboard.web:app_factory`."""
    return create_app()
