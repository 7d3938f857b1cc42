"""
HTTP routes of the browser control server.

Every route answers 200; whether the operation worked is only visible in the
body. Controller calls run on the context's worker pool.
"""

from typing import Callable, List, Tuple

from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

from .query import parse_query
from ..constants import GREETING
from ..context import get_context
from ..decorators import http_envelope, in_worker_pool

import logging
logger = logging.getLogger(__name__)


def _params(request: Request, label: str) -> dict:
    params = parse_query(request.url.query)
    logger.info(f"{label} req")
    logger.info(f"Query params: {params}")
    return params


def _text(body: str) -> PlainTextResponse:
    return PlainTextResponse(body, status_code=200)


# The controller is looked up per call so that a re-installed context is honoured.

@in_worker_pool
def _open(app, url):
    return get_context().controller.open(app, url)


@in_worker_pool
def _close(app):
    return get_context().controller.close(app)


@in_worker_pool
def _clear(app):
    return get_context().controller.clear_cache_and_history(app)


@in_worker_pool
def _current_page(app):
    return get_context().controller.current_page(app)


@in_worker_pool
def _snapshot(app):
    return get_context().controller.snapshot_state(app)


@http_envelope
async def home(request: Request) -> Response:
    logger.info("home page req")
    return _text(GREETING)


@http_envelope
async def open_browser(request: Request) -> Response:
    params = _params(request, "/open")
    result = await _open(params.get("app"), params.get("url"))
    return _text(result.message)


@http_envelope
async def close_browser(request: Request) -> Response:
    params = _params(request, "/close")
    result = await _close(params.get("app"))
    return _text(result.message)


@http_envelope
async def clear_browser(request: Request) -> Response:
    params = _params(request, "/clear")
    result = await _clear(params.get("app"))
    return _text(result.message)


@http_envelope
async def current_page(request: Request) -> Response:
    params = _params(request, "/current-page")
    result = await _current_page(params.get("app"))
    return _text(result.message)


@http_envelope
async def get_state(request: Request) -> Response:
    params = _params(request, "/getState")
    fmt = params.get("format", "json")
    snapshot = await _snapshot(params.get("app") or None)
    if fmt == "json":
        return Response(snapshot.to_json(), status_code=200, media_type="application/json")
    return _text(snapshot.to_text())


ROUTES: List[Tuple[str, Callable]] = [
    ("/", home),
    ("/open", open_browser),
    ("/close", close_browser),
    ("/clear", clear_browser),
    ("/current-page", current_page),
    ("/getState", get_state),
    # Anything else gets the greeting, like the root route.
    ("/{path:path}", home),
]


def register_routes(mcp) -> None:
    """Attach every route to a FastMCP server as a GET custom route."""
    for path, handler in ROUTES:
        mcp.custom_route(path, methods=["GET"])(handler)


def build_app():
    """A bare Starlette app serving only the HTTP routes (no MCP endpoint)."""
    from starlette.applications import Starlette
    from starlette.routing import Route

    return Starlette(routes=[Route(path, handler, methods=["GET"]) for path, handler in ROUTES])


__all__ = [
    "ROUTES",
    "register_routes",
    "build_app",
    "home",
    "open_browser",
    "close_browser",
    "clear_browser",
    "current_page",
    "get_state",
]
