"""HTTP front end: query parsing and Starlette route handlers."""

from .query import parse_query
from .routes import ROUTES, register_routes, build_app

__all__ = [
    "parse_query",
    "ROUTES",
    "register_routes",
    "build_app",
]
