# mcp_browser_control/decorators/envelope.py

import os
import json
import asyncio
import inspect
import datetime
import functools
import traceback
from typing import Any, Callable

from starlette.responses import PlainTextResponse

import logging
logger = logging.getLogger(__name__)


__all__ = [
    "tool_envelope",
    "http_envelope",
]


def _include_traceback() -> bool:
    return os.getenv("BROWSER_TOOL_ERRORS_TRACEBACK", "1") not in ("0", "false", "False")


def tool_envelope(func: Callable):
    """
    Minimal decorator for MCP tool functions:
      - Works with both async and sync callables.
      - On success: ensures the return value is a string (json.dumps for non-strings).
      - On error: returns a uniform JSON string with a summary and optional traceback.
    Environment:
      - Set BROWSER_TOOL_ERRORS_TRACEBACK=0 to suppress traceback in error payloads.
    """

    def _normalize(value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        if isinstance(value, bytes):
            return value.decode("utf-8", "replace")
        to_dict = getattr(value, "to_dict", None)
        if callable(to_dict):
            value = to_dict()
        return json.dumps(value, ensure_ascii=False, default=str)

    def _error_payload(err: Exception) -> str:
        logger.exception(f"Tool {func.__name__} failed")
        payload = {
            "ok": False,
            "summary": f"{err.__class__.__name__}: {err}",
            "error": {
                "type": err.__class__.__name__,
                "message": str(err),
            },
            "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        }
        if _include_traceback():
            payload["error"]["traceback"] = traceback.format_exc()
        return json.dumps(payload, ensure_ascii=False)

    if inspect.iscoroutinefunction(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                result = await func(*args, **kwargs)
            except asyncio.CancelledError:
                # Preserve cooperative cancellation semantics
                raise
            except Exception as e:
                return _error_payload(e)
            return _normalize(result)
        return wrapper
    else:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                return _error_payload(e)
            return _normalize(result)
        return wrapper


def http_envelope(func: Callable):
    """
    Decorator for async Starlette route handlers.

    The HTTP surface always answers 200 and reports failures in the body, so an
    unexpected exception becomes a text/plain "<Type>: <message>" response
    instead of a 500. The exception is logged with its traceback.
    """

    @functools.wraps(func)
    async def wrapper(request, *args, **kwargs):
        try:
            return await func(request, *args, **kwargs)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.exception(f"Unhandled error while serving {request.url.path}")
            return PlainTextResponse(f"{e.__class__.__name__}: {e}", status_code=200)
    return wrapper
