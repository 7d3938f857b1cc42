# mcp_browser_control/decorators/__init__.py

from .envelope import tool_envelope, http_envelope
from .worker_pool import in_worker_pool, run_in_worker_pool

__all__ = [
    "tool_envelope",
    "http_envelope",
    "in_worker_pool",
    "run_in_worker_pool",
]
