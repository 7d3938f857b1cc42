"""
Launch, terminate and inspect local browser processes over HTTP (and MCP).

One server process owns one registry of launched browsers. Browsers are
plain OS processes: the server starts them with a URL, kills them by name and
checks whether they are still running. It never talks to a page.

The HTTP routes and MCP tools live in __main__; the operations themselves in
controller.BrowserController.
"""

__version__ = "0.1.0"

from .controller import BrowserController
from .browser.registry import OpenPolicy, ProcessRegistry
from .results import ErrorKind, OperationResult, StateSnapshot

__all__ = [
    "__version__",
    "BrowserController",
    "OpenPolicy",
    "ProcessRegistry",
    "ErrorKind",
    "OperationResult",
    "StateSnapshot",
]
