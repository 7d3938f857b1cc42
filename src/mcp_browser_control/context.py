"""
Centralized server state.

One ServerContext owns the configuration, the process registry, the controller
built on top of them and the worker pool that runs controller calls. Route
handlers and MCP tools reach it through get_context().

Usage:
    from mcp_browser_control.context import get_context

    ctx = get_context()
    result = ctx.controller.open("chrome", "https://example.com")
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Optional

from .browser.registry import ProcessRegistry
from .controller import BrowserController
from .constants import DEFAULT_WORKERS


@dataclass
class ServerContext:
    """
    Encapsulates all server state.

    Attributes:
        config: Environment configuration dictionary
        registry: Registry of launched browser processes
        controller: BrowserController operating on the registry
        executor: Fixed-size pool the HTTP front end runs controller calls on
    """

    config: dict = field(default_factory=dict)
    registry: Optional[ProcessRegistry] = None
    controller: Optional[BrowserController] = None
    executor: Optional[ThreadPoolExecutor] = None

    def __post_init__(self):
        if self.registry is None:
            self.registry = ProcessRegistry()
        if self.controller is None:
            self.controller = BrowserController(registry=self.registry, config=self.config)

    def get_executor(self) -> ThreadPoolExecutor:
        """Get or create the worker pool."""
        if self.executor is None:
            workers = int(self.config.get("workers") or DEFAULT_WORKERS)
            self.executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="browser-worker")
        return self.executor

    def shutdown(self) -> None:
        if self.executor is not None:
            self.executor.shutdown(wait=False)
            self.executor = None


# ============================================================================
# Global Context Management
# ============================================================================

_global_context: Optional[ServerContext] = None


def get_context() -> ServerContext:
    """
    Get or create the global server context.

    All calls return the same instance until reset_context() or
    install_context() replaces it.
    """
    global _global_context

    if _global_context is None:
        from .config.environment import get_env_config
        _global_context = ServerContext(config=get_env_config())

    return _global_context


def install_context(ctx: ServerContext) -> ServerContext:
    """Make `ctx` the global context (used by main() and by tests)."""
    global _global_context
    if _global_context is not None and _global_context is not ctx:
        _global_context.shutdown()
    _global_context = ctx
    return ctx


def reset_context() -> None:
    """
    Drop the global context. The next get_context() builds a fresh one from
    the environment. Browsers launched through the old context keep running.
    """
    global _global_context
    if _global_context is not None:
        _global_context.shutdown()
    _global_context = None


__all__ = [
    "ServerContext",
    "get_context",
    "install_context",
    "reset_context",
]
