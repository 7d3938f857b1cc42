# mcp_browser_control/decorators/worker_pool.py
#
# Controller operations are blocking (process launch, liveness probes, the pause
# before clearing profile data). Running them on the event loop would stall
# every other request, so they go to the context's fixed-size thread pool.

import asyncio
import functools
from typing import Callable


__all__ = [
    "in_worker_pool",
    "run_in_worker_pool",
]


async def run_in_worker_pool(func: Callable, *args, **kwargs):
    """Run a blocking callable on the server context's worker pool and await its result."""
    # Lazy import to avoid import-time cycles
    from mcp_browser_control.context import get_context

    executor = get_context().get_executor()
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(executor, functools.partial(func, *args, **kwargs))


def in_worker_pool(func: Callable):
    """
    Turn a blocking callable into a coroutine function that runs it on the
    server context's worker pool.

    The context is looked up at call time, so tests can install their own.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        return await run_in_worker_pool(func, *args, **kwargs)
    return wrapper
