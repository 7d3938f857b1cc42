"""Diagnostics and debugging information utility functions."""

import sys
import platform

import psutil

from ..browser.identifiers import BrowserId, OsFamily
from ..browser.executables import resolve_browser_binary
from ..browser.process import handle_pid


def collect_diagnostics(ctx=None) -> str:
    """
    Collect diagnostic information about the host, the resolved browsers and the registry.

    Args:
        ctx: ServerContext (if None, the global context is used)

    Returns:
        str: Formatted diagnostic information
    """
    if ctx is None:
        from ..context import get_context
        ctx = get_context()

    controller = ctx.controller
    config = ctx.config or {}

    def _binary(browser: BrowserId) -> str:
        if controller.os_family == OsFamily.MACOS:
            return f"open -a ({browser.value})"
        try:
            return resolve_browser_binary(browser, controller.os_family, config)
        except Exception:
            return "<unknown>"

    tracked = []
    for browser in ctx.registry.known_browsers():
        pids = [handle_pid(r.handle) for r in ctx.registry.records(browser)]
        tracked.append(f"{browser.value}={pids}")

    parts = [
        f"OS                : {platform.system()} {platform.release()}",
        f"OS family         : {controller.os_family.value}",
        f"Python            : {sys.version.split()[0]}",
        f"psutil            : {getattr(psutil, '__version__', '?')}",
        f"Chrome binary     : {_binary(BrowserId.CHROME)}",
        f"Firefox binary    : {_binary(BrowserId.FIREFOX)}",
        f"Open policy       : {controller.open_policy.value}",
        f"Clear delay       : {controller.clear_delay}s",
        f"Workers           : {config.get('workers', '?')}",
        f"Tracked browsers  : {', '.join(tracked) or '<none>'}",
    ]

    return "\n".join(parts)


__all__ = ['collect_diagnostics']
