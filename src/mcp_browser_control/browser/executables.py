"""Browser executable resolution."""

import os
import shutil
from typing import Optional

from .identifiers import BrowserId, OsFamily, IMAGE_NAMES

import logging
logger = logging.getLogger(__name__)


_CONFIG_KEYS = {
    BrowserId.CHROME: "chrome_path",
    BrowserId.FIREFOX: "firefox_path",
}

_WINDOWS_CANDIDATES = {
    BrowserId.CHROME: [
        r"C:\Program Files\Google\Chrome\Application\chrome.exe",
        r"C:\Program Files (x86)\Google\Chrome\Application\chrome.exe",
    ],
    BrowserId.FIREFOX: [
        r"C:\Program Files\Mozilla Firefox\firefox.exe",
        r"C:\Program Files (x86)\Mozilla Firefox\firefox.exe",
    ],
}

_LINUX_CANDIDATES = {
    BrowserId.CHROME: ["google-chrome", "chrome", "chromium", "chromium-browser"],
    BrowserId.FIREFOX: ["firefox"],
}


def _windows_candidates(browser: BrowserId) -> list:
    candidates = list(_WINDOWS_CANDIDATES[browser])
    local = os.environ.get("LOCALAPPDATA", "")
    if local and browser == BrowserId.CHROME:
        candidates.append(os.path.join(local, "Google", "Chrome", "Application", "chrome.exe"))
    return candidates


def resolve_browser_binary(browser: BrowserId, os_family: OsFamily, config: Optional[dict] = None) -> str:
    """
    Resolve the executable used to launch a browser.

    Order: explicit *_EXECUTABLE_PATH config, well-known install locations,
    PATH lookup. Falls back to the bare binary name so that the launch error
    (if any) surfaces from the OS rather than from here.

    Args:
        browser: Browser to resolve
        os_family: Host OS family (macOS launches via `open -a` and never calls this)
        config: Configuration dict from get_env_config()

    Returns:
        str: Path to the executable, or its bare name
    """
    config = config or {}
    override = config.get(_CONFIG_KEYS[browser])
    if override:
        return override

    if os_family == OsFamily.WINDOWS:
        for c in _windows_candidates(browser):
            if os.path.isfile(c):
                return c
        return shutil.which(IMAGE_NAMES[browser]) or IMAGE_NAMES[browser]

    candidates = _LINUX_CANDIDATES[browser]
    for c in candidates:
        path = shutil.which(c)
        if path:
            return path
    return candidates[0]


__all__ = [
    "resolve_browser_binary",
]
