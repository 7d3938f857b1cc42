"""
Command construction for browser open/kill/liveness/cache-clear operations.

Every command is an argument vector. Nothing here goes through a shell, so a
URL is always exactly one argv element and shell metacharacters inside it are
never interpreted.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional

from .identifiers import BrowserId, OsFamily, DISPLAY_NAMES, IMAGE_NAMES
from .executables import resolve_browser_binary
from ..config.paths import (
    chrome_profile_dir,
    firefox_profiles_dir,
    firefox_cache_dir,
)


class Operation(str, Enum):
    OPEN = "open"
    KILL = "kill"
    PROBE = "liveness-check"


@dataclass(frozen=True)
class ProfileTarget:
    """
    A glob of profile files to delete when clearing a browser's data.

    Attributes:
        root: Directory the pattern is expanded in
        pattern: pathlib glob pattern, relative to root
        recursive: Whether matched directories are removed with their contents
    """

    root: Path
    pattern: str
    recursive: bool = False

    def describe(self) -> str:
        return str(self.root / self.pattern)


def _open_command(os_family: OsFamily, browser: BrowserId, url: str, config: Optional[dict]) -> List[str]:
    if os_family == OsFamily.MACOS:
        return ["open", "-a", DISPLAY_NAMES[browser], url]

    binary = resolve_browser_binary(browser, os_family, config)
    if os_family == OsFamily.LINUX and browser == BrowserId.CHROME:
        return [binary, "--no-sandbox", url]
    return [binary, url]


def _kill_command(os_family: OsFamily, browser: BrowserId) -> List[str]:
    if os_family == OsFamily.WINDOWS:
        return ["taskkill", "/f", "/im", IMAGE_NAMES[browser]]
    return ["pkill", "-f", browser.value]


def _probe_command(os_family: OsFamily, browser: BrowserId) -> List[str]:
    if os_family == OsFamily.WINDOWS:
        return ["tasklist", "/fi", f"imagename eq {IMAGE_NAMES[browser]}"]
    return ["pgrep", "-f", browser.value]


def build_command(
    os_family: OsFamily,
    browser: Optional[BrowserId],
    operation: Operation,
    url: Optional[str] = None,
    config: Optional[dict] = None,
) -> Optional[List[str]]:
    """
    Look up the argument vector for (OS family, browser, operation).

    Args:
        os_family: Host OS family
        browser: Target browser; None (unknown identifier) is always unsupported
        operation: OPEN, KILL or PROBE. Profile data is covered by profile_targets().
        url: URL for OPEN; required for that operation
        config: Configuration dict, used to resolve executables

    Returns:
        Optional[List[str]]: argv, or None when the combination is unsupported
    """
    if browser is None:
        return None

    if operation == Operation.OPEN:
        if not url:
            return None
        return _open_command(os_family, browser, url, config)
    if operation == Operation.KILL:
        return _kill_command(os_family, browser)
    if operation == Operation.PROBE:
        return _probe_command(os_family, browser)
    return None


def probe_matches(os_family: OsFamily, browser: BrowserId, returncode: int, stdout: str) -> bool:
    """
    Interpret the outcome of a PROBE command.

    tasklist exits 0 whether or not anything matched, so on Windows the image
    name has to appear in its output. pgrep exits 0 only when it found a match.
    """
    if os_family == OsFamily.WINDOWS:
        return IMAGE_NAMES[browser] in (stdout or "").lower()
    return returncode == 0


def profile_targets(
    os_family: OsFamily,
    browser: Optional[BrowserId],
    config: Optional[dict] = None,
    home: Optional[Path] = None,
) -> Optional[List[ProfileTarget]]:
    """
    History, cookie, cache and session-store files to delete for a browser.

    Returns:
        Optional[List[ProfileTarget]]: targets, or None for an unknown browser
    """
    config = config or {}

    if browser == BrowserId.CHROME:
        profile = chrome_profile_dir(os_family, config, home)
        return [
            ProfileTarget(profile, "History*"),
            ProfileTarget(profile, "Cache/*", recursive=True),
            ProfileTarget(profile, "Cookies*"),
        ]

    if browser == BrowserId.FIREFOX:
        profiles = firefox_profiles_dir(os_family, config, home)
        cache = firefox_cache_dir(os_family, home)
        if os_family == OsFamily.WINDOWS:
            return [
                ProfileTarget(profiles, "*/*.sqlite"),
                ProfileTarget(profiles, "*/sessionstore*"),
                ProfileTarget(cache.parent, cache.name, recursive=True),
            ]
        if os_family == OsFamily.MACOS:
            return [
                ProfileTarget(profiles, "*default*/*.sqlite"),
                ProfileTarget(profiles, "*default*/sessionstore*"),
                ProfileTarget(cache, "*default*/*", recursive=True),
            ]
        return [
            ProfileTarget(profiles, "*default*/*.sqlite"),
            ProfileTarget(profiles, "*default*/sessionstore.js"),
            ProfileTarget(cache, "*default*/*", recursive=True),
        ]

    return None


__all__ = [
    "Operation",
    "ProfileTarget",
    "build_command",
    "probe_matches",
    "profile_targets",
]
