"""Browser identifiers and host OS family detection."""

import platform
from enum import Enum
from typing import Optional


class BrowserId(str, Enum):
    """Browsers the server knows how to launch, kill and probe."""

    CHROME = "chrome"
    FIREFOX = "firefox"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["BrowserId"]:
        """Exact, case-sensitive lookup. Returns None for anything unknown."""
        for member in cls:
            if member.value == value:
                return member
        return None


class OsFamily(str, Enum):
    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"


# Human-readable application names, as used by `open -a` on macOS.
DISPLAY_NAMES = {
    BrowserId.CHROME: "Google Chrome",
    BrowserId.FIREFOX: "Firefox",
}

# Process image names on Windows.
IMAGE_NAMES = {
    BrowserId.CHROME: "chrome.exe",
    BrowserId.FIREFOX: "firefox.exe",
}


def os_family_from_name(system_name: str) -> OsFamily:
    """
    Map an OS self-reported name (platform.system()) to an OsFamily.

    Everything that is neither Windows nor macOS is handled like Linux.
    """
    name = (system_name or "").lower()
    if "win" in name and "darwin" not in name:
        return OsFamily.WINDOWS
    if "darwin" in name or "mac" in name:
        return OsFamily.MACOS
    return OsFamily.LINUX


def detect_os_family() -> OsFamily:
    return os_family_from_name(platform.system())


def os_info() -> str:
    """OS name and version, e.g. 'Linux 6.8.0'."""
    return f"{platform.system()} {platform.release()}".strip()


__all__ = [
    "BrowserId",
    "OsFamily",
    "DISPLAY_NAMES",
    "IMAGE_NAMES",
    "os_family_from_name",
    "detect_os_family",
    "os_info",
]
