"""Default browser profile locations per platform."""

from pathlib import Path
from typing import Optional

from ..browser.identifiers import OsFamily


def _home(home: Optional[Path]) -> Path:
    return Path(home) if home is not None else Path.home()


def chrome_user_data_dir(os_family: OsFamily, config: dict, home: Optional[Path] = None) -> Path:
    """
    Chrome's user data directory: CHROME_PROFILE_USER_DATA_DIR if set,
    otherwise the platform's default location for stable Chrome.
    """
    override = config.get("chrome_user_data_dir")
    if override:
        return Path(override).expanduser()

    base = _home(home)
    if os_family == OsFamily.WINDOWS:
        return base / "AppData" / "Local" / "Google" / "Chrome" / "User Data"
    if os_family == OsFamily.MACOS:
        return base / "Library" / "Application Support" / "Google" / "Chrome"
    return base / ".config" / "google-chrome"


def chrome_profile_dir(os_family: OsFamily, config: dict, home: Optional[Path] = None) -> Path:
    """The directory of the configured Chrome profile (e.g. '<user data>/Default')."""
    profile_name = (config.get("chrome_profile_name") or "Default").strip() or "Default"
    return chrome_user_data_dir(os_family, config, home) / profile_name


def firefox_profiles_dir(os_family: OsFamily, config: dict, home: Optional[Path] = None) -> Path:
    """Directory holding Firefox's profile folders (FIREFOX_PROFILES_DIR overrides)."""
    override = config.get("firefox_profiles_dir")
    if override:
        return Path(override).expanduser()

    base = _home(home)
    if os_family == OsFamily.WINDOWS:
        return base / "AppData" / "Roaming" / "Mozilla" / "Firefox" / "Profiles"
    if os_family == OsFamily.MACOS:
        return base / "Library" / "Application Support" / "Firefox" / "Profiles"
    return base / ".mozilla" / "firefox"


def firefox_cache_dir(os_family: OsFamily, home: Optional[Path] = None) -> Path:
    """Directory holding Firefox's per-profile disk caches."""
    base = _home(home)
    if os_family == OsFamily.WINDOWS:
        return base / "AppData" / "Local" / "Mozilla" / "Firefox" / "Profiles"
    if os_family == OsFamily.MACOS:
        return base / "Library" / "Caches" / "Firefox" / "Profiles"
    return base / ".cache" / "mozilla" / "firefox"


__all__ = [
    "chrome_user_data_dir",
    "chrome_profile_dir",
    "firefox_profiles_dir",
    "firefox_cache_dir",
]
