"""Environment configuration and validation."""

import os
from typing import Optional

from dotenv import load_dotenv, find_dotenv

from ..constants import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_WORKERS,
    DEFAULT_TRANSPORT,
    SUPPORTED_TRANSPORTS,
    OPEN_POLICIES,
    DEFAULT_OPEN_POLICY,
    CLEAR_DELAY_SECS,
    PROBE_TIMEOUT_SECS,
    DEFAULT_CHROME_PROFILE_NAME,
)

import logging
logger = logging.getLogger(__name__)


def load_env_file() -> Optional[str]:
    """
    Load a .env file from the working directory (or a parent) into os.environ.

    Variables already present in the environment win over the file.

    Returns:
        The path of the loaded file, or None if no file was found.
    """
    path = find_dotenv(filename=".env", usecwd=True)
    if not path:
        return None
    load_dotenv(path, override=False)
    logger.debug(f"Loaded environment from {path}")
    return path


def _env_str(name: str) -> Optional[str]:
    return (os.getenv(name) or "").strip() or None


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    raw = _env_str(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


def _env_float(name: str, default: float) -> float:
    raw = _env_str(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


def get_env_config() -> dict:
    """
    Read environment variables and validate them.

    Optional:   BROWSER_SERVER_HOST (default 127.0.0.1)
                BROWSER_SERVER_PORT (default 3000)
                BROWSER_SERVER_WORKERS (default 10)
                BROWSER_SERVER_TRANSPORT (streamable-http | sse | stdio)
                BROWSER_SERVER_LOG_LEVEL (default INFO)
                BROWSER_OPEN_POLICY (reject | replace-and-kill | allow-multiple)
                BROWSER_CLEAR_DELAY_SECS (default 2.0)
                BROWSER_PROBE_TIMEOUT_SECS (default 10)
                CHROME_EXECUTABLE_PATH
                FIREFOX_EXECUTABLE_PATH
                CHROME_PROFILE_USER_DATA_DIR (default: the platform's Chrome user data dir)
                CHROME_PROFILE_NAME (default 'Default')
                FIREFOX_PROFILES_DIR (default: the platform's Firefox profiles dir)

    Raises:
        ValueError: If a numeric variable does not parse or an enumerated one is unknown.
    """
    transport = (_env_str("BROWSER_SERVER_TRANSPORT") or DEFAULT_TRANSPORT).lower()
    if transport not in SUPPORTED_TRANSPORTS:
        raise ValueError(
            f"BROWSER_SERVER_TRANSPORT must be one of {', '.join(SUPPORTED_TRANSPORTS)}, got {transport!r}"
        )

    open_policy = (_env_str("BROWSER_OPEN_POLICY") or DEFAULT_OPEN_POLICY).lower().replace("_", "-")
    if open_policy not in OPEN_POLICIES:
        raise ValueError(
            f"BROWSER_OPEN_POLICY must be one of {', '.join(OPEN_POLICIES)}, got {open_policy!r}"
        )

    return {
        "host": _env_str("BROWSER_SERVER_HOST") or DEFAULT_HOST,
        "port": _env_int("BROWSER_SERVER_PORT", DEFAULT_PORT, minimum=1),
        "workers": _env_int("BROWSER_SERVER_WORKERS", DEFAULT_WORKERS, minimum=1),
        "transport": transport,
        "log_level": (_env_str("BROWSER_SERVER_LOG_LEVEL") or "INFO").upper(),
        "open_policy": open_policy,
        "clear_delay": _env_float("BROWSER_CLEAR_DELAY_SECS", CLEAR_DELAY_SECS),
        "probe_timeout": _env_float("BROWSER_PROBE_TIMEOUT_SECS", PROBE_TIMEOUT_SECS),
        "chrome_path": _env_str("CHROME_EXECUTABLE_PATH"),
        "firefox_path": _env_str("FIREFOX_EXECUTABLE_PATH"),
        "chrome_user_data_dir": _env_str("CHROME_PROFILE_USER_DATA_DIR"),
        "chrome_profile_name": _env_str("CHROME_PROFILE_NAME") or DEFAULT_CHROME_PROFILE_NAME,
        "firefox_profiles_dir": _env_str("FIREFOX_PROFILES_DIR"),
    }


__all__ = [
    "load_env_file",
    "get_env_config",
]
