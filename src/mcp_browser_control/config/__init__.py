"""Configuration management for the browser control server."""

from .environment import (
    load_env_file,
    get_env_config,
)

from .paths import (
    chrome_user_data_dir,
    chrome_profile_dir,
    firefox_profiles_dir,
    firefox_cache_dir,
)

__all__ = [
    "load_env_file",
    "get_env_config",
    "chrome_user_data_dir",
    "chrome_profile_dir",
    "firefox_profiles_dir",
    "firefox_cache_dir",
]
