"""Configuration package with layered settings.

Provides a centralized `get_config()` function that returns an AppConfig singleton.
"""

import os
import threading

from dotenv import load_dotenv

from .base import BASE_DIR, DEFAULT_SECRET_KEY
from .runtime import get_runtime_config
from .schema import AppConfig, RuntimeConfig

# Singleton cache
_config_cache = None
_config_lock = threading.Lock()
_config_name = "default"  # Flask profile name


def set_config_name(name: str) -> None:
    """
    Set the Flask config profile name.

    This must be called before `get_config()` if using a non-default profile.
    """
    global _config_name, _config_cache
    with _config_lock:
        _config_name = name
        _config_cache = None  # Invalidate cache


def get_config() -> AppConfig:
    """
    Get the application configuration (singleton).

    Returns:
        AppConfig instance with runtime settings
    """
    global _config_cache

    if _config_cache is not None:
        return _config_cache

    with _config_lock:
        if _config_cache is None:
            if _config_name != "testing":
                load_dotenv(BASE_DIR / ".env")
            runtime = get_runtime_config(flask_config_name=_config_name)
            _config_cache = AppConfig(
                runtime=runtime,
                secret_key=os.environ.get("SECRET_KEY") or DEFAULT_SECRET_KEY,
                testing=_config_name == "testing",
            )

    return _config_cache


__all__ = [
    "get_config",
    "set_config_name",
    "RuntimeConfig",
    "AppConfig",
]
