"""
Configuration for vidcarve.
"""

from vidcarve.config.loader import (
    DEFAULT_TIMEOUT,
    ConfigSource,
    VidcarveConfig,
    clear_config_cache,
    get_config,
)

__all__ = [
    "DEFAULT_TIMEOUT",
    "ConfigSource",
    "VidcarveConfig",
    "clear_config_cache",
    "get_config",
]
