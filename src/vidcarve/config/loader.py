"""
Unified configuration loader with priority resolution.

Root directory (VIDCARVE_ROOT):
- macOS/Linux: ~/.vidcarve
- Windows: %APPDATA%\\vidcarve
- Override: VIDCARVE_ROOT environment variable

Value priority (highest to lowest):
1. Environment variables (VIDCARVE_PROXY_URL, VIDCARVE_TIMEOUT)
2. Project config (.vidcarve/config.yaml)
3. User config ({root_dir}/config.yaml)
4. Defaults

Recognized YAML keys:
    trash_words: [str, ...]      # stripped during legacy cleaning
    proxy_url: str               # e.g. "https://proxy.example/fetch?url="
    url_placeholder: str         # replacement for the fbcdn host span
    request_timeout: float       # seconds
"""

import logging
import os
import sys
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from vidcarve.exceptions import ConfigError
from vidcarve.urls import DEFAULT_PLACEHOLDER

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class ConfigSource(Enum):
    """Source of the configuration value."""

    ENV = "env"
    PROJECT = "project"
    USER = "user"
    DEFAULT = "default"


@dataclass(frozen=True)
class VidcarveConfig:
    """Resolved vidcarve configuration."""

    root_dir: Path
    trash_words: tuple[str, ...] = ()
    proxy_url: str | None = None
    url_placeholder: str = DEFAULT_PLACEHOLDER
    request_timeout: float = DEFAULT_TIMEOUT
    source: ConfigSource = ConfigSource.DEFAULT
    config_path: Path | None = field(default=None, compare=False)

    @classmethod
    def defaults(cls) -> "VidcarveConfig":
        """Configuration with built-in defaults only (no files, no env)."""
        return cls(root_dir=_get_root_dir())

    def __repr__(self) -> str:
        return (
            f"VidcarveConfig(root_dir={self.root_dir!r}, "
            f"proxy_url={self.proxy_url!r}, source={self.source.value!r})"
        )


def _load_yaml_config(config_path: Path) -> dict[str, Any] | None:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Parsed config dict, or None if file doesn't exist or fails to parse.
    """
    if not config_path.exists():
        return None

    try:
        with open(config_path) as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}")
        return None

    if config is None:
        return {}
    if not isinstance(config, dict):
        logger.warning(f"Config file {config_path} is not a valid YAML dict")
        return None
    return config


def _values_from_yaml(config: dict[str, Any], config_path: Path) -> dict[str, Any]:
    """Validate and pick the recognized keys out of a parsed YAML config.

    Raises:
        ConfigError: If a recognized key has the wrong type.
    """
    values: dict[str, Any] = {}

    trash = config.get("trash_words")
    if trash is not None:
        if not isinstance(trash, list) or not all(isinstance(w, str) for w in trash):
            raise ConfigError(
                f"trash_words must be a list of strings in {config_path}",
                details={"config_path": str(config_path)},
            )
        values["trash_words"] = tuple(trash)

    for key in ("proxy_url", "url_placeholder"):
        value = config.get(key)
        if value is not None:
            if not isinstance(value, str):
                raise ConfigError(
                    f"{key} must be a string in {config_path}",
                    details={"config_path": str(config_path)},
                )
            values[key] = value

    timeout = config.get("request_timeout")
    if timeout is not None:
        try:
            values["request_timeout"] = float(timeout)
        except (TypeError, ValueError) as e:
            raise ConfigError(
                f"request_timeout must be a number in {config_path}",
                details={"config_path": str(config_path)},
            ) from e

    return values


def _find_project_config() -> Path | None:
    """Find project-level config by walking up from cwd.

    Returns:
        Path to .vidcarve/config.yaml if found, None otherwise.
    """
    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        config_path = parent / ".vidcarve" / "config.yaml"
        if config_path.exists():
            return config_path
    return None


def _get_root_dir() -> Path:
    """Get the vidcarve root directory.

    Priority:
    1. VIDCARVE_ROOT environment variable
    2. Platform-specific default:
       - Windows: %APPDATA%\\vidcarve
       - macOS/Linux: ~/.vidcarve
    """
    env_root = os.environ.get("VIDCARVE_ROOT")
    if env_root:
        return Path(env_root).expanduser().resolve()

    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / "vidcarve"
        return Path.home() / "AppData" / "Roaming" / "vidcarve"
    return Path.home() / ".vidcarve"


def _get_user_config_path() -> Path:
    """Get the user-level config path ({root_dir}/config.yaml)."""
    return _get_root_dir() / "config.yaml"


def _env_overrides() -> dict[str, Any]:
    values: dict[str, Any] = {}
    proxy = os.environ.get("VIDCARVE_PROXY_URL")
    if proxy:
        values["proxy_url"] = proxy
    timeout = os.environ.get("VIDCARVE_TIMEOUT")
    if timeout:
        try:
            values["request_timeout"] = float(timeout)
        except ValueError:
            logger.warning(f"Ignoring non-numeric VIDCARVE_TIMEOUT={timeout!r}")
    return values


def _resolve_config() -> VidcarveConfig:
    """Resolve configuration from all sources in priority order.

    The first config file found (project, then user) provides file values;
    environment variables override them.
    """
    root_dir = _get_root_dir()
    values: dict[str, Any] = {}
    source = ConfigSource.DEFAULT
    config_path = None

    for candidate, candidate_source in (
        (_find_project_config(), ConfigSource.PROJECT),
        (_get_user_config_path(), ConfigSource.USER),
    ):
        if candidate is None:
            continue
        parsed = _load_yaml_config(candidate)
        if parsed is None:
            continue
        values = _values_from_yaml(parsed, candidate)
        source = candidate_source
        config_path = candidate
        logger.info(f"Using config from {candidate}")
        break

    env_values = _env_overrides()
    if env_values:
        values.update(env_values)
        source = ConfigSource.ENV

    if source is ConfigSource.DEFAULT:
        logger.debug("Using default configuration")

    return VidcarveConfig(
        root_dir=root_dir, source=source, config_path=config_path, **values
    )


@lru_cache(maxsize=1)
def get_config() -> VidcarveConfig:
    """Get resolved vidcarve configuration.

    Results are cached - configuration is resolved once per process.
    To force re-resolution (e.g., after env change), use clear_config_cache().
    """
    return _resolve_config()


def clear_config_cache() -> None:
    """Clear the cached configuration."""
    get_config.cache_clear()
