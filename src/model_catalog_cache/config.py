"""Configuration for the model catalog cache.

Settings resolve with the precedence: explicit argument > ``MCC_*``
environment variable > YAML config file > built-in default.
"""

import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .config_paths import ENV_DATA_DIR, get_config_file_path, get_user_data_dir
from .errors import ConfigurationError
from .logging import LogEvent, log_debug, log_warning

DEFAULT_API_URL = "https://models.dev/api.json"
DEFAULT_FETCH_TIMEOUT = 30.0
DEFAULT_STALE_HOURS = 6.0
DEFAULT_PROVIDER = "opencode"

# Environment variables (all prefixed with MCC_)
ENV_API_URL = "MCC_API_URL"
ENV_FETCH_TIMEOUT = "MCC_FETCH_TIMEOUT"
ENV_STALE_HOURS = "MCC_STALE_HOURS"
ENV_PROVIDER = "MCC_PROVIDER"
ENV_INDICATOR_PROVIDER = "MCC_INDICATOR_PROVIDER"
ENV_PROXY = "MCC_PROXY"
ENV_OFFLINE = "MCC_OFFLINE"

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class ConfigResult:
    """Result of loading the YAML config file.

    Attributes:
        success: Whether the file was read and parsed
        data: Parsed mapping (if successful)
        error: Error message (if unsuccessful)
        exception: Original exception (if an error occurred)
        path: Path of the config file
    """

    success: bool
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    exception: Optional[Exception] = None
    path: Optional[str] = None


def load_config_file(path: Optional[Path] = None) -> ConfigResult:
    """Read the YAML config file.

    A missing file is a successful, empty result. Unreadable or malformed
    files produce an unsuccessful result instead of raising.

    Args:
        path: Config file location; defaults to :func:`get_config_file_path`

    Returns:
        ConfigResult describing the outcome
    """
    config_path = path or get_config_file_path()
    if not config_path.is_file():
        return ConfigResult(success=True, data={}, path=str(config_path))

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        return ConfigResult(success=False, error=f"Failed to read config file: {e}", exception=e, path=str(config_path))

    if data is None:
        data = {}
    if not isinstance(data, dict):
        return ConfigResult(
            success=False,
            error=f"Config file must contain a mapping, got {type(data).__name__}",
            path=str(config_path),
        )

    return ConfigResult(success=True, data=data, path=str(config_path))


class CacheConfig:
    """Configuration for the catalog cache."""

    def __init__(
        self,
        api_url: Optional[str] = None,
        fetch_timeout: Optional[float] = None,
        stale_after: Optional[Union[timedelta, float]] = None,
        data_dir: Optional[Union[str, Path]] = None,
        default_provider: Optional[str] = None,
        indicator_provider: Optional[str] = None,
        proxy: Optional[str] = None,
        offline: Optional[bool] = None,
        config_file: Optional[Path] = None,
    ):
        """Initialize cache configuration.

        Args:
            api_url: URL returning the full multi-provider catalog.
            fetch_timeout: Seconds to wait for the remote catalog.
            stale_after: Age after which a cached catalog is stale. A number
                         is interpreted as hours.
            data_dir: Directory holding the cached catalogs.
            default_provider: Provider used when a query names none.
            indicator_provider: Provider whose record marks the store as seeded.
            proxy: Optional HTTP(S) proxy URL for the remote fetch.
            offline: Never contact the remote catalog; serve cache or defaults.
            config_file: Override location of the YAML config file.

        Raises:
            ConfigurationError: If a resolved value is out of bounds
        """
        file_result = load_config_file(config_file)
        if not file_result.success:
            log_warning(
                LogEvent.CATALOG_CACHE,
                "Ignoring unreadable config file",
                path=file_result.path,
                error=file_result.error,
            )
            file_data: Dict[str, Any] = {}
        else:
            file_data = file_result.data or {}
            if file_data:
                log_debug(LogEvent.CATALOG_CACHE, "Loaded config file", path=file_result.path)
        self.config_path = file_result.path

        self.api_url = str(self._resolve(api_url, ENV_API_URL, file_data, "api_url", DEFAULT_API_URL))

        timeout = self._resolve(fetch_timeout, ENV_FETCH_TIMEOUT, file_data, "fetch_timeout", DEFAULT_FETCH_TIMEOUT)
        timeout_path = self._file_source(fetch_timeout, ENV_FETCH_TIMEOUT, file_data, "fetch_timeout")
        self.fetch_timeout = self._to_float(timeout, "fetch_timeout", timeout_path)
        if self.fetch_timeout <= 0 or self.fetch_timeout > 300:
            raise ConfigurationError(
                "fetch_timeout must be greater than 0 and at most 300 seconds",
                path=timeout_path,
            )

        stale_path = None
        if isinstance(stale_after, timedelta):
            self.stale_after = stale_after
        else:
            hours = self._resolve(stale_after, ENV_STALE_HOURS, file_data, "stale_hours", DEFAULT_STALE_HOURS)
            stale_path = self._file_source(stale_after, ENV_STALE_HOURS, file_data, "stale_hours")
            self.stale_after = timedelta(hours=self._to_float(hours, "stale_hours", stale_path))
        if self.stale_after <= timedelta(0):
            raise ConfigurationError("stale_after must be positive", path=stale_path)

        resolved_dir = self._resolve(data_dir, ENV_DATA_DIR, file_data, "data_dir", None)
        self.data_dir = Path(resolved_dir) if resolved_dir else get_user_data_dir()

        self.default_provider = str(
            self._resolve(default_provider, ENV_PROVIDER, file_data, "default_provider", DEFAULT_PROVIDER)
        ).strip()
        self.indicator_provider = str(
            self._resolve(indicator_provider, ENV_INDICATOR_PROVIDER, file_data, "indicator_provider", DEFAULT_PROVIDER)
        ).strip()
        if not self.default_provider:
            raise ConfigurationError(
                "default_provider must not be empty",
                path=self._file_source(default_provider, ENV_PROVIDER, file_data, "default_provider"),
            )
        if not self.indicator_provider:
            raise ConfigurationError(
                "indicator_provider must not be empty",
                path=self._file_source(indicator_provider, ENV_INDICATOR_PROVIDER, file_data, "indicator_provider"),
            )

        resolved_proxy = self._resolve(proxy, ENV_PROXY, file_data, "proxy", None)
        self.proxy = str(resolved_proxy) if resolved_proxy else None

        resolved_offline = self._resolve(offline, ENV_OFFLINE, file_data, "offline", False)
        if isinstance(resolved_offline, str):
            self.offline = resolved_offline.strip().lower() in _TRUE_VALUES
        else:
            self.offline = bool(resolved_offline)

    @staticmethod
    def _resolve(explicit: Any, env_name: str, file_data: Dict[str, Any], file_key: str, default: Any) -> Any:
        if explicit is not None:
            return explicit
        env_value = os.getenv(env_name)
        if env_value:
            return env_value
        if file_data.get(file_key) is not None:
            return file_data[file_key]
        return default

    def _file_source(self, explicit: Any, env_name: str, file_data: Dict[str, Any], file_key: str) -> Optional[str]:
        """Return the config file path when a setting was taken from the file."""
        if explicit is None and not os.getenv(env_name) and file_data.get(file_key) is not None:
            return self.config_path
        return None

    @staticmethod
    def _to_float(value: Any, name: str, path: Optional[str] = None) -> float:
        try:
            return float(value)
        except (TypeError, ValueError):
            raise ConfigurationError(f"{name} must be a number, got {value!r}", path=path)

    def as_dict(self) -> Dict[str, Any]:
        """Return the effective settings for display."""
        return {
            "api_url": self.api_url,
            "fetch_timeout": self.fetch_timeout,
            "stale_hours": self.stale_after.total_seconds() / 3600,
            "data_dir": str(self.data_dir),
            "default_provider": self.default_provider,
            "indicator_provider": self.indicator_provider,
            "proxy": self.proxy,
            "offline": self.offline,
            "config_path": self.config_path,
        }
