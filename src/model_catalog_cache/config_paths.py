"""Configuration path handling for the model catalog cache.

This module resolves the user config and data directories following the
XDG Base Directory Specification (via platformdirs).
"""

import os
from pathlib import Path

import platformdirs

# Application name used for directory paths
APP_NAME = "model-catalog-cache"

# Environment variable names
ENV_CONFIG_PATH = "MCC_CONFIG_PATH"
ENV_DATA_DIR = "MCC_DATA_DIR"

# Default filenames
CONFIG_FILENAME = "config.yaml"
CATALOGS_DIRNAME = "catalogs"


def get_user_config_dir() -> Path:
    """Get the path to the user's config directory for this application."""
    return Path(platformdirs.user_config_dir(APP_NAME))


def get_user_data_dir() -> Path:
    """Get the data directory path, respecting the MCC_DATA_DIR override."""
    custom_dir = os.getenv(ENV_DATA_DIR)
    if custom_dir:
        return Path(custom_dir)

    return Path(platformdirs.user_data_dir(APP_NAME))


def get_catalogs_dir(data_dir: Path) -> Path:
    """Get the directory holding one cached catalog file per provider."""
    return data_dir / CATALOGS_DIRNAME


def ensure_data_dir_exists(data_dir: Path) -> None:
    """Ensure the data directory exists with owner-only permissions.

    Raises:
        OSError: If the directory cannot be created
        PermissionError: If the directory exists but is not writable
    """
    data_dir.mkdir(parents=True, exist_ok=True)

    if hasattr(os, "chmod"):
        os.chmod(data_dir, 0o700)

    if not os.access(data_dir, os.W_OK):
        raise PermissionError(f"Data directory exists but is not writable: {data_dir}")


def get_config_file_path() -> Path:
    """Get the path to the YAML config file.

    Returns:
        MCC_CONFIG_PATH when set, otherwise config.yaml in the user config dir
    """
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return Path(env_path)

    return get_user_config_dir() / CONFIG_FILENAME
