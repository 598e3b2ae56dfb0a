"""
Configuration loading for git-sdk-fetch.

Settings are read from an optional YAML file. Without a file every setting
keeps its default, so the tool works without any setup.
"""

import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

import platformdirs
import yaml

from gitsdk.constants import (
    APP_NAME,
    CI_ARTIFACTS_TAG,
    CONFIG_FILE_NAME,
    DEFAULT_BRANCH,
    DEFAULT_CHECKOUT_WORKERS,
    DEFAULT_CLONE_DIR,
    DEFAULT_OWNER,
    GITHUB_API_TIMEOUT,
)
from gitsdk.exceptions import ConfigFileError, ConfigValidationError
from gitsdk.log_utils import logger


@dataclass(frozen=True)
class Settings:
    """Tunable values shared by the resolver and both download strategies."""

    owner: str = DEFAULT_OWNER
    """GitHub organization hosting the SDK repositories and build-extra"""

    branch: str = DEFAULT_BRANCH
    """Branch whose tip commit pins clone-based artifacts"""

    release_tag: str = CI_ARTIFACTS_TAG
    """Release tag carrying the prebuilt minimal artifact"""

    clone_dir: str = DEFAULT_CLONE_DIR
    """Temporary bare clone location, relative to the working directory"""

    checkout_workers: int = DEFAULT_CHECKOUT_WORKERS
    """Value of git's checkout.workers for every git invocation"""

    git_root: Optional[str] = None
    """Git for Windows installation to use instead of auto-detection"""

    allow_env_token: bool = True
    """Fall back to GITHUB_TOKEN from the environment when no token is given"""

    api_timeout: int = GITHUB_API_TIMEOUT
    """Timeout in seconds for GitHub API metadata requests"""

    log_level: Optional[str] = None
    """Console log level; the GIT_SDK_FETCH_LOG_LEVEL environment variable applies when unset"""


_OPTIONAL_FIELDS = frozenset({"git_root", "log_level"})

_FIELD_TYPES: Dict[str, type] = {
    "owner": str,
    "branch": str,
    "release_tag": str,
    "clone_dir": str,
    "checkout_workers": int,
    "git_root": str,
    "allow_env_token": bool,
    "api_timeout": int,
    "log_level": str,
}


def default_config_path() -> str:
    """Return the platform-specific location of the configuration file."""
    return os.path.join(platformdirs.user_config_dir(APP_NAME), CONFIG_FILE_NAME)


def _validate(raw: Dict[str, Any]) -> Dict[str, Any]:
    known = {f.name for f in fields(Settings)}
    values: Dict[str, Any] = {}
    for key, value in raw.items():
        name = str(key).lower()
        if name not in known:
            logger.warning(f"Ignoring unknown configuration key: {key}")
            continue
        if value is None and name in _OPTIONAL_FIELDS:
            values[name] = None
            continue
        expected = _FIELD_TYPES[name]
        # bool is an int subclass; reject it where a number is expected
        if not isinstance(value, expected) or (
            expected is int and isinstance(value, bool)
        ):
            raise ConfigValidationError(
                f"Invalid value for {key}",
                details=f"expected {expected.__name__}, got {type(value).__name__}",
            )
        values[name] = value

    if values.get("checkout_workers", 1) < 1:
        raise ConfigValidationError(
            "Invalid value for checkout_workers", details="must be at least 1"
        )
    return values


def load_settings(path: Optional[str] = None) -> Settings:
    """
    Load settings from a YAML file.

    Parameters:
        path (str | None): Explicit configuration file. When omitted the
            platformdirs-managed default location is used.

    Returns:
        Settings: Defaults overridden by the keys found in the file. A missing
            file yields the defaults; an explicitly given missing file is an
            error.

    Raises:
        ConfigFileError: The file cannot be read, is not valid YAML, or its
            top level is not a mapping.
        ConfigValidationError: A value has the wrong type.
    """
    config_path = path or default_config_path()
    if not os.path.exists(config_path):
        if path:
            raise ConfigFileError(f"Configuration file not found: {config_path}")
        logger.debug(f"No configuration file at {config_path}; using defaults")
        return Settings()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigFileError(
            f"Failed to load configuration from {config_path}", details=str(e)
        ) from e

    if raw is None:
        return Settings()
    if not isinstance(raw, dict):
        raise ConfigFileError(
            f"Invalid configuration in {config_path}",
            details="top level must be a mapping",
        )

    logger.debug(f"Loaded configuration from {config_path}")
    return Settings(**_validate(raw))
