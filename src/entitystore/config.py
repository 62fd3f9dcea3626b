"""Entity store configuration."""

import os
from pathlib import Path
from typing import Literal, Optional

import platformdirs
import yaml
from pydantic import BaseModel, Field, ValidationError

from .constants import APP_NAME, CONFIG_FILE, STORE_URI_ENV
from .errors import ConfigError


def default_config_path() -> Path:
    """Platform-appropriate location of the config file."""
    return Path(platformdirs.user_config_dir(APP_NAME)) / CONFIG_FILE


def default_store_root() -> Path:
    """Platform-appropriate directory for an on-disk store."""
    return Path(platformdirs.user_cache_dir(APP_NAME)) / "entities"


class StoreConfig(BaseModel):
    """
    Which backend to use and how to tune it.

    Example config.yaml:

        uri: accelredirect:/var/cache/app/entities#/cache
        ttl: 3600
        purge_policy: raise
    """
    uri: str = "heap:"
    ttl: Optional[int] = Field(default=None, ge=0)   # Key-value backends only
    purge_policy: Literal["raise", "ignore"] = "raise"
    namespace: str = ""                              # Network cache key prefix


def load_store_config(path: Optional[Path] = None) -> StoreConfig:
    """
    Load configuration from YAML, then apply the ``ENTITYSTORE_URI`` override.

    A missing file yields defaults.

    Args:
        path: Config file; defaults to ``default_config_path()``

    Raises:
        ConfigError: If the file is not valid YAML or has invalid values
    """
    cfg_path = Path(path) if path else default_config_path()

    data = {}
    if cfg_path.exists():
        try:
            data = yaml.safe_load(cfg_path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {cfg_path}: {e}")
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping in {cfg_path}")

    env_uri = os.environ.get(STORE_URI_ENV)
    if env_uri:
        data["uri"] = env_uri

    try:
        return StoreConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid entity store configuration in {cfg_path}: {e}")
