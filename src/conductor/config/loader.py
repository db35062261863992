"""Configuration file loading and merging."""

import logging
import os
from pathlib import Path

import yaml

from conductor.config.schema import DEFAULT_CONFIG, BuildLayout, ConductorConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.yaml"
DIST_DIR_ENV = "CONDUCTOR_DIST_DIR"


def get_home_config_path() -> Path:
    """Get path to global config: ~/.conductor/config.yaml."""
    return Path.home() / ".conductor" / CONFIG_FILENAME


def get_local_config_path(root: Path) -> Path:
    """Get path to project config: <root>/.conductor/config.yaml."""
    return root / ".conductor" / CONFIG_FILENAME


def load_yaml_config(path: Path) -> dict[str, object] | None:
    """Load a YAML config file, return None if not found, empty or invalid."""
    if not path.exists():
        return None
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError:
        logger.warning("Ignoring invalid config file: %s", path)
        return None
    if not isinstance(data, dict):
        return None
    result: dict[str, object] = data
    return result


def load_config(root: Path) -> ConductorConfig:
    """Load merged configuration.

    Precedence (lowest to highest):
    1. Built-in defaults
    2. Global config (~/.conductor/config.yaml)
    3. Project config (<root>/.conductor/config.yaml)
    4. CONDUCTOR_DIST_DIR environment variable
    """
    config = DEFAULT_CONFIG

    for path in (get_home_config_path(), get_local_config_path(root)):
        data = load_yaml_config(path)
        if data:
            logger.debug("Loaded config from %s", path)
            config = config.merge(ConductorConfig.from_dict(data))

    dist_dir = os.environ.get(DIST_DIR_ENV)
    if dist_dir:
        config = config.merge(ConductorConfig(dist_dir=dist_dir))

    return config


def load_layout(root: Path) -> BuildLayout:
    """Load configuration for a project root and resolve it to paths."""
    return load_config(root).resolve(root)
