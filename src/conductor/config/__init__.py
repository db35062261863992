"""Configuration and preflight checks."""

from conductor.config.loader import (
    get_home_config_path,
    get_local_config_path,
    load_config,
    load_layout,
)
from conductor.config.schema import (
    DEFAULT_CONFIG,
    BuildLayout,
    ConductorConfig,
    UnsafeOutputDirError,
)

__all__ = [
    "BuildLayout",
    "ConductorConfig",
    "DEFAULT_CONFIG",
    "UnsafeOutputDirError",
    "get_home_config_path",
    "get_local_config_path",
    "load_config",
    "load_layout",
]
