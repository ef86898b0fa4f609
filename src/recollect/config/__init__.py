"""Configuration schema and YAML loading."""

from recollect.config.loader import (
    DEFAULT_CONFIG_PATH,
    ConfigError,
    load_config,
    resolve_config_path,
    save_config,
)
from recollect.config.schema import EmbeddingConfig, MemoryConfig, RecollectConfig

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ConfigError",
    "EmbeddingConfig",
    "MemoryConfig",
    "RecollectConfig",
    "load_config",
    "resolve_config_path",
    "save_config",
]
