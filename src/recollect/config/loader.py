"""Reading and writing recollect.yaml."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from recollect.config.schema import RecollectConfig

DEFAULT_CONFIG_PATH = Path.home() / ".recollect" / "recollect.yaml"


class ConfigError(Exception):
    """Configuration loading or validation error."""


def resolve_config_path(path: str | Path | None = None) -> Path:
    """Turn a user-supplied config location into an absolute path.

    Args:
        path: File path, ``~`` allowed. None or "" selects the default location.

    Returns:
        Resolved config file path
    """
    if not path:
        return DEFAULT_CONFIG_PATH
    return Path(path).expanduser().resolve()


def load_config(path: str | Path | None = None) -> RecollectConfig:
    """Load the memory and embedding settings.

    A missing or empty file yields the built-in defaults, so recollect works
    without any configuration.

    Args:
        path: Config file location (default location if None)

    Returns:
        Validated configuration

    Raises:
        ConfigError: If the file cannot be read, is not YAML, is not a
            mapping, or holds invalid values
    """
    config_path = resolve_config_path(path)
    if not config_path.exists():
        return RecollectConfig()

    try:
        raw = yaml.safe_load(config_path.read_text())
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config from {config_path}: {e}") from e

    if raw is None:
        return RecollectConfig()
    if not isinstance(raw, dict):
        raise ConfigError(
            f"Config in {config_path} must be a mapping with 'memory' and/or "
            f"'embeddings' sections, got {type(raw).__name__}"
        )

    try:
        return RecollectConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed for {config_path}: {e}") from e


def save_config(config: RecollectConfig, path: str | Path | None = None) -> Path:
    """Write configuration as YAML, creating parent directories.

    Args:
        config: Configuration to write
        path: Destination (default location if None)

    Returns:
        The path written to
    """
    config_path = resolve_config_path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(
        yaml.safe_dump(config.model_dump(), default_flow_style=False, sort_keys=False)
    )
    return config_path
