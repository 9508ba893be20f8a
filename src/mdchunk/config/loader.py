"""Configuration loader for mdchunk.

Resolves a ``ChunkingConfig`` once per process from, in priority order:

1. CLI flags
2. The ``chunking`` section of an optional YAML config file
3. Environment variables (``CHUNKING_MODE``, ``CHUNK_SIZE``, ``CHUNK_OVERLAP``)
4. Built-in defaults

Loose input is normalized rather than rejected: unknown modes and
non-positive sizes fall through to the next source with a warning. Only an
unreadable or malformed config *file* raises ``ConfigError``.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from mdchunk.config.defaults import CHUNKING_MODES, CONFIG_FILE_SECTION, ENV_VAR_MAP
from mdchunk.lib.errors import ConfigError
from mdchunk.models.config import ChunkingConfig

logger = logging.getLogger(__name__)


def parse_positive_int(value: Any) -> int | None:
    """Parse a positive integer, returning None for anything else.

    Args:
        value: Raw value (string from the environment, or a YAML scalar)

    Returns:
        The parsed integer, or None if missing, malformed or not positive.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return None
    return parsed if parsed > 0 else None


def _parse_mode(value: Any, source: str) -> str | None:
    """Parse a chunking mode, warning about unknown values."""
    if value is None:
        return None
    mode = str(value).strip().lower()
    if not mode:
        return None
    if mode not in CHUNKING_MODES:
        logger.warning(
            f"Unknown chunking mode '{value}' from {source}. "
            f"Supported: {', '.join(CHUNKING_MODES)}. Using legacy."
        )
        return "legacy"
    return mode


def _parse_field(field_name: str, value: Any, source: str) -> Any | None:
    """Parse a single configuration value from a loose source."""
    if field_name == "mode":
        return _parse_mode(value, source)

    parsed = parse_positive_int(value)
    if parsed is None and value not in (None, ""):
        logger.warning(
            f"Ignoring invalid {field_name} value {value!r} from {source}: "
            "expected a positive integer"
        )
    return parsed


def config_from_env(env: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Read chunking settings from environment variables.

    Args:
        env: Environment mapping (defaults to ``os.environ``)

    Returns:
        Dictionary of the fields that were set to valid values.
    """
    env_vars = os.environ if env is None else env
    values: dict[str, Any] = {}
    for field_name, env_var_name in ENV_VAR_MAP.items():
        if env_var_name not in env_vars:
            continue
        parsed = _parse_field(field_name, env_vars[env_var_name], env_var_name)
        if parsed is not None:
            values[field_name] = parsed
    return values


def config_from_file(path: str | Path) -> dict[str, Any]:
    """Read chunking settings from the ``chunking`` section of a YAML file.

    Args:
        path: Path to the YAML config file

    Returns:
        Dictionary of the fields that were set to valid values.

    Raises:
        ConfigError: If the file is missing, unreadable, not valid YAML, or its
            ``chunking`` section is not a mapping.
    """
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigError(str(config_path), "Config file not found")

    try:
        content = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(str(config_path), f"Cannot read config file: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(str(config_path), f"Invalid YAML: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigError(str(config_path), "Config file must contain a mapping")

    section = content.get(CONFIG_FILE_SECTION)
    if section is None:
        logger.debug(f"No '{CONFIG_FILE_SECTION}' section in {config_path}")
        return {}
    if not isinstance(section, dict):
        raise ConfigError(
            CONFIG_FILE_SECTION, f"'{CONFIG_FILE_SECTION}' section must be a mapping"
        )

    values: dict[str, Any] = {}
    for field_name in ENV_VAR_MAP:
        if field_name not in section:
            continue
        parsed = _parse_field(field_name, section[field_name], str(config_path))
        if parsed is not None:
            values[field_name] = parsed

    unknown = sorted(set(section) - set(ENV_VAR_MAP))
    if unknown:
        logger.warning(
            f"Ignoring unknown keys in '{CONFIG_FILE_SECTION}' section: "
            f"{', '.join(str(key) for key in unknown)}"
        )
    return values


def load_chunking_config(
    cli_overrides: Mapping[str, Any] | None = None,
    config_file: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> ChunkingConfig:
    """Resolve the chunking configuration with priority hierarchy.

    Args:
        cli_overrides: Values from CLI flags; None entries are ignored
        config_file: Optional YAML config file path
        env: Environment mapping (defaults to ``os.environ``)

    Returns:
        Resolved, immutable ChunkingConfig.

    Raises:
        ConfigError: If ``config_file`` cannot be read or parsed.
    """
    sources: list[tuple[str, dict[str, Any]]] = []
    if cli_overrides:
        sources.append(
            ("cli", {k: v for k, v in cli_overrides.items() if v is not None})
        )
    if config_file is not None:
        sources.append(("file", config_from_file(config_file)))
    sources.append(("env", config_from_env(env)))

    resolved: dict[str, Any] = {}
    for field_name in ChunkingConfig.model_fields:
        for source_name, values in sources:
            if field_name in values:
                resolved[field_name] = values[field_name]
                logger.debug(
                    f"{field_name}={values[field_name]!r} (from {source_name})"
                )
                break

    config = ChunkingConfig(**resolved)
    logger.debug(
        f"Chunking config resolved: mode={config.mode}, "
        f"chunk_size={config.chunk_size}, chunk_overlap={config.chunk_overlap}"
    )
    return config
