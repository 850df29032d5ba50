import copy
import logging
import os
import pathlib
from typing import Any, cast

import pydantic
import ruamel.yaml

from lexigraph import exceptions
from lexigraph.config import models

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "LEXIGRAPH_CONFIG"

# Module-level cache for merged config to avoid repeated disk I/O
_merged_config_cache: models.LexigraphConfig | None = None


def get_global_config_path() -> pathlib.Path:
    """Get user-level config path (~/.config/lexigraph/config.yaml)."""
    return pathlib.Path.home() / ".config" / "lexigraph" / "config.yaml"


def get_env_config_path() -> pathlib.Path | None:
    """Get the config file named by LEXIGRAPH_CONFIG, if set."""
    value = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if not value:
        return None
    return pathlib.Path(value).expanduser()


def _load_yaml(path: pathlib.Path) -> dict[str, Any]:
    """Load YAML config as a plain dict with error handling."""
    if not path.exists():
        return {}

    try:
        yaml = ruamel.yaml.YAML(typ="safe")
        with path.open() as f:
            data = yaml.load(f)
    except ruamel.yaml.YAMLError as e:
        raise exceptions.ConfigError(f"Invalid YAML in {path}: {e}") from e
    except PermissionError:
        raise exceptions.ConfigError(f"Permission denied reading {path}") from None
    except OSError as e:
        raise exceptions.ConfigError(f"Error reading {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise exceptions.ConfigError(f"Config in {path} must be a mapping, got {type(data).__name__}")
    return cast("dict[str, Any]", data)


def load_config_file(path: pathlib.Path) -> dict[str, Any]:
    """Load YAML config, returns empty dict if missing."""
    return _load_yaml(path)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into base, recursively for nested dicts."""
    result = copy.deepcopy(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            nested_override = cast("dict[str, Any]", val)
            result[key] = deep_merge(result[key], nested_override)
        else:
            result[key] = copy.deepcopy(val)
    return result


def get_merged_config() -> models.LexigraphConfig:
    """Load and merge configs: defaults < global < $LEXIGRAPH_CONFIG.

    Results are cached to avoid repeated disk I/O. Call clear_config_cache()
    to reset (e.g., in tests).

    Raises:
        ConfigError: If a config file is unreadable or fails validation.
    """
    global _merged_config_cache
    if _merged_config_cache is not None:
        return _merged_config_cache

    merged = models.LexigraphConfig.get_default().model_dump()

    global_path = get_global_config_path()
    merged = deep_merge(merged, load_config_file(global_path))

    env_path = get_env_config_path()
    if env_path is not None:
        if not env_path.exists():
            logger.warning(f"{CONFIG_ENV_VAR} points to missing file {env_path}, ignoring")
        merged = deep_merge(merged, load_config_file(env_path))

    try:
        _merged_config_cache = models.LexigraphConfig.model_validate(merged)
    except pydantic.ValidationError as e:
        raise exceptions.ConfigValidationError(f"Invalid lexigraph config: {e}") from e

    logger.debug("Loaded lexigraph config")
    return _merged_config_cache


def clear_config_cache() -> None:
    """Clear the merged config cache. Call this when config files change."""
    global _merged_config_cache
    _merged_config_cache = None


def get_lexicon_defaults() -> models.LexiconConfig:
    """Get default Lexicon policies from merged config."""
    return get_merged_config().lexicon


def get_loop_padding() -> int:
    """Get the padding added to graph-sized iteration caps."""
    return get_merged_config().limits.padding


def get_default_loop_limit() -> int:
    return get_merged_config().limits.default_loop_limit


def get_coloring_config() -> models.ColoringConfig:
    """Get coloring defaults from merged config."""
    return get_merged_config().coloring
