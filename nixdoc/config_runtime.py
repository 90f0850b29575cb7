"""Runtime configuration for nixdoc - centralized configuration management."""

import copy
import json
import os
from pathlib import Path
from typing import Any

from nixdoc.formatter import DOC_INDENT, SEPARATOR_WIDTH
from nixdoc.indexer.config import DEFAULT_MAX_FILE_SIZE, DEFAULT_WORKERS, NIX_EXTENSIONS, SKIP_DIRS
from nixdoc.utils.constants import CONFIG_FILE_NAME, ENV_PREFIX
from nixdoc.utils.logging import logger

DEFAULTS = {
    "search": {
        "extensions": list(NIX_EXTENSIONS),
        "workers": DEFAULT_WORKERS,
        "follow_symlinks": True,
        "skip_dirs": sorted(SKIP_DIRS),
    },
    "limits": {
        "max_file_size": DEFAULT_MAX_FILE_SIZE,
    },
    "report": {
        "doc_indent": DOC_INDENT,
        "separator_width": SEPARATOR_WIDTH,
    },
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _coerce(value: str, default_value: Any) -> Any:
    """Convert an environment string to the type of the default value."""
    if isinstance(default_value, bool):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ValueError(f"not a boolean: {value!r}")
    if isinstance(default_value, int):
        return int(value)
    if isinstance(default_value, float):
        return float(value)
    if isinstance(default_value, list):
        return [v.strip() for v in value.split(",") if v.strip()]
    return value


def load_runtime_config(root: str | Path = ".") -> dict[str, Any]:
    """
    Load runtime configuration from .nixdoc/config.json and environment variables.

    Config priority (highest to lowest):
    1. Environment variables (NIXDOC_<SECTION>_<KEY>)
    2. <root>/.nixdoc/config.json file
    3. Built-in defaults

    Args:
        root: Root directory to look for config file

    Returns:
        Configuration dictionary with merged values
    """
    cfg = copy.deepcopy(DEFAULTS)

    path = Path(root) / ".nixdoc" / CONFIG_FILE_NAME
    try:
        if path.is_file():
            with open(path, encoding="utf-8") as f:
                user = json.load(f)

            if isinstance(user, dict):
                for section in cfg:
                    if section in user and isinstance(user[section], dict):
                        for key, value in user[section].items():
                            if key not in cfg[section]:
                                logger.warning(f"Unknown config key {section}.{key} in {path}")
                                continue
                            default_value = cfg[section][key]
                            # bool is an int subclass; keep them apart
                            if isinstance(value, type(default_value)) and (
                                isinstance(value, bool) == isinstance(default_value, bool)
                            ):
                                cfg[section][key] = value
                            else:
                                logger.warning(
                                    f"Ignoring {section}.{key} in {path}: "
                                    f"expected {type(default_value).__name__}"
                                )
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load config file from {path}: {e}")
        logger.info("Continuing with default configuration")

    for section in cfg:
        for key in cfg[section]:
            env_var = f"{ENV_PREFIX}_{section.upper()}_{key.upper()}"
            if env_var in os.environ:
                try:
                    cfg[section][key] = _coerce(os.environ[env_var], cfg[section][key])
                except ValueError:
                    logger.warning(f"Ignoring invalid value for {env_var}: {os.environ[env_var]!r}")

    return cfg


def get_config_value(config: dict[str, Any], section: str, key: str) -> Any:
    """Read a configuration value, falling back to the built-in default."""
    return config.get(section, {}).get(key, DEFAULTS[section][key])
