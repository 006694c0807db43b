"""Runtime configuration for ns-modernizer - centralized configuration management."""

import copy
import json
import os
from pathlib import Path
from typing import Any

from nsmodernizer.utils.logging import logger

CONFIG_FILE = ".nsmodernizer.json"

DEFAULTS = {
    "scan": {
        "name": "*.tcl",
        "backup_suffix": "-original",
        "encoding": "utf-8",
        "follow_symlinks": True,
    },
    "tools": {
        "walker": "native",
        "differ": "native",
        "find_command": "find",
        "diff_command": "diff -wu",
    },
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _coerce(value: str, default: Any) -> Any:
    """Convert an environment string to the type of the default."""
    if isinstance(default, bool):
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise ValueError(f"expected one of {sorted(_TRUE | _FALSE)}")
    if isinstance(default, int):
        return int(value)
    return value


def load_runtime_config(root: str = ".") -> dict[str, Any]:
    """
    Load runtime configuration from .nsmodernizer.json and environment variables.

    Config priority (highest to lowest):
    1. Environment variables (NSMODERNIZER_<SECTION>_<KEY>)
    2. .nsmodernizer.json in ``root``
    3. Built-in defaults

    Command-line flags are applied on top of the result by the CLI.

    Args:
        root: Directory to look for the config file in

    Returns:
        Configuration dictionary with merged values
    """
    cfg = copy.deepcopy(DEFAULTS)

    path = Path(root) / CONFIG_FILE
    try:
        if path.exists():
            with open(path, encoding="utf-8") as f:
                user = json.load(f)

            if isinstance(user, dict):
                for section in cfg:
                    if section in user and isinstance(user[section], dict):
                        for key, value in user[section].items():
                            if key in cfg[section] and isinstance(value, type(cfg[section][key])):
                                cfg[section][key] = value
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Could not load config file from {path}: {err}", path=str(path), err=str(e))
        logger.info("Continuing with default configuration")

    for section in cfg:
        for key in cfg[section]:
            env_var = f"NSMODERNIZER_{section.upper()}_{key.upper()}"
            if env_var in os.environ:
                value = os.environ[env_var]
                try:
                    cfg[section][key] = _coerce(value, cfg[section][key])
                except ValueError as e:
                    logger.warning(
                        "Invalid value for environment variable {var}: '{value}' - {err}",
                        var=env_var, value=value, err=str(e),
                    )
                    logger.info("Using default value: {value}", value=cfg[section][key])

    return cfg
