"""Runtime configuration for the command line, loaded from JSON."""

import json
import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "max_steps": None,
    "trace": True,
    "log_level": "WARNING",
    "diagram": None,
    "cell_size": 8,
    "caption": "",
}

# Expected types for validation
CONFIG_SCHEMA = {
    "max_steps": (int, type(None)),
    "trace": bool,
    "log_level": str,
    "diagram": (str, type(None)),
    "cell_size": int,
    "caption": str,
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def validate_config(config):
    unknown = sorted(set(config) - set(CONFIG_SCHEMA))
    if unknown:
        raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")

    for key, expected_type in CONFIG_SCHEMA.items():
        if key not in config:
            raise ValueError(f"Missing required configuration key: {key}")
        value = config[key]
        # bool is an int subclass, but true/false is never a step count
        if isinstance(value, bool) and expected_type is not bool:
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(value)}.")
        if not isinstance(value, expected_type):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(value)}.")

    if config["max_steps"] is not None and config["max_steps"] < 1:
        raise ValueError("max_steps must be at least 1")
    if config["cell_size"] < 1:
        raise ValueError("cell_size must be at least 1")
    if config["log_level"].upper() not in LOG_LEVELS:
        raise ValueError(
            f"log_level must be one of {', '.join(LOG_LEVELS)}, got {config['log_level']!r}"
        )


def load_config(path=None):
    """Return the defaults merged with the JSON object stored at ``path``."""
    config = DEFAULT_CONFIG.copy()
    if path is None:
        return config

    if not os.path.exists(path):
        raise FileNotFoundError(f"Configuration file not found at: {path}")

    with open(path, "r", encoding="utf-8") as f:
        user_config = json.load(f)
    if not isinstance(user_config, dict):
        raise ValueError(f"Configuration file {path} must hold a JSON object")

    # Merge defaults with overrides
    config.update(user_config)
    validate_config(config)

    logger.debug("Loaded config from %s:", path)
    for key, value in config.items():
        logger.debug("  %s: %r", key, value)

    return config
