"""
Configuration loader for toolbridge.

The configuration is stored in a YAML file. This module provides a
function to load that file into a Python dictionary and a helper that
applies the `logging` section. Sensitive values like API keys and mail
passwords are normally not stored in the YAML file; instead, they are
retrieved from environment variables by the providers and tools.
"""

import logging
import os
from typing import Any, Dict, Optional

import yaml

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def load_app_config(path: str) -> Dict[str, Any]:
    """
    Load the application configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        A dictionary representing the configuration.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If the top-level configuration is not a mapping.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found at: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError("Top-level configuration must be a mapping/dictionary.")

    return data


def configure_logging(cfg: Optional[Dict[str, Any]] = None) -> None:
    """Apply the `logging` config section (`level`, `format`) to the root logger."""
    cfg = cfg or {}
    level = str(cfg.get("level", "INFO")).upper()
    logging.basicConfig(level=level, format=cfg.get("format", LOG_FORMAT))
