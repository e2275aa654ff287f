# wings_setup/config_loader.py
# -*- coding: utf-8 -*-
"""
Configuration loader for the installer.

Handles loading settings from Pydantic model defaults, environment
variables, an optional YAML file and command-line arguments, applying this
order of precedence:
1. Pydantic Model Defaults
2. Environment Variables (WINGS_INSTALLER_*, read by BaseSettings)
3. YAML Configuration File
4. Command-Line Arguments
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .config_models import AppSettings

module_logger = logging.getLogger(__name__)

# argparse destinations that map directly onto AppSettings fields.
CLI_SETTING_KEYS = ("log_prefix", "request_timeout")


def _deep_update(
    source: Dict[str, Any], overrides: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Recursively updates `source` with the values from `overrides`.

    Nested dictionaries are merged key by key; a None override never
    replaces an existing value.
    """
    for key, value in overrides.items():
        if (
            isinstance(value, dict)
            and key in source
            and isinstance(source[key], dict)
        ):
            source[key] = _deep_update(source[key], value)
        elif value is not None:
            source[key] = value
        elif key not in source:
            source[key] = value
    return source


def _load_yaml_file(
    config_path: Path, logger_to_use: logging.Logger
) -> Dict[str, Any]:
    if not (config_path.exists() and config_path.is_file()):
        logger_to_use.info(
            f"Configuration file '{config_path}' not found. Using defaults, environment variables, and CLI args."
        )
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger_to_use.warning(
            f"Could not parse YAML config file '{config_path}': {e}. Using defaults and environment variables."
        )
        return {}
    except IOError as e:
        logger_to_use.warning(
            f"Could not read config file '{config_path}': {e}. Using defaults and environment variables."
        )
        return {}

    if yaml_data is None:
        return {}
    if not isinstance(yaml_data, dict):
        logger_to_use.warning(
            f"Config file '{config_path}' does not contain a valid YAML dictionary. Ignoring."
        )
        return {}

    logger_to_use.info(f"Loaded configuration from {config_path}")
    return yaml_data


def load_app_settings(
    cli_args: Optional[argparse.Namespace] = None,
    config_file_path: Optional[str] = None,
    current_logger: Optional[logging.Logger] = None,
) -> AppSettings:
    """
    Loads the installer settings.

    Args:
        cli_args: Parsed command-line arguments (from argparse).
        config_file_path: Path to an optional YAML configuration file.
        current_logger: Optional logger to use instead of the module logger.

    Returns:
        An instance of AppSettings with the fully resolved configuration.

    Raises:
        SystemExit: If the merged configuration does not validate.
    """
    logger_to_use = current_logger if current_logger else module_logger

    # Model defaults < environment variables.
    current_values_dict = AppSettings().model_dump(exclude_defaults=False)

    if config_file_path:
        current_values_dict = _deep_update(
            current_values_dict,
            _load_yaml_file(Path(config_file_path), logger_to_use),
        )

    if cli_args:
        cli_arg_dict = vars(cli_args)
        mapped_cli_values = {
            key: cli_arg_dict[key]
            for key in CLI_SETTING_KEYS
            if cli_arg_dict.get(key) is not None
        }
        current_values_dict = _deep_update(
            current_values_dict, mapped_cli_values
        )

    try:
        final_settings = AppSettings(**current_values_dict)
    except ValidationError as e:
        logger_to_use.error(f"Configuration validation failed: {e}")
        raise SystemExit(f"Configuration error: {e}") from e

    logger_to_use.debug("Successfully loaded and validated application settings")
    return final_settings
