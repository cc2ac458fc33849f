# settings/config_loader.py
# -*- coding: utf-8 -*-
"""
Builds the AppSettings of a run.

Later sources win over earlier ones:
1. model defaults,
2. MODULE_SCRIPTS_* environment variables,
3. the YAML file (module-scripts.yaml in the working directory by default),
4. options given on the command line.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import ValidationError
from pydantic_settings import SettingsError

from . import config as static_config
from .config_models import AppSettings

module_logger = logging.getLogger(__name__)

# command line options that map one-to-one onto AppSettings fields
CLI_SETTING_KEYS = (
    "application_root",
    "core_package_name",
    "module_type",
    "module_convention",
    "console_interpreter",
)


def _deep_update(
    source: Dict[str, Any], overrides: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Merges `overrides` into `source` in place and returns it.

    Mappings present on both sides are merged key by key; any other value
    replaces the existing one. A None override never clears an existing
    value.
    """
    for key, value in overrides.items():
        current = source.get(key)
        if isinstance(value, dict) and isinstance(current, dict):
            _deep_update(current, value)
        elif value is not None or key not in source:
            source[key] = value
    return source


def load_yaml_config(
    yaml_config_path: Path,
    current_logger: Optional[logging.Logger] = None,
) -> Dict[str, Any]:
    """
    Reads the YAML configuration file, if there is one.

    A missing file, a file that cannot be parsed or read, and a file that does
    not hold a mapping all yield an empty dictionary and a log message.
    """
    logger_to_use = current_logger if current_logger else module_logger

    if not yaml_config_path.is_file():
        logger_to_use.info(
            f"No configuration file at '{yaml_config_path}', using defaults and environment."
        )
        return {}

    try:
        with open(yaml_config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger_to_use.warning(
            f"Ignoring configuration file '{yaml_config_path}', it is not valid YAML: {e}"
        )
        return {}
    except OSError as e:
        logger_to_use.warning(
            f"Ignoring configuration file '{yaml_config_path}', it cannot be read: {e}"
        )
        return {}

    if yaml_data is None:
        return {}
    if not isinstance(yaml_data, dict):
        logger_to_use.warning(
            f"Ignoring configuration file '{yaml_config_path}', it does not hold a mapping."
        )
        return {}

    logger_to_use.info(f"Loaded configuration from {yaml_config_path}")
    return yaml_data


def _validate(values: Dict[str, Any], logger_to_use: logging.Logger) -> AppSettings:
    try:
        return AppSettings(**values)
    except (ValidationError, SettingsError) as e:
        logger_to_use.error(f"Configuration validation failed: {e}")
        raise SystemExit(f"Configuration error: {e}") from e


def load_app_settings(
    cli_overrides: Optional[Mapping[str, Any]] = None,
    config_file_path: str = static_config.CONFIG_FILE_NAME,
    current_logger: Optional[logging.Logger] = None,
) -> AppSettings:
    """
    Resolves the settings of a run from all sources.

    Args:
        cli_overrides: Command line option values by option name. Keys outside
            CLI_SETTING_KEYS and None values are ignored.
        config_file_path: YAML configuration file. A relative path is taken
            from the working directory, which is the application root when the
            package manager runs a script.
        current_logger: Optional logger to use instead of the module logger.

    Returns:
        The validated AppSettings.

    Raises:
        SystemExit: If any source holds an invalid value.
    """
    logger_to_use = current_logger if current_logger else module_logger

    # defaults and environment
    values = _validate({}, logger_to_use).model_dump()

    yaml_config_path = Path(config_file_path)
    if not yaml_config_path.is_absolute():
        yaml_config_path = Path.cwd() / yaml_config_path
    _deep_update(values, load_yaml_config(yaml_config_path, logger_to_use))

    if cli_overrides:
        _deep_update(
            values,
            {
                key: cli_overrides[key]
                for key in CLI_SETTING_KEYS
                if cli_overrides.get(key) is not None
            },
        )

    app_settings = _validate(values, logger_to_use)
    logger_to_use.debug("Settings loaded and validated.")
    return app_settings
