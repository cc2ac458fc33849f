# settings/config_models.py
# -*- coding: utf-8 -*-
"""
Pydantic models for application configuration.

This module defines the structured settings for the module scripts,
including defaults, type annotations, and descriptions.
It utilizes Pydantic for data validation and settings management.
"""

from typing import Dict, List, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from settings import config as static_config

SYMBOLS_DEFAULT: Dict[str, str] = dict(static_config.SYMBOLS)
LOG_PREFIX_DEFAULT: str = "[MODULE-SCRIPTS]"


class AppSettings(BaseSettings):
    """Main application settings."""
    model_config = SettingsConfigDict(
        env_prefix="MODULE_SCRIPTS_",
        extra="ignore",
    )

    core_package_name: str = Field(default=static_config.CORE_PACKAGE_NAME,
                                   description="Name of the package supplying bin/ and web/.")
    module_type: str = Field(default=static_config.MODULE_PACKAGE_TYPE,
                             description="Declared package type that marks a package as a module.")
    manifest_name: str = Field(default=static_config.MANIFEST_FILE_NAME,
                               description="Manifest file marking the application root.")
    vendor_directory: str = Field(default=static_config.VENDOR_DIRECTORY,
                                  description="Directory (relative to the root) packages are installed into.")
    installed_packages_file: str = Field(default=static_config.INSTALLED_PACKAGES_FILE,
                                         description="Package manager's list of installed packages, relative to the root.")
    application_root: Optional[str] = Field(default=None,
                                            description="Directory to start the application root search from. Defaults to the working directory.")

    bundle_configuration_file: str = Field(default=static_config.BUNDLE_CONFIGURATION_FILE)
    routes_configuration_file: str = Field(default=static_config.ROUTES_CONFIGURATION_FILE)
    parameters_configuration_file: str = Field(default=static_config.PARAMETERS_CONFIGURATION_FILE)
    parameters_template_file: str = Field(default=static_config.PARAMETERS_TEMPLATE_FILE)
    secret_placeholder: str = Field(default="secret",
                                    description="Name of the placeholder in the parameters template, e.g. {secret}.")

    console_bin_directory: str = Field(default=static_config.CONSOLE_BIN_DIRECTORY,
                                       description="Directory (relative to the root) holding the console.")
    console_name: str = Field(default=static_config.CONSOLE_NAME)
    console_interpreter: Optional[str] = Field(default=static_config.CONSOLE_INTERPRETER,
                                               description="Interpreter used to run the console. Empty runs it directly.")
    cache_environments: List[str] = Field(default_factory=lambda: list(static_config.CACHE_ENVIRONMENTS))
    warmup_environment: str = Field(default=static_config.WARMUP_ENVIRONMENT)
    bundle_environments: List[str] = Field(
        default_factory=lambda: list(static_config.BUNDLE_ENVIRONMENTS),
        description="Environments a bundle is enabled in when its module does not say otherwise.",
    )

    module_convention: Literal["extra", "name"] = Field(
        default="extra",
        description="How bundles and routes are derived from a module: 'extra' reads the declared "
                    "metadata, 'name' guesses them from the package name.",
    )

    log_prefix: str = Field(default=LOG_PREFIX_DEFAULT,
                            description="Prefix for log messages.")

    symbols: Dict[str, str] = Field(default_factory=lambda: dict(SYMBOLS_DEFAULT))

    @field_validator("cache_environments", "bundle_environments")
    @classmethod
    def _environments_not_blank(cls, value: List[str]) -> List[str]:
        cleaned = [environment.strip() for environment in value]
        if any(not environment for environment in cleaned):
            raise ValueError("environment names must not be blank")
        return cleaned
