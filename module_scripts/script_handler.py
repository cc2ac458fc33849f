# module_scripts/script_handler.py
# -*- coding: utf-8 -*-
"""
Entry points for the package manager's lifecycle hooks.

Each public method of ScriptHandler implements one hook: it takes the
lifecycle event, does exactly one job and returns. Errors propagate to the
caller, which is expected to stop the build.
"""

import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional, TextIO

from common.command_utils import get_symbols, log_message, run_command
from common.file_utils import create_and_write_file, mirror_directory
from settings import config as static_config
from settings.config_models import AppSettings

from .application_structure import ApplicationStructure, create_application_structure
from .cache_commands import CacheCommandRunner
from .conventions import create_convention
from .events import Package, ScriptEvent
from .exceptions import CorePackagePreconditionError
from .module_finder import ModuleFinder
from .package_repository import PackageRepository
from .parameters import ParametersFile

module_logger = logging.getLogger(__name__)


def calculate_maximum_package_name_length(modules: List[Package]) -> int:
    return max((len(module.name) for module in modules), default=0)


def format_module_list(modules: List[Package]) -> str:
    """
    One line per module: the name padded to the longest name plus one, a
    space and the version.
    """
    maximum_length = calculate_maximum_package_name_length(modules)
    return "".join(
        f"{module.name.ljust(maximum_length + 1)} {module.pretty_version}\n"
        for module in modules
    )


class ScriptHandler:
    """Wires the collaborators together for each lifecycle hook."""

    def __init__(
        self,
        app_settings: AppSettings,
        application_structure: Optional[ApplicationStructure] = None,
        command_runner: Callable = run_command,
        output: Optional[TextIO] = None,
        current_logger: Optional[logging.Logger] = None,
    ):
        self.app_settings = app_settings
        self.logger = current_logger or module_logger
        self.application_structure = application_structure or create_application_structure(
            app_settings, self.logger
        )
        self.command_runner = command_runner
        self.output = output

    def get_application_root(self) -> Path:
        return self.application_structure.get_application_root()

    def get_core_directory(self) -> Path:
        return self.application_structure.get_core_directory()

    def prevent_script_from_core_package(self, event: ScriptEvent) -> None:
        """
        Raises:
            CorePackagePreconditionError: If the event's root package is the core package.
        """
        core_package_name = self.app_settings.core_package_name
        if event.root_package.name == core_package_name:
            symbols = get_symbols(self.app_settings)
            log_message(
                f"{symbols.get('error', '❌')} Refusing to copy files from {core_package_name} into itself.",
                "error",
                self.logger,
                self.app_settings,
            )
            raise CorePackagePreconditionError(
                f"This script must not be called for the {core_package_name} package itself."
            )

    def mirror_directory_from_core(self, directory: str) -> List[Path]:
        """Copies `directory` of the core package into the application root, never deleting."""
        return mirror_directory(
            self.get_core_directory() / directory,
            self.get_application_root() / directory,
            self.app_settings,
            self.logger,
        )

    def create_binaries(self, event: ScriptEvent) -> None:
        """Creates bin/ and its contents, copied from the core package."""
        self.prevent_script_from_core_package(event)
        self.mirror_directory_from_core(static_config.BINARIES_DIRECTORY)

    def create_public_web_directory(self, event: ScriptEvent) -> None:
        """Creates web/ and its contents, copied from the core package."""
        self.prevent_script_from_core_package(event)
        self.mirror_directory_from_core(static_config.PUBLIC_WEB_DIRECTORY)

    def create_package_repository(self, event: ScriptEvent) -> PackageRepository:
        return PackageRepository(event, self.app_settings.module_type)

    def create_module_finder(self, event: ScriptEvent) -> ModuleFinder:
        return ModuleFinder(
            self.create_package_repository(event),
            create_convention(self.app_settings, self.logger),
            self.logger,
        )

    def list_modules(self, event: ScriptEvent) -> None:
        """Prints the names and versions of all installed modules."""
        modules = self.create_package_repository(event).find_modules()
        output = self.output or sys.stdout
        output.write(format_module_list(modules))
        output.flush()

    def create_bundle_configuration(self, event: ScriptEvent) -> None:
        """Writes the configuration of the bundles provided by the modules."""
        create_and_write_file(
            self.get_application_root() / self.app_settings.bundle_configuration_file,
            self.create_module_finder(event).create_bundle_configuration_yaml(),
            self.app_settings,
            self.logger,
        )

    def create_routes_configuration(self, event: ScriptEvent) -> None:
        """Writes the route imports provided by the modules."""
        create_and_write_file(
            self.get_application_root() / self.app_settings.routes_configuration_file,
            self.create_module_finder(event).create_route_configuration_yaml(),
            self.app_settings,
            self.logger,
        )

    def create_cache_command_runner(self) -> CacheCommandRunner:
        return CacheCommandRunner(
            self.get_application_root(),
            self.app_settings,
            self.command_runner,
            self.logger,
        )

    def clear_all_caches(self, event: ScriptEvent) -> None:
        """Clears the caches of all environments (test, dev, prod by default)."""
        self.create_cache_command_runner().clear_caches(
            self.app_settings.cache_environments
        )

    def warm_production_cache(self, event: ScriptEvent) -> None:
        self.create_cache_command_runner().warm_cache(
            self.app_settings.warmup_environment
        )

    def create_parameters_configuration(self, event: ScriptEvent) -> None:
        """Creates Configuration/parameters.yml with a new secret, unless it exists."""
        ParametersFile(
            self.get_application_root(),
            self.get_core_directory(),
            self.app_settings,
            self.logger,
        ).ensure_parameters_file()


HOOKS = {
    "create-binaries": ScriptHandler.create_binaries,
    "create-public-web-directory": ScriptHandler.create_public_web_directory,
    "list-modules": ScriptHandler.list_modules,
    "create-bundle-configuration": ScriptHandler.create_bundle_configuration,
    "create-routes-configuration": ScriptHandler.create_routes_configuration,
    "clear-all-caches": ScriptHandler.clear_all_caches,
    "warm-production-cache": ScriptHandler.warm_production_cache,
    "create-parameters-configuration": ScriptHandler.create_parameters_configuration,
}
