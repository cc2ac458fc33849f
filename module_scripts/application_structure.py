# module_scripts/application_structure.py
# -*- coding: utf-8 -*-
"""
Locates the root directory of the application being assembled.
"""

import logging
from pathlib import Path
from typing import Optional

from common.command_utils import get_symbols, log_message
from settings.config_models import AppSettings

from .exceptions import ApplicationRootNotFoundError

module_logger = logging.getLogger(__name__)


class ApplicationStructure:
    """
    Knows where the application root and the core package live.

    The search starts at `start_directory` and walks up through its parents.
    The first directory that holds the manifest and is not a package inside
    the install tree (`<root>/vendor/<vendor>/<name>`) is the application
    root.
    """

    def __init__(
        self,
        start_directory: Path,
        app_settings: Optional[AppSettings] = None,
        current_logger: Optional[logging.Logger] = None,
    ):
        self.start_directory = Path(start_directory).resolve()
        self.app_settings = app_settings or AppSettings()
        self.logger = current_logger or module_logger

    def _is_installed_package(self, directory: Path) -> bool:
        vendor_directory = self.app_settings.vendor_directory
        manifest_name = self.app_settings.manifest_name
        if directory.name == vendor_directory and (directory.parent / manifest_name).is_file():
            return True
        install_tree = directory.parent.parent
        return (
            install_tree.name == vendor_directory
            and (install_tree.parent / manifest_name).is_file()
        )

    def get_application_root(self) -> Path:
        """
        Returns:
            The absolute application root directory.

        Raises:
            ApplicationRootNotFoundError: If no directory on the way up holds the manifest.
        """
        manifest_name = self.app_settings.manifest_name
        for candidate in (self.start_directory, *self.start_directory.parents):
            if self._is_installed_package(candidate):
                continue
            if (candidate / manifest_name).is_file():
                log_message(
                    f"Application root: {candidate}",
                    "debug",
                    self.logger,
                    self.app_settings,
                )
                return candidate

        symbols = get_symbols(self.app_settings)
        log_message(
            f"{symbols.get('error', '❌')} No {manifest_name} found in {self.start_directory} or any parent directory.",
            "error",
            self.logger,
            self.app_settings,
        )
        raise ApplicationRootNotFoundError(
            f'There is no {manifest_name} in the supposed application root "{self.start_directory}" '
            f"or any of its parent directories."
        )

    def get_core_directory(self) -> Path:
        """Returns the install directory of the core package."""
        return (
            self.get_application_root()
            / self.app_settings.vendor_directory
            / self.app_settings.core_package_name
        )


def create_application_structure(
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> ApplicationStructure:
    """Starts the search at the configured application root, or at the working directory."""
    start_directory = (
        Path(app_settings.application_root)
        if app_settings.application_root
        else Path.cwd()
    )
    return ApplicationStructure(start_directory, app_settings, current_logger)
