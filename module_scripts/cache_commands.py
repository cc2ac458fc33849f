# module_scripts/cache_commands.py
# -*- coding: utf-8 -*-
"""
Clears and warms the framework caches through the application's console.
"""

import logging
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from common.command_utils import get_symbols, log_message, run_command
from settings.config_models import AppSettings

from .exceptions import ExternalProcessError

module_logger = logging.getLogger(__name__)


class CacheCommandRunner:
    """
    Runs cache commands with the console below the application root.

    Before the application skeleton has been assembled there is no console;
    the commands are then skipped with a warning instead of failing.
    """

    def __init__(
        self,
        application_root: Path,
        app_settings: AppSettings,
        command_runner: Callable = run_command,
        current_logger: Optional[logging.Logger] = None,
    ):
        self.application_root = application_root
        self.app_settings = app_settings
        self.command_runner = command_runner
        self.logger = current_logger or module_logger

    @property
    def console_path(self) -> Path:
        return (
            self.application_root
            / self.app_settings.console_bin_directory
            / self.app_settings.console_name
        )

    def find_console(self, action_name: str) -> Optional[Path]:
        """Returns the console, or None (with a warning naming `action_name`) if there is none."""
        console = self.console_path
        if console.is_file():
            return console

        symbols = get_symbols(self.app_settings)
        log_message(
            f"{symbols.get('warning', '⚠️')} The console directory ({self.app_settings.console_bin_directory}) "
            f"was not found in {self.application_root}, can not {action_name}.",
            "warning",
            self.logger,
            self.app_settings,
        )
        return None

    def build_command(self, console: Path, arguments: List[str]) -> List[str]:
        command: List[str] = []
        if self.app_settings.console_interpreter:
            command.append(self.app_settings.console_interpreter)
        command.append(str(console))
        command.extend(arguments)
        return command

    def execute_command(self, console: Path, arguments: List[str]) -> None:
        """
        Runs the console with `arguments` in the application root.

        Raises:
            ExternalProcessError: If the console exits with a non-zero status.
        """
        command = self.build_command(console, arguments)
        result = self.command_runner(
            command,
            self.app_settings,
            check=False,
            capture_output=True,
            current_logger=self.logger,
            cwd=str(self.application_root),
        )
        if result.returncode != 0:
            raise ExternalProcessError(
                command, result.returncode, result.stdout or "", result.stderr or ""
            )

    def clear_caches(self, environments: Iterable[str]) -> None:
        """
        Clears the caches of `environments`, one console run per environment,
        in the given order. The first failing run stops the remaining ones.
        """
        console = self.find_console("clear the cache")
        if console is None:
            return

        for environment in environments:
            self.execute_command(
                console, ["cache:clear", "--no-warmup", "-e", environment]
            )

    def warm_cache(self, environment: str) -> None:
        console = self.find_console("warm the cache")
        if console is None:
            return

        self.execute_command(console, ["cache:warm", "-e", environment])
