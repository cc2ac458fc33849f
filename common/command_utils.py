# common/command_utils.py
# -*- coding: utf-8 -*-
"""
Logging helpers and the runner for external commands such as the
application console.
"""

import logging
import subprocess
from typing import Dict, List, Optional

from settings.config_models import SYMBOLS_DEFAULT, AppSettings

module_logger = logging.getLogger(__name__)

LOG_LEVEL_METHODS: Dict[str, str] = {
    "debug": "debug",
    "info": "info",
    "success": "info",
    "warning": "warning",
    "error": "error",
    "critical": "critical",
}


def get_symbols(app_settings: Optional[AppSettings]) -> Dict[str, str]:
    """Returns the logging symbols of `app_settings`, or the defaults."""
    return (
        app_settings.symbols
        if app_settings and app_settings.symbols
        else SYMBOLS_DEFAULT
    )


def log_message(
    message: str,
    level: str = "info",
    current_logger: Optional[logging.Logger] = None,
    app_settings: Optional[AppSettings] = None,
    exc_info: bool = False,
) -> None:
    """
    Logs `message` at a level given by name.

    Args:
        message: Text to log.
        level: "debug", "info", "success", "warning", "error" or "critical".
            "success" and unknown names are logged at info level.
        current_logger: Logger to use instead of the module logger.
        app_settings: Settings of the run, passed along by every helper.
        exc_info: Attach the exception being handled to the record.
    """
    logger_to_use = current_logger if current_logger else module_logger
    log_method = getattr(logger_to_use, LOG_LEVEL_METHODS.get(level, "info"))
    log_method(message, exc_info=exc_info)


def _log_output(
    stdout: Optional[str],
    stderr: Optional[str],
    level: str,
    stderr_level: str,
    logger_to_use: logging.Logger,
    app_settings: Optional[AppSettings],
) -> None:
    if stdout and stdout.strip():
        log_message(f"   stdout: {stdout.strip()}", level, logger_to_use, app_settings)
    if stderr and stderr.strip():
        log_message(f"   stderr: {stderr.strip()}", stderr_level, logger_to_use, app_settings)


def run_command(
    command: List[str],
    app_settings: Optional[AppSettings],
    check: bool = True,
    capture_output: bool = True,
    current_logger: Optional[logging.Logger] = None,
    cwd: Optional[str] = None,
    env: Optional[Dict[str, str]] = None,
) -> subprocess.CompletedProcess:
    """
    Runs `command` without a shell and waits for it.

    The command line is logged before it runs. Captured output is logged
    afterwards: stdout at info level, stderr at info level for a zero exit
    status and at error level otherwise.

    Args:
        command: Executable and arguments.
        app_settings: Settings providing the logging symbols.
        check: Raise CalledProcessError on a non-zero exit status.
        capture_output: Capture stdout and stderr as text.
        current_logger: Logger to use instead of the module logger.
        cwd: Working directory of the command.
        env: Environment of the command; inherited when None.

    Returns:
        The completed process.

    Raises:
        subprocess.CalledProcessError: On a non-zero exit status when `check` is set.
        FileNotFoundError: If the executable does not exist.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    command_line = subprocess.list2cmdline(command)
    location = f" (in {cwd})" if cwd else ""

    log_message(
        f"{symbols.get('gear', '⚙️')} Executing: {command_line}{location}",
        "info",
        logger_to_use,
        app_settings,
    )
    try:
        result = subprocess.run(
            command,
            check=check,
            capture_output=capture_output,
            text=True,
            cwd=cwd,
            env=env,
        )
    except subprocess.CalledProcessError as e:
        log_message(
            f"{symbols.get('error', '❌')} Command `{command_line}` failed (rc {e.returncode}).",
            "error",
            logger_to_use,
            app_settings,
        )
        _log_output(e.stdout, e.stderr, "error", "error", logger_to_use, app_settings)
        raise
    except FileNotFoundError as e:
        log_message(
            f"{symbols.get('error', '❌')} Command not found: {e.filename}. Is it installed and on the PATH?",
            "error",
            logger_to_use,
            app_settings,
        )
        raise

    if capture_output:
        stderr_level = "info" if result.returncode == 0 else "error"
        _log_output(
            result.stdout, result.stderr, "info", stderr_level, logger_to_use, app_settings
        )
    return result
