import logging
import subprocess
from unittest.mock import MagicMock

import pytest

from common.command_utils import get_symbols, log_message, run_command
from settings.config_models import SYMBOLS_DEFAULT, AppSettings


@pytest.fixture
def settings_with_symbols():
    """Fixture to provide AppSettings with short symbols."""
    return AppSettings(symbols={"gear": "G", "error": "E", "warning": "W"})


@pytest.fixture
def mock_logger():
    """Fixture to create a mock logger for testing."""
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def mock_subprocess_run(mocker):
    return mocker.patch("common.command_utils.subprocess.run")


def _logged_messages(mock_method):
    return [call.args[0] for call in mock_method.call_args_list]


def test_get_symbols_defaults_without_settings():
    assert get_symbols(None) == SYMBOLS_DEFAULT


def test_get_symbols_from_settings(settings_with_symbols):
    assert get_symbols(settings_with_symbols)["gear"] == "G"


@pytest.mark.parametrize(
    "level, method",
    [
        ("debug", "debug"),
        ("info", "info"),
        ("success", "info"),
        ("warning", "warning"),
        ("error", "error"),
        ("critical", "critical"),
    ],
)
def test_log_message_levels(mock_logger, level, method):
    """Test that each level maps onto the matching logger method."""
    log_message("message", level, mock_logger)

    getattr(mock_logger, method).assert_called_once_with("message", exc_info=False)


def test_run_command_success(
    mock_subprocess_run, mock_logger, settings_with_symbols
):
    """Test a successful command with captured output."""
    mock_subprocess_run.return_value = subprocess.CompletedProcess(
        args=["php", "bin/console"], returncode=0, stdout="done\n", stderr=""
    )

    result = run_command(
        ["php", "bin/console"],
        settings_with_symbols,
        current_logger=mock_logger,
        cwd="/srv/app",
    )

    mock_subprocess_run.assert_called_once_with(
        ["php", "bin/console"],
        check=True,
        capture_output=True,
        text=True,
        cwd="/srv/app",
        env=None,
    )
    assert result.returncode == 0
    info_messages = _logged_messages(mock_logger.info)
    assert info_messages[0].startswith("G Executing: php bin/console")
    assert "(in /srv/app)" in info_messages[0]
    assert "   stdout: done" in info_messages
    mock_logger.error.assert_not_called()


def test_run_command_nonzero_without_check(
    mock_subprocess_run, mock_logger, settings_with_symbols
):
    """Test that a failing command is returned, and its stderr logged as an error."""
    mock_subprocess_run.return_value = subprocess.CompletedProcess(
        args=["false"], returncode=1, stdout="", stderr="boom\n"
    )

    result = run_command(
        ["false"], settings_with_symbols, check=False, current_logger=mock_logger
    )

    assert result.returncode == 1
    assert "   stderr: boom" in _logged_messages(mock_logger.error)


def test_run_command_called_process_error(
    mock_subprocess_run, mock_logger, settings_with_symbols
):
    """Test that CalledProcessError is logged and re-raised."""
    mock_subprocess_run.side_effect = subprocess.CalledProcessError(
        2, ["php", "bin/console"], output="partial", stderr="fatal"
    )

    with pytest.raises(subprocess.CalledProcessError):
        run_command(
            ["php", "bin/console"], settings_with_symbols, current_logger=mock_logger
        )

    error_messages = _logged_messages(mock_logger.error)
    assert error_messages[0] == "E Command `php bin/console` failed (rc 2)."
    assert "   stdout: partial" in error_messages
    assert "   stderr: fatal" in error_messages


def test_run_command_not_found(
    mock_subprocess_run, mock_logger, settings_with_symbols
):
    """Test that a missing executable is logged and re-raised."""
    mock_subprocess_run.side_effect = FileNotFoundError(
        2, "No such file or directory", "php"
    )

    with pytest.raises(FileNotFoundError):
        run_command(["php", "bin/console"], settings_with_symbols, current_logger=mock_logger)

    assert "Command not found: php" in _logged_messages(mock_logger.error)[0]
