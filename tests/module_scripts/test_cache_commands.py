import subprocess

import pytest

from module_scripts.cache_commands import CacheCommandRunner
from module_scripts.exceptions import ExternalProcessError


def _completed(returncode=0, stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout="", stderr=stderr)


@pytest.fixture
def console(application_root):
    path = application_root / "bin" / "console"
    path.parent.mkdir()
    path.write_text("#!/usr/bin/env php\n", encoding="utf-8")
    return path


@pytest.fixture
def command_runner(mocker):
    return mocker.Mock(return_value=_completed())


def _commands(command_runner):
    return [call.args[0] for call in command_runner.call_args_list]


def test_clear_caches_runs_one_command_per_environment(
    application_root, app_settings, console, command_runner
):
    runner = CacheCommandRunner(application_root, app_settings, command_runner)

    runner.clear_caches(["test", "dev", "prod"])

    assert _commands(command_runner) == [
        ["php", str(console), "cache:clear", "--no-warmup", "-e", "test"],
        ["php", str(console), "cache:clear", "--no-warmup", "-e", "dev"],
        ["php", str(console), "cache:clear", "--no-warmup", "-e", "prod"],
    ]
    for call in command_runner.call_args_list:
        assert call.kwargs["cwd"] == str(application_root)
        assert call.kwargs["check"] is False


def test_clear_caches_stops_at_first_failure(
    application_root, app_settings, console, command_runner
):
    command_runner.side_effect = [_completed(), _completed(1, "dev is broken"), _completed()]
    runner = CacheCommandRunner(application_root, app_settings, command_runner)

    with pytest.raises(ExternalProcessError) as exc_info:
        runner.clear_caches(["test", "dev", "prod"])

    assert command_runner.call_count == 2
    error = exc_info.value
    assert error.returncode == 1
    assert error.stderr == "dev is broken"
    assert error.command[-1] == "dev"
    assert error.exit_code == 5
    assert "cache:clear --no-warmup -e dev" in str(error)


def test_missing_console_skips_commands(
    application_root, app_settings, command_runner, mocker
):
    mock_logger = mocker.Mock()
    runner = CacheCommandRunner(application_root, app_settings, command_runner, mock_logger)

    runner.clear_caches(["test", "dev", "prod"])
    runner.warm_cache("prod")

    command_runner.assert_not_called()
    warnings = [call.args[0] for call in mock_logger.warning.call_args_list]
    assert len(warnings) == 2
    assert "can not clear the cache" in warnings[0]
    assert "can not warm the cache" in warnings[1]


def test_console_without_interpreter(
    application_root, app_settings, console, command_runner
):
    settings = app_settings.model_copy(update={"console_interpreter": ""})

    CacheCommandRunner(application_root, settings, command_runner).warm_cache("prod")

    assert _commands(command_runner) == [[str(console), "cache:warm", "-e", "prod"]]


def test_warm_cache(application_root, app_settings, console, command_runner):
    CacheCommandRunner(application_root, app_settings, command_runner).warm_cache("prod")

    assert _commands(command_runner) == [["php", str(console), "cache:warm", "-e", "prod"]]
