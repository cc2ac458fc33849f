# tests/conftest.py
import json
import logging
import os

import pytest

from settings.config_models import AppSettings

CORE_PACKAGE = "phplist/phplist4-core"


def write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep MODULE_SCRIPTS_* variables of the developer's shell out of the tests."""
    for key in list(os.environ):
        if key.startswith("MODULE_SCRIPTS_"):
            monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def restore_root_logger():
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in list(root_logger.handlers):
        if handler not in handlers:
            root_logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(level)


@pytest.fixture
def app_settings():
    """Fixture to provide a basic AppSettings object."""
    return AppSettings(log_prefix="test_prefix")


@pytest.fixture
def application_root(tmp_path):
    """
    An application with the core package installed: bin/console and
    web/app.php in the core package, an empty Configuration directory.
    """
    root = (tmp_path / "app").resolve()
    write_json(root / "composer.json", {"name": "acme/app", "type": "project"})
    (root / "Configuration").mkdir(parents=True)

    core = root / "vendor" / CORE_PACKAGE
    (core / "bin").mkdir(parents=True)
    (core / "bin" / "console").write_text("#!/usr/bin/env php\n", encoding="utf-8")
    (core / "web").mkdir()
    (core / "web" / "app.php").write_text("<?php\n", encoding="utf-8")
    (core / "Configuration").mkdir()
    (core / "Configuration" / "parameters.yml.dist").write_text(
        "parameters:\n    secret: '{secret}'\n", encoding="utf-8"
    )
    write_json(core / "composer.json", {"name": CORE_PACKAGE, "type": "library"})
    return root


@pytest.fixture
def write_installed_packages(application_root):
    """Writes vendor/composer/installed.json in the Composer 2 format."""

    def _write(packages):
        write_json(
            application_root / "vendor" / "composer" / "installed.json",
            {"packages": packages},
        )

    return _write
