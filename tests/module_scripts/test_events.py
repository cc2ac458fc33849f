import json

import pytest
from pydantic import ValidationError

from module_scripts.events import ROOT_PACKAGE_VERSION_DEFAULT, Package, ScriptEvent
from module_scripts.exceptions import InvalidPackageDataError


def write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


def test_package_reads_package_manager_keys():
    package = Package.model_validate(
        {
            "name": "acme/foo",
            "version": "1.2.0",
            "type": "phplist-module",
            "install-path": "/srv/app/vendor/acme/foo",
            "extra": [],
            "require": {"php": "^7.0"},
        }
    )

    assert package.pretty_version == "1.2.0"
    assert str(package.install_path) == "/srv/app/vendor/acme/foo"
    # PHP's empty array
    assert package.extra == {}


def test_package_is_immutable():
    package = Package(name="acme/foo")

    with pytest.raises(ValidationError):
        package.name = "acme/bar"


def test_package_requires_a_name():
    with pytest.raises(ValidationError):
        Package(name="")


def test_event_from_composer2_installed_file(
    application_root, app_settings, write_installed_packages
):
    write_installed_packages(
        [
            {
                "name": "acme/foo",
                "version": "2.0.0",
                "type": "phplist-module",
                "install-path": "../acme/foo",
            },
            {"name": "phplist/phplist4-core", "version": "4.0.0"},
        ]
    )

    event = ScriptEvent.from_application_root(application_root, app_settings)

    assert event.root_package.name == "acme/app"
    assert event.root_package.type == "project"
    assert event.root_package.install_path == application_root
    assert [package.name for package in event.installed_packages] == [
        "acme/foo",
        "phplist/phplist4-core",
    ]
    foo, core = event.installed_packages
    assert foo.install_path == (application_root / "vendor" / "acme" / "foo").resolve()
    assert core.install_path == application_root / "vendor" / "phplist/phplist4-core"
    assert core.type == "library"
    assert event.application_root == application_root


def test_event_from_composer1_installed_file(application_root, app_settings):
    write_json(
        application_root / "vendor" / "composer" / "installed.json",
        [{"name": "acme/foo", "version": "1.0.0", "type": "phplist-module"}],
    )

    event = ScriptEvent.from_application_root(application_root, app_settings)

    assert [package.name for package in event.installed_packages] == ["acme/foo"]


def test_event_without_installed_file(application_root, app_settings, mocker):
    mock_logger = mocker.Mock()

    event = ScriptEvent.from_application_root(
        application_root, app_settings, mock_logger
    )

    assert event.installed_packages == []
    mock_logger.warning.assert_called_once()


def test_root_package_defaults(tmp_path, app_settings):
    write_json(tmp_path / "composer.json", {})

    root_package = ScriptEvent.from_application_root(tmp_path, app_settings).root_package

    assert root_package.name == "__root__"
    assert root_package.pretty_version == ROOT_PACKAGE_VERSION_DEFAULT
    assert root_package.type == "project"


def test_missing_manifest_raises_os_error(tmp_path, app_settings):
    with pytest.raises(OSError):
        ScriptEvent.from_application_root(tmp_path, app_settings)


@pytest.mark.parametrize(
    "installed",
    [
        {"packages": "acme/foo"},
        ["acme/foo"],
        [{"version": "1.0.0"}],
    ],
)
def test_unusable_installed_file(application_root, app_settings, installed):
    write_json(application_root / "vendor" / "composer" / "installed.json", installed)

    with pytest.raises(InvalidPackageDataError):
        ScriptEvent.from_application_root(application_root, app_settings)


def test_malformed_manifest(tmp_path, app_settings):
    (tmp_path / "composer.json").write_text("{", encoding="utf-8")

    with pytest.raises(InvalidPackageDataError) as exc_info:
        ScriptEvent.from_application_root(tmp_path, app_settings)

    assert exc_info.value.exit_code == 6
