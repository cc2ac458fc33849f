# module_scripts/events.py
# -*- coding: utf-8 -*-
"""
The lifecycle event handed to every script, and the packages it describes.

The package manager has already resolved and installed everything when a
script runs; the event is read from the files it leaves behind: the root
manifest (composer.json) and the list of installed packages
(vendor/composer/installed.json).
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from common.command_utils import get_symbols, log_message
from common.json_utils import MalformedJsonError, read_json_file
from settings.config_models import AppSettings

from .exceptions import InvalidPackageDataError

module_logger = logging.getLogger(__name__)

ROOT_PACKAGE_VERSION_DEFAULT = "1.0.0+no-version-set"


class Package(BaseModel):
    """One package of the dependency graph, as declared to the package manager."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )

    name: str = Field(min_length=1)
    pretty_version: str = Field(default="", alias="version")
    type: str = Field(default="library")
    install_path: Optional[Path] = Field(default=None, alias="install-path")
    extra: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("extra", mode="before")
    @classmethod
    def _empty_list_is_empty_mapping(cls, value: Any) -> Any:
        # PHP encodes an empty associative array as []
        if value is None or value == []:
            return {}
        return value


class ScriptEvent:
    """
    What a script knows about the current run: the root package (the one
    whose manifest triggered the hook) and all installed packages, in the
    order the package manager lists them.
    """

    def __init__(
        self,
        root_package: Package,
        installed_packages: Optional[List[Package]] = None,
        application_root: Optional[Path] = None,
    ):
        self.root_package = root_package
        self.installed_packages = list(installed_packages or [])
        self.application_root = application_root

    def __repr__(self) -> str:
        return (
            f"ScriptEvent(root_package={self.root_package.name!r}, "
            f"installed_packages={len(self.installed_packages)})"
        )

    @classmethod
    def from_application_root(
        cls,
        application_root: Path,
        app_settings: AppSettings,
        current_logger: Optional[logging.Logger] = None,
    ) -> "ScriptEvent":
        """
        Builds the event from the manifest and installed package list below
        `application_root`.

        A missing installed package list is treated as "nothing installed yet".

        Raises:
            OSError: If the manifest cannot be read.
            InvalidPackageDataError: If either file is not usable package data.
        """
        logger_to_use = current_logger if current_logger else module_logger
        symbols = get_symbols(app_settings)

        manifest_path = application_root / app_settings.manifest_name
        manifest = _read_package_file(manifest_path)
        if not isinstance(manifest, dict):
            raise InvalidPackageDataError(
                f"The manifest {manifest_path} does not contain a JSON object."
            )
        root_package = _build_package(
            {
                "name": manifest.get("name") or "__root__",
                "version": manifest.get("version") or ROOT_PACKAGE_VERSION_DEFAULT,
                "type": manifest.get("type") or "project",
                "extra": manifest.get("extra") or {},
                "install-path": application_root,
            },
            manifest_path,
        )

        installed_path = application_root / app_settings.installed_packages_file
        installed_packages: List[Package] = []
        if installed_path.is_file():
            for entry in _package_entries(_read_package_file(installed_path), installed_path):
                installed_packages.append(
                    _build_package(
                        _with_install_path(
                            entry, installed_path, application_root, app_settings
                        ),
                        installed_path,
                    )
                )
        else:
            log_message(
                f"{symbols.get('warning', '⚠️')} {installed_path} not found, assuming no packages are installed yet.",
                "warning",
                logger_to_use,
                app_settings,
            )

        log_message(
            f"{symbols.get('package', '📦')} Root package {root_package.name}, {len(installed_packages)} installed package(s)",
            "debug",
            logger_to_use,
            app_settings,
        )
        return cls(root_package, installed_packages, application_root)


def _read_package_file(file_path: Path) -> Any:
    try:
        return read_json_file(file_path)
    except MalformedJsonError as e:
        raise InvalidPackageDataError(str(e)) from e


def _package_entries(data: Any, file_path: Path) -> List[Dict[str, Any]]:
    # Composer 1 writes a plain list, Composer 2 wraps it in {"packages": [...]}
    if isinstance(data, dict):
        data = data.get("packages", [])
    if not isinstance(data, list) or not all(isinstance(entry, dict) for entry in data):
        raise InvalidPackageDataError(
            f"{file_path} does not contain a list of package objects."
        )
    return data


def _with_install_path(
    entry: Dict[str, Any],
    installed_path: Path,
    application_root: Path,
    app_settings: AppSettings,
) -> Dict[str, Any]:
    resolved = dict(entry)
    install_path = entry.get("install-path")
    if install_path:
        # relative to the directory holding installed.json
        resolved["install-path"] = (installed_path.parent / install_path).resolve()
    elif entry.get("name"):
        resolved["install-path"] = (
            application_root / app_settings.vendor_directory / entry["name"]
        )
    return resolved


def _build_package(data: Dict[str, Any], file_path: Path) -> Package:
    try:
        return Package.model_validate(data)
    except ValidationError as e:
        raise InvalidPackageDataError(
            f"Invalid package entry in {file_path}: {e}"
        ) from e
