# module_scripts/conventions.py
# -*- coding: utf-8 -*-
"""
Conventions mapping a module to the bundles and routes it contributes.

A convention answers two questions for one module:
- which bundle classes it provides, and in which environments they are enabled,
- which route imports it provides, by route name.

Which convention is used is a setting ("module_convention"), so applications
with a different package layout can switch without touching the generator.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type

from settings.config_models import AppSettings

from .events import Package
from .exceptions import InvalidModuleMetadataError

module_logger = logging.getLogger(__name__)

BundleEntries = Dict[str, List[str]]
RouteEntries = Dict[str, Dict[str, Any]]


class ModuleConvention(ABC):
    """Base class for the module conventions."""

    def __init__(
        self,
        app_settings: AppSettings,
        current_logger: Optional[logging.Logger] = None,
    ):
        self.app_settings = app_settings
        self.logger = current_logger or logging.getLogger(self.__class__.__name__)

    @property
    @abstractmethod
    def convention_name(self) -> str:
        """Return the setting value selecting this convention."""
        pass

    @abstractmethod
    def find_bundles(self, module: Package) -> BundleEntries:
        """
        Returns the bundle classes of `module`, each mapped to the list of
        environments it is enabled in. An empty result skips the module.
        """
        pass

    @abstractmethod
    def find_routes(self, module: Package) -> RouteEntries:
        """
        Returns the route imports of `module` by route name. Each value holds
        at least a "resource". An empty result skips the module.
        """
        pass


class ExtraSectionConvention(ModuleConvention):
    """
    Reads what a module declares in its package metadata:

        "extra": {
            "phplist/phplist4-core": {
                "bundles": ["Vendor\\\\Foo\\\\FooBundle"],
                "routes": {"foo": {"resource": "@FooBundle/Controller/", "type": "annotation"}}
            }
        }

    "bundles" is either a list of class names, enabled in every default
    environment, or a mapping of class name to environment list. Modules
    without a declaration are skipped.
    """

    convention_name = "extra"

    def _section(self, module: Package) -> Dict[str, Any]:
        section_key = self.app_settings.core_package_name
        section = module.extra.get(section_key)
        if section is None or section == []:
            return {}
        if not isinstance(section, dict):
            raise InvalidModuleMetadataError(
                f'The extra.{section_key} section in the composer.json of the module '
                f'"{module.name}" must be an object, but is {type(section).__name__}.',
                code=1505202471461,
            )
        return section

    def find_bundles(self, module: Package) -> BundleEntries:
        bundles = self._section(module).get("bundles")
        if not bundles:
            self.logger.debug(f"Module {module.name} declares no bundles.")
            return {}

        if isinstance(bundles, list):
            if not all(isinstance(bundle, str) and bundle for bundle in bundles):
                raise InvalidModuleMetadataError(
                    f'The bundles of the module "{module.name}" must be non-empty class names.',
                    code=1505202508183,
                )
            return {
                bundle: list(self.app_settings.bundle_environments)
                for bundle in bundles
            }

        if isinstance(bundles, dict):
            entries: BundleEntries = {}
            for bundle, environments in bundles.items():
                if isinstance(environments, str):
                    environments = [environments]
                if not isinstance(environments, list) or not all(
                    isinstance(environment, str) for environment in environments
                ):
                    raise InvalidModuleMetadataError(
                        f'The environments of the bundle "{bundle}" in the module "{module.name}" '
                        f"must be a list of environment names.",
                        code=1505202524762,
                    )
                entries[bundle] = list(environments)
            return entries

        raise InvalidModuleMetadataError(
            f'The bundles section of the module "{module.name}" must be a list or an object, '
            f"but is {type(bundles).__name__}.",
            code=1505202535920,
        )

    def find_routes(self, module: Package) -> RouteEntries:
        routes = self._section(module).get("routes")
        if not routes:
            self.logger.debug(f"Module {module.name} declares no routes.")
            return {}

        if not isinstance(routes, dict):
            raise InvalidModuleMetadataError(
                f'The routes section of the module "{module.name}" must be an object, '
                f"but is {type(routes).__name__}.",
                code=1505202551341,
            )
        for route_name, route in routes.items():
            if not isinstance(route, dict) or not isinstance(route.get("resource"), str):
                raise InvalidModuleMetadataError(
                    f'The route "{route_name}" of the module "{module.name}" must be an object '
                    f'with a "resource".',
                    code=1505202567482,
                )
        return {route_name: dict(route) for route_name, route in routes.items()}


class NameDerivedConvention(ModuleConvention):
    """
    Guesses one bundle and one annotation route import per module from the
    package name: "acme/shop-cart" becomes the bundle Acme\\ShopCart\\ShopCartBundle
    with routes imported from @ShopCartBundle/Controller/. Every module is
    included, whether or not the guessed class exists.
    """

    convention_name = "name"

    @staticmethod
    def _studly(name: str) -> str:
        return "".join(part[:1].upper() + part[1:] for part in re.split(r"[-_.]+", name) if part)

    def bundle_name(self, module: Package) -> str:
        package_part = module.name.rsplit("/", 1)[-1]
        bundle_base = self._studly(package_part)
        if bundle_base.endswith("Bundle") and bundle_base != "Bundle":
            bundle_base = bundle_base[: -len("Bundle")]
        return f"{bundle_base}Bundle"

    def bundle_class(self, module: Package) -> str:
        vendor_part, _, package_part = module.name.rpartition("/")
        namespace = [self._studly(vendor_part)] if vendor_part else []
        bundle_name = self.bundle_name(module)
        namespace.append(bundle_name[: -len("Bundle")])
        return "\\".join(namespace + [bundle_name])

    def find_bundles(self, module: Package) -> BundleEntries:
        return {self.bundle_class(module): list(self.app_settings.bundle_environments)}

    def find_routes(self, module: Package) -> RouteEntries:
        return {
            "annotations": {
                "resource": f"@{self.bundle_name(module)}/Controller/",
                "type": "annotation",
            }
        }


CONVENTIONS: Dict[str, Type[ModuleConvention]] = {
    ExtraSectionConvention.convention_name: ExtraSectionConvention,
    NameDerivedConvention.convention_name: NameDerivedConvention,
}


def create_convention(
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> ModuleConvention:
    """
    Creates the convention selected by `app_settings.module_convention`.

    Raises:
        KeyError: If no convention with that name exists.
    """
    name = app_settings.module_convention
    if name not in CONVENTIONS:
        raise KeyError(f"No module convention registered with name '{name}'")
    return CONVENTIONS[name](app_settings, current_logger)
