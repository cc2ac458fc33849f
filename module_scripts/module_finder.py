# module_scripts/module_finder.py
# -*- coding: utf-8 -*-
"""
Generates the bundle and route configuration for the installed modules.
"""

import logging
from typing import Any, Dict, Optional

import yaml

from settings import config as static_config

from .conventions import BundleEntries, ModuleConvention, RouteEntries
from .package_repository import PackageRepository

module_logger = logging.getLogger(__name__)


def dump_yaml(data: Dict[str, Any]) -> str:
    """
    Serializes `data` as block-style YAML, keeping the insertion order of
    mappings, preceded by the "autogenerated" header.
    """
    return static_config.GENERATED_FILE_HEADER + yaml.safe_dump(
        data,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )


class ModuleFinder:
    """
    Collects bundles and routes from the modules of a package repository.

    Both configurations are regenerated from scratch on every call, in the
    order the repository lists the modules.
    """

    def __init__(
        self,
        package_repository: PackageRepository,
        convention: ModuleConvention,
        current_logger: Optional[logging.Logger] = None,
    ):
        self.package_repository = package_repository
        self.convention = convention
        self.logger = current_logger or module_logger

    def find_bundle_classes(self) -> Dict[str, BundleEntries]:
        """Returns the bundles by module name, skipping modules without bundles."""
        bundle_sets: Dict[str, BundleEntries] = {}
        for module in self.package_repository.find_modules():
            bundles = self.convention.find_bundles(module)
            if not bundles:
                continue
            bundle_sets[module.name] = bundles
        return bundle_sets

    def find_routes(self) -> RouteEntries:
        """Returns the route imports of all modules, keyed "<module name>.<route name>"."""
        routes: RouteEntries = {}
        for module in self.package_repository.find_modules():
            for route_name, route in self.convention.find_routes(module).items():
                routes[f"{module.name}.{route_name}"] = route
        return routes

    def create_bundle_configuration_yaml(self) -> str:
        bundle_sets = self.find_bundle_classes()
        self.logger.debug(f"Found bundles in {len(bundle_sets)} module(s).")
        return dump_yaml(bundle_sets)

    def create_route_configuration_yaml(self) -> str:
        routes = self.find_routes()
        self.logger.debug(f"Found {len(routes)} route import(s).")
        return dump_yaml(routes)
