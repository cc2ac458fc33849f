# module_scripts/package_repository.py
# -*- coding: utf-8 -*-
"""
Read-only view on the packages of a script event.
"""

from typing import Dict, List

from settings import config as static_config

from .events import Package, ScriptEvent


class PackageRepository:
    """
    Finds packages, and modules among them, in the dependency graph of an event.

    Modules are packages whose declared type equals `module_type`.
    """

    def __init__(
        self,
        event: ScriptEvent,
        module_type: str = static_config.MODULE_PACKAGE_TYPE,
    ):
        self.event = event
        self.module_type = module_type

    def find_all(self) -> List[Package]:
        """
        Returns the root package followed by all installed packages, without
        duplicates (the first package with a given name wins), in graph order.
        """
        unique: Dict[str, Package] = {}
        for package in [self.event.root_package, *self.event.installed_packages]:
            unique.setdefault(package.name, package)
        return list(unique.values())

    def find_modules(self) -> List[Package]:
        """Returns all modules, in graph order."""
        return [
            package
            for package in self.find_all()
            if package.type == self.module_type
        ]
