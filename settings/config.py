# settings/config.py
# -*- coding: utf-8 -*-
"""
Centralized static constants and definitions for the module scripts.

This module defines truly static values, such as the name of the core
package, the locations of the generated configuration files relative to the
application root and the logging symbols.

Values that may differ per application (console location, module type,
convention used to derive bundles and routes) are handled by
'settings/config_models.py' and 'settings/config_loader.py'.
"""

CONFIG_FILE_NAME: str = "module-scripts.yaml"

CORE_PACKAGE_NAME: str = "phplist/phplist4-core"
MODULE_PACKAGE_TYPE: str = "phplist-module"

MANIFEST_FILE_NAME: str = "composer.json"
VENDOR_DIRECTORY: str = "vendor"
INSTALLED_PACKAGES_FILE: str = "vendor/composer/installed.json"

BUNDLE_CONFIGURATION_FILE: str = "Configuration/bundles.yml"
ROUTES_CONFIGURATION_FILE: str = "Configuration/routing_modules.yml"
PARAMETERS_CONFIGURATION_FILE: str = "Configuration/parameters.yml"
PARAMETERS_TEMPLATE_FILE: str = "Configuration/parameters.yml.dist"

BINARIES_DIRECTORY: str = "bin"
PUBLIC_WEB_DIRECTORY: str = "web"

CONSOLE_BIN_DIRECTORY: str = "bin"
CONSOLE_NAME: str = "console"
CONSOLE_INTERPRETER: str = "php"

CACHE_ENVIRONMENTS: list[str] = ["test", "dev", "prod"]
BUNDLE_ENVIRONMENTS: list[str] = ["prod", "dev", "test"]
WARMUP_ENVIRONMENT: str = "prod"

# Number of random bytes behind the generated secret (hex encoded: 40 chars)
SECRET_BYTES: int = 20

GENERATED_FILE_HEADER: str = (
    "# This file is autogenerated. Please do not edit.\n\n"
)

SYMBOLS: dict[str, str] = {
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
    "step": "➡️",
    "gear": "⚙️",
    "package": "📦",
    "sparkles": "✨",
    "critical": "🔥",
    "debug": "🐛",
}
