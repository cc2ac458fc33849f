# module_scripts/cli.py
# -*- coding: utf-8 -*-
"""
Command line entry point, called from the package manager's script hooks:

    "scripts": {
        "post-install-cmd": [
            "module-scripts create-binaries",
            "module-scripts create-public-web-directory",
            "module-scripts create-bundle-configuration",
            "module-scripts create-routes-configuration",
            "module-scripts create-parameters-configuration",
            "module-scripts clear-all-caches"
        ]
    }

Every hook exits with 0 on success and with the exit code of the error kind
otherwise, so the package manager stops the build.
"""

import logging
from typing import Any, Optional

import click

from common.command_utils import get_symbols, log_message
from common.core_utils import setup_logging
from settings import config as static_config
from settings.config_loader import load_app_settings

from .application_structure import create_application_structure
from .events import ScriptEvent
from .exceptions import EXIT_CONFIGURATION_ERROR, EXIT_OS_ERROR, ScriptHandlerError
from .script_handler import HOOKS, ScriptHandler

logger = logging.getLogger("module_scripts")


def run_hook(
    hook_name: str,
    verbose: bool = False,
    config_file: str = static_config.CONFIG_FILE_NAME,
    log_file: Optional[str] = None,
    **cli_overrides: Any,
) -> int:
    """
    Loads the settings, locates the application and runs one hook.

    Args:
        hook_name: Key of HOOKS to run.
        verbose: Log at DEBUG instead of INFO.
        config_file: YAML configuration file.
        log_file: Optional file that receives the log output as well.
        **cli_overrides: Setting values given on the command line.

    Returns:
        The process exit code.
    """
    log_level = logging.DEBUG if verbose else logging.INFO
    setup_logging(log_level=log_level, log_file=log_file)

    try:
        app_settings = load_app_settings(cli_overrides, config_file, logger)
    except SystemExit as e:
        logger.critical(str(e))
        return EXIT_CONFIGURATION_ERROR

    setup_logging(
        log_level=log_level,
        log_file=log_file,
        log_prefix=app_settings.log_prefix,
        symbols=app_settings.symbols,
    )
    symbols = get_symbols(app_settings)

    try:
        application_structure = create_application_structure(app_settings, logger)
        event = ScriptEvent.from_application_root(
            application_structure.get_application_root(), app_settings, logger
        )
        handler = ScriptHandler(
            app_settings, application_structure, current_logger=logger
        )
        HOOKS[hook_name](handler, event)
    except ScriptHandlerError as e:
        log_message(
            f"{hook_name} failed: {e}", "critical", logger, app_settings, exc_info=verbose
        )
        return e.exit_code
    except OSError as e:
        log_message(
            f"{hook_name} failed: {e}", "critical", logger, app_settings, exc_info=verbose
        )
        return EXIT_OS_ERROR

    log_message(
        f"{symbols.get('sparkles', '✨')} {hook_name} finished.",
        "debug",
        logger,
        app_settings,
    )
    return 0


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output.")
@click.option(
    "--config",
    "config_file",
    default=static_config.CONFIG_FILE_NAME,
    show_default=True,
    help="YAML configuration file.",
)
@click.option("--log-file", default=None, help="Also append log output to this file.")
@click.option(
    "--application-root",
    default=None,
    help="Directory to start searching for the application root from.",
)
@click.option(
    "--core-package-name", default=None, help="Package that supplies bin/ and web/."
)
@click.option("--module-type", default=None, help="Package type marking a module.")
@click.option(
    "--module-convention",
    type=click.Choice(["extra", "name"]),
    default=None,
    help="How bundles and routes are derived from modules.",
)
@click.option(
    "--console-interpreter",
    default=None,
    help="Interpreter used to run the console (empty: run it directly).",
)
@click.pass_context
def cli(ctx, verbose, config_file, log_file, **cli_overrides):
    """Assembles a modular application from its installed packages."""
    ctx.ensure_object(dict)
    ctx.obj.update(
        verbose=verbose, config_file=config_file, log_file=log_file, **cli_overrides
    )


def _register_hook_command(hook_name: str) -> None:
    hook = HOOKS[hook_name]
    summary = (hook.__doc__ or hook_name.replace("-", " ")).strip().splitlines()[0]

    @click.pass_context
    def hook_command(ctx):
        ctx.exit(run_hook(hook_name, **ctx.obj))

    cli.command(name=hook_name, help=summary)(hook_command)


for _hook_name in HOOKS:
    _register_hook_command(_hook_name)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":  # pragma: no cover
    main()
