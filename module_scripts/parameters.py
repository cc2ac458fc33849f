# module_scripts/parameters.py
# -*- coding: utf-8 -*-
"""
Creates the parameters configuration, including a generated secret, on
first run.
"""

import logging
import secrets
from pathlib import Path
from string import Formatter
from typing import Optional

from common.command_utils import get_symbols, log_message
from common.file_utils import create_and_write_file
from settings import config as static_config
from settings.config_models import AppSettings

from .exceptions import TemplateRenderError

module_logger = logging.getLogger(__name__)


def generate_secret(number_of_bytes: int = static_config.SECRET_BYTES) -> str:
    """Returns `number_of_bytes` random bytes as lowercase hex."""
    return secrets.token_hex(number_of_bytes)


def render_template(template: str, placeholder: str, value: str) -> str:
    """
    Fills the named placeholder, written "{<placeholder>}", in `template`.
    Literal braces must be doubled ("{{" and "}}").

    Raises:
        TemplateRenderError: If the template does not contain the placeholder,
            refers to any other field (positional, indexed or attribute fields
            included) or has unbalanced braces.
    """
    try:
        field_names = [
            field_name
            for _, field_name, _, _ in Formatter().parse(template)
            if field_name is not None
        ]
    except ValueError as e:
        raise TemplateRenderError(
            f"The parameters template cannot be rendered: {e}"
        ) from e

    unknown_fields = sorted({name for name in field_names if name != placeholder})
    if unknown_fields:
        raise TemplateRenderError(
            f"The parameters template uses the unknown placeholder(s) "
            f"{', '.join(repr(name) for name in unknown_fields)}; "
            f"only {{{placeholder}}} is supported."
        )
    if placeholder not in field_names:
        raise TemplateRenderError(
            f"The parameters template does not contain {{{placeholder}}}, "
            f"the generated secret would be lost."
        )

    try:
        return template.format_map({placeholder: value})
    except (KeyError, IndexError, AttributeError, ValueError) as e:
        # fields nested in a format spec, e.g. {secret:{width}}
        raise TemplateRenderError(
            f"The parameters template cannot be rendered: {e!r}"
        ) from e


class ParametersFile:
    """
    Owns Configuration/parameters.yml. The file is created once from its
    template and never overwritten, so a generated secret stays stable.
    """

    def __init__(
        self,
        application_root: Path,
        core_directory: Path,
        app_settings: AppSettings,
        current_logger: Optional[logging.Logger] = None,
    ):
        self.application_root = application_root
        self.core_directory = core_directory
        self.app_settings = app_settings
        self.logger = current_logger or module_logger

    @property
    def configuration_path(self) -> Path:
        return self.application_root / self.app_settings.parameters_configuration_file

    def find_template(self) -> Path:
        """
        Returns the template of the application if it has one, otherwise the
        one shipped with the core package.

        Raises:
            FileNotFoundError: If neither exists.
        """
        candidates = [
            self.application_root / self.app_settings.parameters_template_file,
            self.core_directory / self.app_settings.parameters_template_file,
        ]
        for candidate in candidates:
            if candidate.is_file():
                return candidate
        raise FileNotFoundError(
            f"Parameters template not found, looked in: {', '.join(str(c) for c in candidates)}"
        )

    def ensure_parameters_file(self) -> bool:
        """
        Creates the parameters file unless it already exists.

        Returns:
            True if the file was written, False if it already existed.

        Raises:
            FileNotFoundError: If there is no template.
            TemplateRenderError: If the template cannot be rendered.
            OSError: If the template cannot be read or the file cannot be written.
        """
        symbols = get_symbols(self.app_settings)
        configuration_path = self.configuration_path
        if configuration_path.exists():
            log_message(
                f"{configuration_path} already exists, leaving it untouched.",
                "debug",
                self.logger,
                self.app_settings,
            )
            return False

        template_path = self.find_template()
        template = template_path.read_text(encoding="utf-8")
        configuration = render_template(
            template, self.app_settings.secret_placeholder, generate_secret()
        )

        log_message(
            f"{symbols.get('step', '➡️')} Creating {configuration_path} from {template_path}",
            "info",
            self.logger,
            self.app_settings,
        )
        create_and_write_file(
            configuration_path, configuration, self.app_settings, self.logger
        )
        return True
