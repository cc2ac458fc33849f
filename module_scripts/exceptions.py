# module_scripts/exceptions.py
# -*- coding: utf-8 -*-
"""
Errors raised by the module scripts.

Every error kind carries a stable numeric `code` (for log scraping and CI)
and the process `exit_code` the command line entry point exits with.
Read and write failures are not wrapped: they surface as the built-in
OSError family.
"""

from typing import Optional, Sequence

EXIT_CONFIGURATION_ERROR = 2
EXIT_OS_ERROR = 8


class ScriptHandlerError(Exception):
    """Base class for all module script errors."""

    code: int = 1500000000000
    exit_code: int = 1

    def __init__(self, message: str, code: Optional[int] = None):
        if code is not None:
            self.code = code
        super().__init__(message)

    def __str__(self) -> str:
        return f"{super().__str__()} (code {self.code})"


class ApplicationRootNotFoundError(ScriptHandlerError):
    """No directory holding the application manifest could be found."""

    code = 1501169001588
    exit_code = 3


class CorePackagePreconditionError(ScriptHandlerError):
    """A script that copies files from the core package ran for the core package itself."""

    code = 1501240572934
    exit_code = 4


class ExternalProcessError(ScriptHandlerError):
    """An external command exited with a non-zero status."""

    code = 1505210364901
    exit_code = 5

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stdout: str = "",
        stderr: str = "",
    ):
        self.command = list(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(
            f'An error occurred when executing the "{" ".join(self.command)}" command '
            f"(exit code {returncode})."
        )


class InvalidModuleMetadataError(ScriptHandlerError):
    """A module declares its bundles or routes in an unexpected shape."""

    code = 1505202471461
    exit_code = 6


class InvalidPackageDataError(ScriptHandlerError):
    """The package manager's manifest or installed package list cannot be used."""

    code = 1505207233820
    exit_code = 6


class TemplateRenderError(ScriptHandlerError):
    """The parameters template uses placeholders that cannot be filled."""

    code = 1505209482134
    exit_code = 7
