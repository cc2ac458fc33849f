"""
Package manager scripts that assemble a modular application: mirroring the
core package's bin/ and web/ directories, generating the bundle and route
configuration of the installed modules, managing caches and creating the
parameters file.
"""

from module_scripts.events import Package, ScriptEvent
from module_scripts.script_handler import HOOKS, ScriptHandler

__all__ = ["HOOKS", "Package", "ScriptEvent", "ScriptHandler"]
