"""
Settings for the module scripts: static constants, the Pydantic settings
model and the loader that merges defaults, environment, YAML and CLI values.
"""

from settings.config_loader import load_app_settings
from settings.config_models import AppSettings

__all__ = ["AppSettings", "load_app_settings"]
