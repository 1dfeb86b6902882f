"""Configuration module for wsinvoker."""

from wsinvoker.config.loader import get_options_path, load_options, save_options
from wsinvoker.config.schema import InvokerOptions

__all__ = ["InvokerOptions", "load_options", "save_options", "get_options_path"]
