# bangserve Utilities Package
"""
Shared utility functions and helpers for bangserve.
"""

from .helpers import configure_logging, load_settings, resolve_static_dir

__all__ = ["configure_logging", "load_settings", "resolve_static_dir"]
