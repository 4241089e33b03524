"""
Configuration module

Loads the project TOML configuration (packaged default, or a file named
by the FOCUSFLOW_CONFIG environment variable).
"""

from .loader import ConfigLoader, get_config, resolve_config_path

__all__ = ["ConfigLoader", "get_config", "resolve_config_path"]
