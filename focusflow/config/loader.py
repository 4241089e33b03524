"""
Configuration loader
Reads the project TOML configuration and exposes dotted-key access
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import toml

CONFIG_ENV_VAR = "FOCUSFLOW_CONFIG"
DEFAULT_CONFIG_FILE = Path(__file__).parent / "config.toml"


def resolve_config_path(config_file: Optional[Union[str, Path]] = None) -> Path:
    """Resolve which configuration file to use

    Order: explicit argument, FOCUSFLOW_CONFIG environment variable,
    packaged default config.toml.
    """
    if config_file:
        return Path(config_file)

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    return DEFAULT_CONFIG_FILE


class ConfigLoader:
    """TOML configuration loader"""

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        self.config_file = resolve_config_path(config_file)
        self._config: Optional[Dict[str, Any]] = None

    def load(self) -> Dict[str, Any]:
        """Load (or reload) the configuration file

        Raises:
            FileNotFoundError: If the configuration file does not exist
        """
        if not self.config_file.exists():
            raise FileNotFoundError(f"Config file not found: {self.config_file}")

        with open(self.config_file, "r", encoding="utf-8") as f:
            self._config = toml.load(f)
        return self._config

    @property
    def config(self) -> Dict[str, Any]:
        if self._config is None:
            return self.load()
        return self._config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dotted key

        Args:
            key: Dotted key such as "focus.tick_seconds"
            default: Value returned when any part of the key is missing

        Returns:
            Configuration value or default
        """
        value: Any = self.config
        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get a whole configuration section (empty dict when absent)"""
        value = self.get(section, {})
        return value if isinstance(value, dict) else {}


# Global loader instance
_config_loader: Optional[ConfigLoader] = None


def get_config(config_file: Optional[Union[str, Path]] = None) -> ConfigLoader:
    """Get the global config loader, replacing it when a file is given"""
    global _config_loader

    if _config_loader is None or config_file is not None:
        _config_loader = ConfigLoader(config_file)

    return _config_loader
