"""
Logging setup
Configures the root logger from the [logging] section of the project config:
console output always, rotating focusflow.log / error.log files when
file_output is enabled.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Any, Dict, Optional

import toml

from focusflow.config.loader import resolve_config_path

CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
FILE_FORMAT = (
    "%(asctime)s - %(levelname)s - %(name)s - %(filename)s:%(lineno)d - %(message)s"
)

_SIZE_UNITS = {"KB": 1024, "MB": 1024 ** 2, "GB": 1024 ** 3}


def _logging_section() -> Dict[str, Any]:
    """Read [logging] from the resolved config file"""
    config_path = resolve_config_path()
    if not config_path.exists():
        raise FileNotFoundError(f"Project config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        return toml.load(f).get("logging", {})


def _level(name: str) -> int:
    return getattr(logging, str(name).upper())


def parse_size(size: Any) -> int:
    """Parse a size such as "10MB" or 4096 into bytes"""
    text = str(size).strip().upper()
    for unit, factor in _SIZE_UNITS.items():
        if text.endswith(unit):
            return int(text[: -len(unit)]) * factor
    return int(text)


def _rotating_handler(
    path: Path, level: int, max_bytes: int, backup_count: int
) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


# Set the root level at import time so nothing below it leaks before setup
try:
    logging.getLogger().setLevel(_level(_logging_section().get("level", "INFO")))
except (OSError, toml.TomlDecodeError, AttributeError):
    logging.getLogger().setLevel(logging.INFO)


class LoggerManager:
    """Owns the root logger's handlers"""

    def __init__(self):
        self.configure()

    def configure(self) -> None:
        """(Re)install root handlers from the current configuration"""
        section = _logging_section()

        root_logger = logging.getLogger()
        root_logger.setLevel(_level(section.get("level", "INFO")))
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        root_logger.addHandler(console_handler)

        if not section.get("file_output", True):
            return

        logs_dir = Path(section.get("logs_dir", "./logs"))
        logs_dir.mkdir(parents=True, exist_ok=True)
        max_bytes = parse_size(section.get("max_file_size", "10MB"))
        backup_count = section.get("backup_count", 5)

        root_logger.addHandler(
            _rotating_handler(
                logs_dir / "focusflow.log", logging.DEBUG, max_bytes, backup_count
            )
        )
        root_logger.addHandler(
            _rotating_handler(
                logs_dir / "error.log", logging.ERROR, max_bytes, backup_count
            )
        )


# Created lazily on first get_logger() call
_logger_manager: Optional[LoggerManager] = None


def get_logger(name: str) -> logging.Logger:
    """Get a module logger, configuring the root logger on first use"""
    global _logger_manager

    if _logger_manager is None:
        _logger_manager = LoggerManager()

    return logging.getLogger(name)


def setup_logging() -> None:
    """Apply (or re-apply) the logging configuration"""
    global _logger_manager

    if _logger_manager is None:
        _logger_manager = LoggerManager()
    else:
        _logger_manager.configure()
