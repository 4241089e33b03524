"""
Focus settings
Typed view over the [focus] section of the project configuration
"""

from typing import List, Optional

from pydantic import Field

from focusflow.config.loader import ConfigLoader, get_config
from focusflow.core.logger import get_logger
from focusflow.models.base import BaseModel

logger = get_logger(__name__)


class SessionType(BaseModel):
    """Preset session length offered to the user"""

    id: str
    name: str
    duration: int = Field(gt=0)  # minutes
    description: str = ""


DEFAULT_SESSION_TYPES = [
    SessionType(
        id="pomodoro",
        name="Pomodoro",
        duration=25,
        description="Classic 25-minute focused work session",
    ),
    SessionType(
        id="deep-work",
        name="Deep Work",
        duration=50,
        description="Extended 50-minute session for complex tasks",
    ),
    SessionType(
        id="quick-win",
        name="Quick Win",
        duration=15,
        description="Short 15-minute session for small tasks",
    ),
    SessionType(
        id="custom",
        name="Custom",
        duration=30,
        description="Custom duration session",
    ),
]


class FocusSettings(BaseModel):
    default_session_minutes: int = Field(default=25, gt=0)
    default_estimated_minutes: int = Field(default=30, gt=0)
    tick_seconds: float = Field(default=1.0, ge=0)
    weekly_window_days: int = Field(default=7, gt=0)
    monthly_window_days: int = Field(default=30, gt=0)
    session_types: List[SessionType] = Field(
        default_factory=lambda: list(DEFAULT_SESSION_TYPES)
    )

    @classmethod
    def from_config(cls, config_loader: ConfigLoader) -> "FocusSettings":
        """Build settings from the [focus] section, falling back to defaults"""
        section = config_loader.get_section("focus")
        settings = cls.model_validate(section)
        logger.debug(
            f"Loaded focus settings from {config_loader.config_file}: "
            f"default session {settings.default_session_minutes} min, "
            f"{len(settings.session_types)} session types"
        )
        return settings

    def get_session_type_by_id(self, type_id: str) -> Optional[SessionType]:
        return next((t for t in self.session_types if t.id == type_id), None)

    def get_session_type_by_duration(self, duration: int) -> Optional[SessionType]:
        return next((t for t in self.session_types if t.duration == duration), None)

    @property
    def default_session_type(self) -> SessionType:
        """The first configured preset (Pomodoro by default)"""
        return self.session_types[0] if self.session_types else DEFAULT_SESSION_TYPES[0]


_settings: Optional[FocusSettings] = None


def init_settings(config_loader: Optional[ConfigLoader] = None) -> FocusSettings:
    """Initialize the active settings from a config loader"""
    global _settings

    _settings = FocusSettings.from_config(config_loader or get_config())
    return _settings


def get_settings() -> FocusSettings:
    """Get the active settings, loading them from the project config on first use"""
    if _settings is None:
        return init_settings()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
