"""
Configuration management using pydantic-settings.

Loads settings from environment variables and .env file.
Provides type-safe access with validation.
"""

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_PALETTE = ["red", "yellow", "green", "blue", "purple"]


# ─────────────────────────────────────────────────────────────
# NESTED SETTINGS
# ─────────────────────────────────────────────────────────────


class GameSettings(BaseSettings):
    """Board, level and timing configuration."""

    model_config = SettingsConfigDict(env_prefix="GAME_")

    rows: int = Field(default=6, ge=1)
    cols: int = Field(default=7, ge=1)
    win_length: int = Field(default=4, ge=2)
    round_seconds: int = Field(default=30, ge=1, description="Countdown per round")
    max_level: int = Field(default=10, ge=1)
    palette: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PALETTE),
        description="Ordered player colors; the roster is a prefix of it",
    )
    win_delay: float = Field(
        default=2.5, ge=0.0, description="Seconds before the next level after a win"
    )
    draw_delay: float = Field(
        default=1.5, ge=0.0, description="Seconds before retrying after a draw or timeout"
    )
    tick_interval: float = Field(default=1.0, gt=0.0)
    auto_countdown: bool = Field(
        default=True,
        description="Schedule timer ticks on the engine's scheduler",
    )

    @field_validator("palette")
    @classmethod
    def _check_palette(cls, value: list[str]) -> list[str]:
        colors = [color.strip().lower() for color in value]
        if len(colors) < 2:
            raise ValueError("palette needs at least two colors")
        if any(not color for color in colors):
            raise ValueError("palette colors must be non-empty")
        if len(set(colors)) != len(colors):
            raise ValueError(f"palette colors must be unique: {colors}")
        return colors

    @model_validator(mode="after")
    def _check_win_length(self) -> "GameSettings":
        if self.win_length > max(self.rows, self.cols):
            raise ValueError(
                f"win_length {self.win_length} cannot fit a {self.rows}x{self.cols} board"
            )
        return self


class EffectsSettings(BaseSettings):
    """Cosmetic feedback configuration."""

    model_config = SettingsConfigDict(env_prefix="EFFECTS_")

    sound_enabled: bool = True
    sparkle_count: int = Field(default=50, ge=0)


# ─────────────────────────────────────────────────────────────
# MAIN SETTINGS
# ─────────────────────────────────────────────────────────────


class Settings(BaseSettings):
    """
    Main application settings.

    Loads from .env file and environment variables.
    Environment variables take precedence over .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )

    game: GameSettings = Field(default_factory=GameSettings)
    effects: EffectsSettings = Field(default_factory=EffectsSettings)


# ─────────────────────────────────────────────────────────────
# SINGLETON ACCESS
# ─────────────────────────────────────────────────────────────

_settings: Settings | None = None


def get_settings() -> Settings:
    """Get application settings (singleton)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings singleton (for testing)."""
    global _settings
    _settings = None
