from __future__ import annotations

from dataclasses import dataclass

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError


class Settings(BaseSettings):
    # FOGET_DESCRIPTIONS is the last fallback in path resolution, not an override.
    descriptions: str | None = None
    no_color: bool = False
    log_level: str = "WARNING"
    atomic_save: bool = True
    model_config = SettingsConfigDict(
        env_prefix="FOGET_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.strip().upper() or "WARNING"

    @field_validator("descriptions")
    @classmethod
    def _blank_is_unset(cls, v: str | None) -> str | None:
        return v or None


@dataclass(frozen=True)
class OutputConfig:
    """Rendering options passed explicitly to the console layer."""

    color: bool = True


def load_settings() -> Settings:
    """Build settings from the current environment (fresh on every call).

    Invalid ``FOGET_*`` values raise :class:`ConfigError` naming the variable.
    """
    try:
        return Settings()
    except ValidationError as exc:
        problems = []
        for err in exc.errors():
            field = ".".join(str(p) for p in err.get("loc", ())) or "?"
            problems.append(f"FOGET_{field.upper()}: {err.get('msg', 'invalid value')}")
        raise ConfigError("; ".join(problems)) from exc


def output_config(settings: Settings, *, no_color_flag: bool = False) -> OutputConfig:
    return OutputConfig(color=not (no_color_flag or settings.no_color))
