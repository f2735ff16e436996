"""
Sympatico - Application Configuration

Loads all configuration from environment variables (and an optional .env file)
using Pydantic Settings.  A cached ``get_settings()`` helper is provided so that
FastAPI dependency-injection (and any other call-site) always receives the same
validated instance without re-parsing the environment on every request.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Three dangers at their smallest gaps leave a realm mean of at most 84
# (Warmth and Anchor plus Voice or Wit); 84 - 3 x 12 keeps the score below 50.
MIN_DANGER_PENALTY = 12.0


class Settings(BaseSettings):
    """Central configuration for the Sympatico service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------ #
    # Runtime environment
    # ------------------------------------------------------------------ #
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # ------------------------------------------------------------------ #
    # CORS
    # ------------------------------------------------------------------ #
    ALLOWED_ORIGINS: str = "*"

    # ------------------------------------------------------------------ #
    # Match scoring
    # ------------------------------------------------------------------ #
    NEUTRAL_SCORE: float = 50.0          # stand-in for a missing virtue score
    DANGER_PENALTY: float = 15.0         # per danger verdict
    FRICTION_PENALTY: float = 5.0        # per friction verdict
    CRITICAL_DANGER_PENALTY: float = 10.0  # extra, per critical virtue in danger

    # ------------------------------------------------------------------ #
    # Derived helpers
    # ------------------------------------------------------------------ #
    @property
    def allowed_origins_list(self) -> list[str]:
        """Return ALLOWED_ORIGINS as a list split on commas."""
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",")]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @field_validator("LOG_LEVEL")
    @classmethod
    def _log_level_must_be_known(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level {v!r}")
        return level

    @field_validator("NEUTRAL_SCORE")
    @classmethod
    def _neutral_score_in_range(cls, v: float) -> float:
        if not 0.0 <= v <= 100.0:
            raise ValueError(f"Neutral score must be between 0 and 100, got {v}")
        return v

    @field_validator("DANGER_PENALTY", "FRICTION_PENALTY", "CRITICAL_DANGER_PENALTY")
    @classmethod
    def _penalty_must_be_non_negative(cls, v: float) -> float:
        if v < 0.0:
            raise ValueError(f"Penalty must be non-negative, got {v}")
        return v

    @model_validator(mode="after")
    def _danger_penalty_bounds(self) -> "Settings":
        if self.DANGER_PENALTY < MIN_DANGER_PENALTY:
            raise ValueError(
                f"DANGER_PENALTY must be at least {MIN_DANGER_PENALTY:g} so that "
                f"three dangers score below 50 (got {self.DANGER_PENALTY})"
            )
        if self.DANGER_PENALTY <= self.FRICTION_PENALTY:
            raise ValueError(
                "DANGER_PENALTY must be strictly larger than FRICTION_PENALTY "
                f"(got {self.DANGER_PENALTY} <= {self.FRICTION_PENALTY})"
            )
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached, validated ``Settings`` instance.

    Using ``@lru_cache`` guarantees the .env file is read and validated
    exactly once per process lifetime.  Import this function anywhere you
    need access to configuration::

        from sympatico.config import get_settings
        settings = get_settings()
    """
    return Settings()
