"""Configuration for the scott engine."""

import os
from dataclasses import dataclass
from pathlib import Path

from .engine.settings import EngineSettings


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes")


@dataclass
class Config:
    """Application configuration."""

    database_url: str = "sqlite:///./scott.db"
    adventure_file: Path | None = None
    log_level: str = "INFO"
    log_file: Path | None = None
    json_logs: bool = False
    hash_player_names: bool = True
    player_name: str = "player"

    light_warning_threshold: int = 25
    destroy_exhausted_light: bool = True
    dark_fall_chance: int = 25
    delay_seconds: float = 2.0
    seed: int | None = None

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        adventure_file = os.getenv("SCOTT_ADVENTURE_FILE")
        log_file = os.getenv("SCOTT_LOG_FILE")
        seed = os.getenv("SCOTT_SEED")

        return cls(
            database_url=os.getenv("SCOTT_DATABASE_URL", cls.database_url),
            adventure_file=Path(adventure_file) if adventure_file else None,
            log_level=os.getenv("SCOTT_LOG_LEVEL", cls.log_level),
            log_file=Path(log_file) if log_file else None,
            json_logs=_env_flag("SCOTT_JSON_LOGS", False),
            hash_player_names=_env_flag("SCOTT_HASH_PLAYER_NAMES", True),
            player_name=os.getenv("SCOTT_PLAYER", cls.player_name),
            light_warning_threshold=int(
                os.getenv("SCOTT_LIGHT_WARNING", str(cls.light_warning_threshold))
            ),
            destroy_exhausted_light=_env_flag(
                "SCOTT_DESTROY_EXHAUSTED_LIGHT", cls.destroy_exhausted_light
            ),
            dark_fall_chance=int(
                os.getenv("SCOTT_DARK_FALL_CHANCE", str(cls.dark_fall_chance))
            ),
            delay_seconds=float(
                os.getenv("SCOTT_DELAY_SECONDS", str(cls.delay_seconds))
            ),
            seed=int(seed) if seed else None,
        )

    def engine_settings(self) -> EngineSettings:
        return EngineSettings(
            light_warning_threshold=self.light_warning_threshold,
            destroy_exhausted_light=self.destroy_exhausted_light,
            dark_fall_chance=self.dark_fall_chance,
            delay_seconds=self.delay_seconds,
        )
