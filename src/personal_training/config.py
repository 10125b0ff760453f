"""Configuration settings for the Personal Training Manager."""

from pathlib import Path
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


# Path calculations:
# __file__ = src/personal_training/config.py
# .parent.parent.parent = project root
PROJECT_ROOT = Path(__file__).parent.parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables (TRAINER_*)."""

    # Storage: one flat text file per entity type inside data_dir
    data_dir: Path = Path("data")
    athletes_file: str = "atletas.txt"
    routines_file: str = "rutinas.txt"
    insurance_file: str = "seguros.txt"

    # Logging
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    # Display
    currency_symbol: str = "₡"
    app_version: str = "2.0.0"

    @property
    def athletes_path(self) -> Path:
        return self.data_dir / self.athletes_file

    @property
    def routines_path(self) -> Path:
        return self.data_dir / self.routines_file

    @property
    def insurance_path(self) -> Path:
        return self.data_dir / self.insurance_file

    def ensure_data_dir(self) -> Path:
        """Create the data directory if needed and return it."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        return self.data_dir

    class Config:
        env_prefix = "TRAINER_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
