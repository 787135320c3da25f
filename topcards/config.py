from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Upstream cache of tournament decklists, one JSON file per event
DEFAULT_DATA_REPO = "https://github.com/barrins-project/mtg_decklist_cache.git"

DEFAULT_FORMATS = "Standard,Modern,Pioneer,Legacy"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="TOP_CARDS_")

    debug: bool = False

    # Comma-separated; "*" means every format
    formats: str = DEFAULT_FORMATS

    top_n: int = Field(default=5000, ge=0)

    half_life_days: float = Field(default=45.0, gt=0, allow_inf_nan=False)
    max_age_days: float = Field(default=1825.0, ge=0, allow_inf_nan=False)
    weighting_enabled: bool = True

    include_sideboard: bool = True

    data_dir: Path = Path("./data")
    data_repo: str = DEFAULT_DATA_REPO

    workers: int = Field(default=1, ge=1)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Load settings once per process.

    Raises:
        pydantic.ValidationError: If a TOP_CARDS_* variable or .env entry is invalid
    """
    return Settings()
