"""Application settings."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GENESIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: Path = Path.home() / ".genesis-tracker"
    database_name: str = "genesis.db"
    local_store_dirname: str = "local"

    log_level: str = "WARNING"

    # "all" clears every local namespace after migration, "migrated_only"
    # keeps the ones whose transfer failed
    migration_clear_policy: str = "all"

    # Daily nutrition targets (kcal, grams, millilitres)
    target_calories: float = 4864
    target_protein: float = 280
    target_water: float = 4000

    @property
    def database_path(self) -> Path:
        return self.data_dir / self.database_name

    @property
    def local_store_dir(self) -> Path:
        return self.data_dir / self.local_store_dirname


@lru_cache()
def get_settings() -> Settings:
    return Settings()
