from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="POKEMASTER_")

    app_name: str = "PokeMaster"
    debug: bool = False

    # Defaults to the platform application-data directory when unset
    data_dir: Path | None = None
    database_filename: str = "pokemaster.db"

    # How long a writer waits on a locked database before failing
    busy_timeout_ms: int = 5000

    pokemon_tcg_api_url: str = "https://api.pokemontcg.io/v2"
    pokemon_tcg_api_key: str = ""


settings = Settings()


# =============================================================================
# STORE DEFAULTS
# =============================================================================

APP_DIR_NAME = "pokemaster"

DEFAULT_CONDITION = "Near Mint"
DEFAULT_QUANTITY = 1
DEFAULT_CURRENCY = "USD"
