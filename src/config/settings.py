"""Application settings loaded from environment variables via pydantic-settings.

Values are read from (highest priority first):

  1. Environment variables, e.g. ``TELEGRAM_USERNAME=alice``
  2. A ``.env`` file in the working directory
  3. The defaults below

Field ``telegram_bot_key`` maps to env var ``TELEGRAM_BOT_KEY`` and so on.
An empty string means "not configured"; the factory in ``src/main.py``
skips optional integrations whose keys are empty.

A single ``Settings`` instance is built at process start and handed to
providers and the orchestrator.  Nothing below ``src/main.py`` reads the
environment directly.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """lifelog application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Telegram ===
    # Only messages from this username are ingested.  Empty = reject all.
    telegram_username: str = ""
    telegram_bot_key: str = ""
    telegram_api_base: str = "https://api.telegram.org"

    # === Nutrition enrichment (Nutritionix natural-language API) ===
    nutritionix_app_id: str = ""
    nutritionix_app_key: str = ""
    nutritionix_endpoint: str = "https://trackapi.nutritionix.com/v2/natural/nutrients"
    nutritionix_timezone: str = "US/Eastern"

    # === Semantic search (Operand) ===
    operand_api_key: str = ""
    operand_api_endpoint: str = "https://mcp.operand.ai"
    # Index target.  Empty = indexing disabled.
    operand_collection_id: str = ""

    # Public base URL used to build absolute attachment links for indexing.
    frontend_url: str = "http://localhost:8000"

    # === Storage ===
    database_path: str = "data/lifelog.db"

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"
    http_timeout: float = 30.0

    def indexing_configured(self) -> bool:
        """Return True when both an API key and an index target are set."""
        return bool(self.operand_api_key and self.operand_collection_id)

    def nutrition_configured(self) -> bool:
        """Return True when Nutritionix credentials are present."""
        return bool(self.nutritionix_app_id and self.nutritionix_app_key)
