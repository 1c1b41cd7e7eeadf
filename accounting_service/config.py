from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "AccountingService"
    debug: bool = False
    log_level: str = "INFO"

    database_url: str = "postgresql+asyncpg://localhost:5432/accounting"

    # Base used when rendering resource hrefs. Empty means "use the
    # scheme and host of the incoming request".
    public_base_url: str = ""

    default_page_size: int = 200
    max_page_size: int = 1000


settings = Settings()


# =============================================================================
# FIELD LIMITS
# =============================================================================

# Category keys form a prefix tree, so their length bounds the cost of
# every subtree scan.
MAX_CATEGORY_KEY_LENGTH = 20

MAX_NAME_LENGTH = 128

# Account and journal ids are stored in signed 32-bit Integer columns.
MIN_INTEGER_KEY = -(2**31)
MAX_INTEGER_KEY = 2**31 - 1
