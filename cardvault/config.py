from pydantic_settings import BaseSettings, SettingsConfigDict

# Development-only fallback; deployments must set CARDVAULT_JWT_SECRET.
DEFAULT_JWT_SECRET = "your-secret-key"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="CARDVAULT_")

    app_name: str = "CardVault"
    debug: bool = False
    log_level: str = "INFO"

    database_url: str = "postgresql+asyncpg://localhost:5432/cardvault"

    # Session tokens
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    token_expire_days: int = 7

    cors_origins: list[str] = ["*"]


settings = Settings()


# =============================================================================
# RECORD CONSTRAINTS
# =============================================================================

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6

NOTE_MAX_LENGTH = 200

# Column widths: usernames, card names and set names; rarity labels
NAME_MAX_LENGTH = 255
LABEL_MAX_LENGTH = 64

DEFAULT_CARD_IMAGE = "/images/default-card.jpg"
DEFAULT_RARITY = "Common"
DEFAULT_PRIORITY = 3

LOGIN_PATH = "/auth/login"
