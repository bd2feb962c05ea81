from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be configured via .env file or environment variables.
    """

    # Database
    DATABASE_URL: str
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20

    # Session tokens (signed JWT carried in an HTTP-only cookie)
    SECRET_KEY: str
    SESSION_ALGORITHM: str = "HS256"
    SESSION_MAX_AGE_SECONDS: int = 60 * 60 * 24
    SESSION_UPDATE_AGE_SECONDS: int = 60 * 60
    SESSION_COOKIE_NAME: str = "carta_session"
    SESSION_COOKIE_DOMAIN: str | None = None
    SESSION_COOKIE_SECURE: bool = True

    # Password hashing
    BCRYPT_ROUNDS: int = 12

    # Host-based routing
    BASE_DOMAIN: str = "viw-carta.com"
    APP_SUBDOMAIN: str = "app"
    LOCAL_DEV_DOMAIN: str = "localhost"
    BACKOFFICE_PREFIX: str = "/backoffice"

    # Invitations
    INVITATION_TTL_DAYS: int = 7

    # Application
    APP_NAME: str = "Viw Carta API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: str = ""
    CORS_ALLOW_CREDENTIALS: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS from comma-separated string"""
        if not self.CORS_ORIGINS:
            return []
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def login_path(self) -> str:
        return f"{self.BACKOFFICE_PREFIX}/login"


# Global settings instance
settings = Settings()
