"""Application settings and configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import ClassVar, Optional, List


class Settings(BaseSettings):
    """Application settings with environment variable loading."""

    # API settings
    PROJECT_NAME: str = "Teacher Evaluation Dashboard"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    API_V1_STR: str = "/api/v1"

    # CORS
    CORS_ORIGINS: str = "*"
    CORS_HEADERS: str = "*"
    CORS_METHODS: str = "*"

    # Database
    DATABASE_URI: str = "sqlite+aiosqlite:///./evalboard.db"
    SQL_ECHO: bool = False

    # Database connection pool settings (ignored by sqlite)
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20

    # Store call policy
    STORE_TIMEOUT_SECONDS: float = 10.0
    STORE_MAX_RETRIES: int = 2
    STORE_RETRY_BACKOFF_SECONDS: float = 0.2

    # JWT Settings
    JWT_SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # Cookies
    COOKIE_SECURE: bool = False
    COOKIE_SAMESITE: str = "lax"
    COOKIE_DOMAIN: Optional[str] = None

    # Redis (optional)
    REDIS_HOST: Optional[str] = None
    REDIS_PORT: Optional[int] = None
    REDIS_PASSWORD: Optional[str] = None
    REDIS_DB: int = 0
    REDIS_TTL: int = 3600

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIRECTORY: str = "logs"
    LOG_TO_FILE: bool = True
    LOG_MAX_BYTES: int = 10 * 1024 * 1024  # 10MB
    LOG_BACKUP_COUNT: int = 5
    SERVICE_NAME: str = "evalboard"

    # Teacher provisioning
    PASSWORD_MIN_LENGTH: int = 8
    ALLOW_BIRTHDATE_INITIAL_PASSWORD: bool = False
    BIRTHDATE_PASSWORD_PREFIX: str = "Arwd"

    # Live updates
    NOTIFICATION_HISTORY_LIMIT: int = 50
    NOTIFICATION_REDIS_KEY: str = "evalboard:notifications"

    # Listing
    DEFAULT_PAGE_SIZE: int = 10

    # Redirect targets used by the page access gate
    LOGIN_PATH: str = "/login"
    DEFAULT_LANDING_PATH: str = "/teachers"

    # Free-text fields keep plain text only
    ALLOWED_TAGS: ClassVar[list[str]] = ["b", "br", "em", "i", "p", "strong", "ul", "ol", "li"]
    ALLOWED_ATTRIBUTES: ClassVar[dict[str, list[str]]] = {}

    @field_validator("API_V1_STR")
    def ensure_api_prefix_has_slash(cls, v: str) -> str:
        """Ensure API prefix starts with a slash."""
        if not v.startswith("/"):
            return f"/{v}"
        return v

    @property
    def CORS_ORIGINS_LIST(self) -> List[str]:
        """Convert CORS_ORIGINS string to list."""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def CORS_METHODS_LIST(self) -> List[str]:
        """Convert CORS_METHODS string to list."""
        if self.CORS_METHODS == "*":
            return ["*"]
        return [method.strip() for method in self.CORS_METHODS.split(",")]

    @property
    def CORS_HEADERS_LIST(self) -> List[str]:
        """Convert CORS_HEADERS string to list."""
        if self.CORS_HEADERS == "*":
            return ["*"]
        return [header.strip() for header in self.CORS_HEADERS.split(",")]

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URI.startswith("sqlite")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Create global settings instance
settings = Settings()
