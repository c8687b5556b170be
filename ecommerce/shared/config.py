from pydantic_settings import BaseSettings, SettingsConfigDict
from enum import Enum
from typing import Optional

class AppEnv(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"

class StorageBackend(str, Enum):
    MEMORY = "memory"
    SQL = "sql"

DEFAULT_JWT_SECRET = "change-me-for-production-0123456789abcdef"

class Settings(BaseSettings):
    """
    Central Configuration Registry.
    Strictly typed and validated via Pydantic.
    """

    # --- Application Meta ---
    APP_NAME: str = "ecommerce-backend"
    APP_ENV: AppEnv = AppEnv.DEVELOPMENT
    DEBUG: bool = False

    # --- Security ---
    # HS256 keys shorter than 32 bytes are rejected by PyJWT's key length check.
    JWT_SECRET: str = DEFAULT_JWT_SECRET
    JWT_ISSUER: str = "Ecommerce"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRY_MINUTES: int = 60
    BCRYPT_ROUNDS: int = 12
    PASSWORD_MIN_LENGTH: int = 8

    # --- Logging & Observability ---
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    OTEL_SERVICE_NAME: str = "ecommerce-backend"
    OTEL_EXPORTER_OTLP_ENDPOINT: Optional[str] = None

    # --- Persistence ---
    STORAGE_BACKEND: StorageBackend = StorageBackend.MEMORY
    DATABASE_URL: str = "sqlite+aiosqlite:///./ecommerce.db"

    @property
    def uses_default_secret(self) -> bool:
        return self.JWT_SECRET == DEFAULT_JWT_SECRET

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
