from typing import Optional
from urllib.parse import quote_plus
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- Basic configuration ---
    APP_NAME: str = "EmptyLegs API"
    APP_DESCRIPTION: str = "Marketplace API for booking empty leg private jet flights"
    APP_VERSION: str = "1.0.0"
    APP_ENV: str = "development"  # development, production, testing
    DEBUG: bool = True

    # --- Database (MySQL/SQLModel) ---
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_USER: str = "root"
    DB_PASSWORD: str = "root"
    DB_NAME: str = "emptylegs"
    DB_ECHO: bool = False
    # Create missing tables on startup; Alembic owns the schema otherwise
    DB_AUTO_CREATE: bool = False
    # Full async URL, e.g. sqlite+aiosqlite:///./dev.db; wins over the DB_* parts
    DATABASE_URL_OVERRIDE: Optional[str] = None

    @property
    def DATABASE_URL(self) -> str:
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        safe_password = quote_plus(self.DB_PASSWORD)
        return f"mysql+aiomysql://{self.DB_USER}:{safe_password}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    # --- Pagination ---
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100

    # --- Logging ---
    LOG_DIR: str = "logs"

    # --- API route prefixes ---
    API_V1_AIRPORTS_PREFIX: str = "/api/v1/airports"
    API_V1_FLIGHTS_PREFIX: str = "/api/v1/flights"

    # Priority: env vars > .env > defaults
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
    )


settings = Settings()
