from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Configuration for product-api.

    Values come from the environment (and an optional .env file). Unknown keys
    are ignored so the same .env can be shared with docker-compose.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # --- Service ---
    app_name: str = Field(default="product-api", validation_alias="APP_NAME")
    app_version: str = Field(default="0.1.0", validation_alias="APP_VERSION")
    environment: str = Field(default="local", validation_alias="ENVIRONMENT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # CORS allowlist (CSV), e.g. "http://localhost:5173,http://127.0.0.1:5173"
    cors_allowed_origins: str = Field(
        default="http://localhost:5173",
        validation_alias="CORS_ALLOWED_ORIGINS",
    )

    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    # -------------------------
    # Database
    # -------------------------
    # Opción A: URL completa (si se define, se usa tal cual).
    database_url: Optional[str] = Field(default=None, validation_alias="DATABASE_URL")

    # Opción B: piezas (recomendado para producción)
    db_dialect: str = Field(default="postgresql+psycopg", validation_alias="DB_DIALECT")
    db_host: str = Field(default="product-db", validation_alias="DB_HOST")
    db_port: int = Field(default=5432, validation_alias="DB_PORT")
    db_name: str = Field(default="product_db", validation_alias="DB_NAME")
    db_user: str = Field(default="product_app", validation_alias="DB_USER")
    db_password: Optional[str] = Field(default=None, validation_alias="DB_PASSWORD")

    db_echo: bool = Field(default=False, validation_alias="DB_ECHO")

    # Only for throwaway databases; real environments run `alembic upgrade head`.
    db_create_tables: bool = Field(default=False, validation_alias="DB_CREATE_TABLES")

    seed_sample_data: bool = Field(default=False, validation_alias="SEED_SAMPLE_DATA")

    @property
    def database_url_resolved(self) -> str:
        """
        Returns DATABASE_URL when defined; otherwise builds it from DB_*.

        If DB_PASSWORD is not set the URL is still built, but the connection
        will fail when Postgres requires a password (the usual case in prod).
        """
        if self.database_url and self.database_url.strip():
            return self.database_url.strip()

        pwd = self.db_password or ""
        return f"{self.db_dialect}://{self.db_user}:{pwd}@{self.db_host}:{self.db_port}/{self.db_name}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
