from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False, frozen=True)

    app_name: str = "Docblog API"
    environment: Literal["dev", "test", "prod"] = "dev"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 5000

    database_url: str = "sqlite:///./docblog.db"
    db_connect_timeout_seconds: int = 5
    db_pool_timeout_seconds: int = 10
    db_statement_timeout_seconds: int = 45
    auto_create_tables: bool = True

    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    jwt_expire_days: int = 30
    jwt_cookie_expire_days: int = 30

    cors_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://localhost:5000",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5000",
        )
    )
    cors_parent_domain: str = ""

    allowed_document_hosts: tuple[str, ...] = ("docs.google.com", "drive.google.com")
    max_image_size_bytes: int = 5 * 1024 * 1024

    @property
    def is_production(self) -> bool:
        return self.environment == "prod"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
