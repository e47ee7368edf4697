"""Application configuration loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

DRIVER = "mysql+pymysql"

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class Settings(BaseSettings):
    mysql_host: str = Field(min_length=1, alias="MYSQL_HOST")
    mysql_port: int = Field(default=3306, alias="MYSQL_PORT")
    mysql_user: str = Field(min_length=1, alias="MYSQL_USER")
    mysql_password: str = Field(min_length=1, alias="MYSQL_PASSWORD")
    mysql_database: str = Field(default="movies", alias="MYSQL_DATABASE")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")
    pool_size: int = Field(default=5, ge=1, alias="DB_POOL_SIZE")
    # seconds to wait for a free pooled connection
    pool_timeout: float = Field(default=30.0, gt=0, alias="DB_POOL_TIMEOUT")
    log_level: LogLevel = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    def server_url(self) -> URL:
        """URL of the MySQL server itself, with no database selected."""

        return URL.create(
            DRIVER,
            username=self.mysql_user,
            password=self.mysql_password,
            host=self.mysql_host,
            port=self.mysql_port,
        )

    def database_url(self) -> URL:
        return self.server_url().set(database=self.mysql_database)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
