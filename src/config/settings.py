"""Application settings loaded from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Document store
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "test"  # used when the URI names no database
    store_backend: str = "mongodb"  # "mongodb" | "memory"
    unique_emails: bool = True  # declare a unique index on users.email

    # Registration
    min_password_length: int = 8

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 3000
    static_dir: str = "."  # empty = no static files

    # Logging
    log_level: str = "INFO"
    audit_log_file: str = ""  # Empty = stdout only

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
