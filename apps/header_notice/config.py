"""Application configuration."""
from functools import lru_cache
from pydantic_settings import BaseSettings
from pydantic import ConfigDict


class Settings(BaseSettings):
    model_config = ConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")
    # full SQLAlchemy URL; overrides the postgres_* fields when set
    database_url: str | None = None
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "header_notice"
    postgres_user: str = "header_notice"
    postgres_password: str = "changeme"

    admin_default_email: str = "admin@localhost"
    admin_default_password: str = "changeme"

    jwt_secret: str = "your-jwt-secret-min-32-chars"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60

    # IANA zone used to interpret naive expiry timestamps
    site_timezone: str = "UTC"
    notice_text_max_length: int = 500


@lru_cache
def get_settings() -> Settings:
    return Settings()
