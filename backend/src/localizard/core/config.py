from functools import lru_cache
import os
import secrets
from typing import Annotated, Any, Literal
import warnings

from pydantic import (
    AnyUrl,
    BeforeValidator,
    Field,
    ValidationInfo,
    computed_field,
    field_validator,
)
from pydantic_core import MultiHostUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

# Minimum recommended length for SECRET_KEY in characters
MIN_SECRET_KEY_LENGTH = 32


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",")]
    if isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Localizard"
    DEBUG: bool = False

    FRONTEND_URL: str = "http://localhost:3000"

    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    CORS_ORIGINS: Annotated[list[AnyUrl] | str, BeforeValidator(parse_cors)] = []

    # Sent on every successful consumer API response
    PUBLIC_API_ALLOW_ORIGIN: str = "*"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_cors_origins(self) -> list[str]:
        """Return all CORS origins as strings."""
        origins = [str(origin).rstrip("/") for origin in self.CORS_ORIGINS]
        if self.FRONTEND_URL and self.FRONTEND_URL not in origins:
            origins.append(self.FRONTEND_URL.rstrip("/"))
        return origins

    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "changethis"
    POSTGRES_DB: str = "localizard"

    @field_validator("POSTGRES_PASSWORD", mode="after")
    @classmethod
    def validate_postgres_password(cls, v: str, info: ValidationInfo) -> str:
        """Validate that POSTGRES_PASSWORD is changed in production."""
        env = (
            info.data.get("ENVIRONMENT")
            if info.data
            else os.getenv("ENVIRONMENT", "local")
        )
        if v == "changethis" and env == "production":
            raise ValueError(
                "POSTGRES_PASSWORD must be changed from default value in production. "
                "Set a strong, unique password via the POSTGRES_PASSWORD environment variable."
            )
        if v == "changethis" and env != "local":
            warnings.warn(
                "POSTGRES_PASSWORD is set to default value 'changethis'. "
                "Consider using a strong, unique password.",
                UserWarning,
                stacklevel=2,
            )
        return v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> MultiHostUrl:
        """Build PostgreSQL connection URI for SQLAlchemy."""
        return MultiHostUrl.build(
            scheme="postgresql+psycopg",
            username=self.POSTGRES_USER,
            password=self.POSTGRES_PASSWORD,
            host=self.POSTGRES_SERVER,
            port=self.POSTGRES_PORT,
            path=self.POSTGRES_DB,
        )

    # JWT settings for owner sessions
    # SECRET_KEY should be set via environment variable in production
    # If not set, a random key is generated (only suitable for development)
    SECRET_KEY: str = Field(default="", validate_default=True)
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    @field_validator("SECRET_KEY", mode="before")
    @classmethod
    def validate_secret_key(cls, v: str, info: ValidationInfo) -> str:
        """Validate and warn about SECRET_KEY configuration."""
        if not v:
            generated_key = secrets.token_urlsafe(MIN_SECRET_KEY_LENGTH)
            warnings.warn(
                "SECRET_KEY not set! Using a randomly generated key. "
                "This is only suitable for development. "
                "Set SECRET_KEY environment variable in production.",
                UserWarning,
                stacklevel=2,
            )
            return generated_key
        if len(v) < MIN_SECRET_KEY_LENGTH:
            warnings.warn(
                f"SECRET_KEY is shorter than {MIN_SECRET_KEY_LENGTH} characters. "
                "Consider using a longer key for better security.",
                UserWarning,
                stacklevel=2,
            )
        return v

    FIRST_USER_EMAIL: str = "admin@example.com"
    FIRST_USER_PASSWORD: str = "changethis"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
