from __future__ import annotations

from typing import Any
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, AnyUrl, AliasChoices, field_validator, model_validator


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="forbid",
    )

    # App info
    APP_NAME: str = "QuizGraph Backend"
    GRAPHQL_PATH: str = "/graphql"

    APP_ENV: str = Field(
        "dev",
        validation_alias=AliasChoices("APP_ENV", "app_env"),
        description="Application environment: dev|staging|prod",
    )

    BACKEND_PORT: int = Field(
        8000,
        validation_alias=AliasChoices("BACKEND_PORT", "app_port"),
        description="Backend port to bind",
    )

    DEBUG: bool = Field(
        False,
        validation_alias=AliasChoices("DEBUG", "debug"),
        description="Human-readable console logs instead of JSON",
    )

    # Storage
    STORE_BACKEND: str = Field(
        "memory",
        validation_alias=AliasChoices("STORE_BACKEND", "store_backend"),
        description="Entity store backend: memory|supabase",
    )

    USERS_TABLE: str = "users"
    QUIZZES_TABLE: str = "quizzes"
    QUESTIONS_TABLE: str = "questions"

    # Supabase
    SUPABASE_URL: AnyUrl | None = Field(
        None,
        validation_alias=AliasChoices("SUPABASE_URL", "supabase_url"),
        description="Your Supabase project URL",
    )

    SUPABASE_SERVICE_ROLE_KEY: str | None = Field(
        None,
        validation_alias=AliasChoices("SUPABASE_SERVICE_ROLE_KEY", "supabase_service_role_key"),
        description="Service role key (server-side)",
    )

    SUPABASE_SCHEMA: str = Field(
        "public",
        validation_alias=AliasChoices("SUPABASE_SCHEMA", "supabase_schema"),
        description="Supabase schema name",
    )

    # Tokens
    JWT_SECRET: str = Field(
        ...,
        min_length=32,
        validation_alias=AliasChoices("JWT_SECRET", "jwt_secret"),
        description="HMAC secret used to sign session tokens",
    )
    JWT_ALGORITHM: str = "HS256"
    JWT_ISSUER: str = "quizgraph"
    TOKEN_TTL_MINUTES: int = Field(
        60 * 24,
        validation_alias=AliasChoices("TOKEN_TTL_MINUTES", "token_ttl_minutes"),
    )

    # Slugs
    SLUG_SUFFIX_RANGE: int = Field(10000, gt=0)
    SLUG_MAX_ATTEMPTS: int = Field(1000, gt=0)

    # CORS
    FRONTEND_ORIGINS: list[str] = [
        *[f"http://localhost:{p}" for p in range(5173, 5191)],
        *[f"http://127.0.0.1:{p}" for p in range(5173, 5191)],
    ]

    @field_validator("FRONTEND_ORIGINS", mode="before")
    @classmethod
    def _parse_origins(cls, v: Any) -> Any:
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("[") and s.endswith("]"):
                import json
                try:
                    return json.loads(s)
                except ValueError:
                    pass
            return [item.strip() for item in s.replace(";", ",").split(",") if item.strip()]
        return v

    @field_validator("STORE_BACKEND")
    @classmethod
    def _check_backend(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ("memory", "supabase"):
            raise ValueError(f"Unknown store backend: {v}")
        return v

    @model_validator(mode="after")
    def _require_supabase_credentials(self) -> "Settings":
        if self.STORE_BACKEND == "supabase" and (
            self.SUPABASE_URL is None or not self.SUPABASE_SERVICE_ROLE_KEY
        ):
            raise ValueError(
                "SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY are required for the supabase backend"
            )
        return self


settings = Settings()
