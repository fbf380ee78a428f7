from functools import lru_cache
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

from pydantic import AnyUrl, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.domain.models import (
    DEFAULT_NOMINATION_PORTAL_URL,
    DEFAULT_REGISTER_INTEREST_PATH,
    DEFAULT_TICKETS_PORTAL_URL,
    CTALinks,
)


def _ensure_sqlalchemy_postgres_scheme(value: str) -> str:
    if not value.lower().startswith("postgres"):
        return value

    parsed = urlparse(value)
    scheme = parsed.scheme.lower()

    if scheme == "postgres":
        scheme = "postgresql"

    if scheme == "postgresql":
        scheme = "postgresql+psycopg"

    if scheme not in {"postgresql+psycopg", "postgresql+asyncpg"}:
        scheme = "postgresql+psycopg"

    query_params = dict(parse_qsl(parsed.query, keep_blank_values=True))
    query_params.setdefault("sslmode", "require")
    query_params.setdefault("target_session_attrs", "read-write")
    new_query = urlencode(query_params, doseq=True)

    return urlunparse(parsed._replace(scheme=scheme, query=new_query))


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    debug: bool = Field(False, description="Enable FastAPI debug mode")
    environment: str = Field(
        default="development",
        description="Runtime environment (development|staging|production)",
    )
    database_url: AnyUrl | str = Field(
        default="sqlite:///./data/awards.db",
        description="SQLAlchemy compatible database URL",
    )
    supabase_db_url: AnyUrl | str | None = Field(
        default=None,
        description="Supabase pooled Postgres connection string for production runs",
    )
    supabase_service_role_key: str | None = Field(
        default=None,
        description="Supabase service role key for privileged operations",
    )
    nomination_portal_url: str = Field(
        default=DEFAULT_NOMINATION_PORTAL_URL,
        description="Nomination portal used when the active event does not set its own",
    )
    tickets_portal_url: str = Field(
        default=DEFAULT_TICKETS_PORTAL_URL,
        description="Ticket shop used when the active event does not set its own",
    )
    register_interest_path: str = Field(
        default=DEFAULT_REGISTER_INTEREST_PATH,
        description="Site path of the register-interest form",
    )
    expose_phase_debug: bool = Field(
        default=False,
        description="Include the boundary comparison snapshot in /event/phase responses",
    )

    @field_validator("register_interest_path")
    @classmethod
    def _validate_site_path(cls, value: str) -> str:
        candidate = value.strip()
        if not candidate.startswith("/") or not candidate.endswith("/"):
            raise ValueError(
                "register_interest_path must be a site path starting and ending with '/'"
            )
        return candidate

    @field_validator("database_url", "supabase_db_url", mode="before")
    @classmethod
    def _normalize_postgres_urls(cls, value: Any) -> Any:
        if value is None or not isinstance(value, str):
            return value

        if value.startswith("postgresql+psycopg://") or value.startswith(
            "postgresql+asyncpg://"
        ):
            return value

        normalized = value
        if normalized.startswith("postgres://"):
            normalized = "postgresql://" + normalized[len("postgres://") :]

        return normalized

    @field_validator("supabase_db_url")
    @classmethod
    def _require_postgres_scheme(cls, value: Any) -> Any:
        if value is None:
            return value
        url_str = str(value)
        scheme = url_str.split(":", 1)[0].lower()
        valid_schemes = {
            "postgres",
            "postgresql",
            "postgresql+psycopg",
            "postgresql+asyncpg",
        }
        if scheme not in valid_schemes:
            raise ValueError(
                "SUPABASE_DB_URL must be a PostgreSQL connection string (e.g. postgresql://...)."
            )
        return value

    @property
    def resolved_database_url(self) -> str:
        environment = self.environment.lower()
        if environment == "production":
            if not self.supabase_db_url:
                raise ValueError(
                    "SUPABASE_DB_URL must be set when ENVIRONMENT=production"
                )
            return _ensure_sqlalchemy_postgres_scheme(str(self.supabase_db_url))
        return _ensure_sqlalchemy_postgres_scheme(str(self.database_url))

    @property
    def cta_links(self) -> CTALinks:
        return CTALinks(
            nomination_portal_url=self.nomination_portal_url,
            tickets_portal_url=self.tickets_portal_url,
            register_interest_path=self.register_interest_path,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
