from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

TRANSLATION_PATTERNS = ("pattern1", "pattern2", "pattern3")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    # Runtime
    environment: str = Field(default="development", validation_alias="APP_ENV")
    port: int = Field(default=4001, validation_alias="PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # CORS / Frontend (comma-separated, added to the local dev origins)
    frontend_urls: str | None = Field(default=None, validation_alias="FRONTEND_URLS")

    # Storage strategy for translations
    translation_pattern: str = Field(default="pattern1", validation_alias="TRANSLATION_PATTERN")

    # Databases. DATABASE_URL wins over the per-pattern URL when set.
    database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")
    database_url_pattern1: str = Field(
        default="sqlite:///./data/pattern1.db", validation_alias="DATABASE_URL_PATTERN1"
    )
    database_url_pattern2: str = Field(
        default="sqlite:///./data/pattern2.db", validation_alias="DATABASE_URL_PATTERN2"
    )
    database_url_pattern3: str = Field(
        default="sqlite:///./data/pattern3.db", validation_alias="DATABASE_URL_PATTERN3"
    )
    database_echo: bool = Field(default=False, validation_alias="DATABASE_ECHO")
    # Create missing tables on startup (handy for SQLite demos; off when a DBA owns the schema).
    db_auto_create: bool = Field(default=True, validation_alias="DB_AUTO_CREATE")

    @field_validator("translation_pattern", mode="before")
    @classmethod
    def _normalize_pattern(cls, v):  # type: ignore[no-untyped-def]
        p = str(v or "").strip().lower()
        if p not in TRANSLATION_PATTERNS:
            raise ValueError(f"Unknown translation pattern: {v}")
        return p

    # ---- helpers / derived flags ----
    @property
    def normalized_environment(self) -> str:
        v = (self.environment or "").strip().lower()
        if v in ("prod", "production"):
            return "production"
        if v in ("stage", "staging"):
            return "staging"
        if v in ("dev", "development"):
            return "development"
        if v in ("test", "testing"):
            return "test"
        return v or "development"

    @property
    def is_production(self) -> bool:
        return self.normalized_environment == "production"

    def database_url_for(self, pattern: str | None = None) -> str:
        p = (pattern or self.translation_pattern).strip().lower()
        if self.database_url and pattern is None:
            return self.database_url
        if p == "pattern1":
            return self.database_url_pattern1
        if p == "pattern2":
            return self.database_url_pattern2
        if p == "pattern3":
            return self.database_url_pattern3
        raise ValueError(f"Unknown translation pattern: {pattern}")

    @property
    def active_database_url(self) -> str:
        return self.database_url_for()

    def require_in_production(self) -> None:
        """
        Enforce required settings in production.

        Local work may run on the default SQLite files; production must point
        at a real server database.
        """
        if not self.is_production:
            return

        missing: list[str] = []
        url = self.active_database_url
        if not url or url.startswith("sqlite"):
            missing.append(
                "DATABASE_URL (or DATABASE_URL_" + self.translation_pattern.upper() + ") for a server database"
            )

        if missing:
            raise RuntimeError(
                "Missing required production environment variables: "
                + ", ".join(missing)
            )

    def to_log_safe_dict(self) -> dict[str, object]:
        """
        A redacted representation safe for structured logs / diagnostics.
        """
        return {
            "environment": self.normalized_environment,
            "port": self.port,
            "log_level": self.log_level,
            "frontend_urls": self.frontend_urls,
            "database": {
                "translation_pattern": self.translation_pattern,
                "url": mask_database_url(self.active_database_url),
                "echo": bool(self.database_echo),
                "auto_create": bool(self.db_auto_create),
            },
        }


def mask_database_url(url: str | None) -> str:
    if not url:
        return ""
    try:
        return make_url(url).render_as_string(hide_password=True)
    except ArgumentError:
        return "<unparseable>"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    s = Settings()
    s.require_in_production()
    return s
