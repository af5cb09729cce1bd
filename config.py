"""
Centralised settings loader.

Every value comes from the environment (or a local `.env` file); nothing
else in the project reads os.environ directly.
"""

from __future__ import annotations
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class _Settings(BaseSettings):
    # ─── runtime ─────────────────────────────────────────────────────
    env_name: str = Field("local", alias="ENV_NAME")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    port: int = Field(3000, alias="PORT")
    cors_origin: str = Field("http://localhost:5173", alias="CORS_ORIGIN")

    # ─── store ───────────────────────────────────────────────────────
    database_url: str | None = Field(None, alias="DATABASE_URL")

    # ─── sessions ────────────────────────────────────────────────────
    jwt_secret: str = Field("changeme", alias="JWT_SECRET")
    jwt_ttl_minutes: int = Field(60, alias="JWT_TTL_MINUTES")

    # ─── mail ────────────────────────────────────────────────────────
    email_user: str | None = Field(None, alias="EMAIL_USER")
    email_pass: str | None = Field(None, alias="EMAIL_PASS")
    smtp_host: str = Field("smtp.gmail.com", alias="SMTP_HOST")
    smtp_port: int = Field(465, alias="SMTP_PORT")
    frontend_url: str = Field("http://localhost:5173", alias="FRONTEND_URL")

    # ─── image host ──────────────────────────────────────────────────
    cloudinary_cloud_name: str | None = Field(None, alias="CLOUDINARY_CLOUD_NAME")
    cloudinary_api_key: str | None = Field(None, alias="CLOUDINARY_API_KEY")
    cloudinary_api_secret: str | None = Field(None, alias="CLOUDINARY_API_SECRET")
    upload_dir: str = Field("uploads", alias="UPLOAD_DIR")

    # allow other teammates’ env-vars without crashing
    model_config = SettingsConfigDict(
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
    )


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> _Settings:  # pragma: no cover
    return _Settings()  # type: ignore[call-arg]


settings: _Settings = _cached()
