"""
services/db.py
────────────────────────────────────────────────────────────────────────
* Async SQLAlchemy v2 setup
* The `accounts` table (the only persisted entity)
* Engine lifecycle helpers used by main.py startup / shutdown
"""
from __future__ import annotations

import uuid
from typing import AsyncGenerator
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Float, Integer, String
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    AsyncAttrs,
    AsyncEngine,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

from config import settings

# ───────── connection helper ────────────────────────────────────────
_ENGINE: AsyncEngine | None = None
_SESSIONS: async_sessionmaker[AsyncSession] | None = None


async def _create_engine() -> AsyncEngine:
    if not settings.database_url:
        raise RuntimeError("Set the DATABASE_URL env var")
    return create_async_engine(settings.database_url, pool_pre_ping=True)


async def engine() -> AsyncEngine:
    global _ENGINE
    if _ENGINE is None:
        _ENGINE = await _create_engine()
    return _ENGINE


async def dispose_engine() -> None:
    """Release the pooled connections; the next call to engine() reconnects."""
    global _ENGINE, _SESSIONS
    if _ENGINE is not None:
        await _ENGINE.dispose()
    _ENGINE = None
    _SESSIONS = None


# ───────── declarative base ──────────────────────────────────────────
Base = declarative_base(cls=AsyncAttrs)


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Account(Base):
    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)

    # signup fields
    username: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    password: Mapped[str] = mapped_column(String, nullable=False)

    # profile fields, filled in after signup
    first_name: Mapped[str | None] = mapped_column(String)
    last_name: Mapped[str | None] = mapped_column(String)
    profile_picture: Mapped[str | None] = mapped_column(String)
    age: Mapped[int | None] = mapped_column(Integer)
    height: Mapped[float | None] = mapped_column(Float)
    weight: Mapped[float | None] = mapped_column(Float)
    exercise_choice: Mapped[str | None] = mapped_column(String)
    city: Mapped[str | None] = mapped_column(String)
    state: Mapped[str | None] = mapped_column(String)
    zip_code: Mapped[str | None] = mapped_column(String)
    phone_number: Mapped[str | None] = mapped_column(String)

    profile_completed: Mapped[bool] = mapped_column(Boolean, default=False)

    verified: Mapped[bool] = mapped_column(Boolean, default=False)
    verification_token: Mapped[str] = mapped_column(String, nullable=False)

    date: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)


# ───────── schema bootstrap ──────────────────────────────────────────

async def init_models() -> None:
    """Create missing tables. Existing tables are left as they are."""
    eng = await engine()
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ───────── session helper ────────────────────────────────────────────

async def get_session() -> AsyncGenerator[AsyncSession, None]:
    global _SESSIONS
    if _SESSIONS is None:
        _SESSIONS = async_sessionmaker(await engine(), expire_on_commit=False)
    async with _SESSIONS() as session:
        yield session
