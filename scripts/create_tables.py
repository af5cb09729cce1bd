#!/usr/bin/env python3
"""
Create the `accounts` table against DATABASE_URL.
Usage:
    python -m scripts.create_tables
"""
import asyncio

from sqlalchemy.exc import SQLAlchemyError

from services.db import dispose_engine, init_models


async def create_all() -> None:
    try:
        await init_models()
    finally:
        await dispose_engine()


def main():
    try:
        asyncio.run(create_all())
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
    print("✓ accounts table ready")


if __name__ == "__main__":
    main()
