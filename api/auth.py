from __future__ import annotations

import secrets

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from api.errors import ValidationFailed
from api.schemas import LoginIn, MessageOut, TokenOut
from services.auth import create_token, verify_password
from services.db import Account, get_session

router = APIRouter()


async def _by_email(db: AsyncSession, email: str) -> Account | None:
    return (
        await db.execute(select(Account).where(Account.email == email))
    ).scalar_one_or_none()


@router.post("/login", response_model=TokenOut)
async def login(
    body: LoginIn,
    db: AsyncSession = Depends(get_session),
) -> TokenOut:
    account = await _by_email(db, body.email)
    stored = account.password if account else None
    if not await run_in_threadpool(verify_password, body.password, stored):
        raise ValidationFailed("Invalid Credentials")
    return TokenOut(token=create_token(account.id))  # type: ignore[union-attr]


@router.get("/verify-email", response_model=MessageOut)
async def verify_email(
    email: str,
    token: str,
    db: AsyncSession = Depends(get_session),
) -> MessageOut:
    """Confirm the link mailed at signup. The token stays on the account."""
    account = await _by_email(db, email)
    if account is None or not secrets.compare_digest(account.verification_token.encode(), token.encode()):
        raise ValidationFailed("Invalid or expired verification link")
    if not account.verified:
        account.verified = True
        await db.commit()
    return MessageOut(msg="Email verified")
