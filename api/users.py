from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from api.deps import get_current_account_id
from api.errors import NotFound, ValidationFailed
from api.schemas import AccountOut, AccountUpdate, MessageOut, SignupIn, TokenOut
from api.uploads import upload_profile_picture
from core.accounts import apply_changes, build_changes
from services.auth import create_token, generate_verification_token, hash_password
from services.db import Account, get_session
from services.mailer import send_verification_email

router = APIRouter()
logger = logging.getLogger(__name__)


def _signup_fields(body: SignupIn | None) -> SignupIn:
    """A request without a body fails every field check, the same as `{}`."""
    if body is not None:
        return body
    try:
        return SignupIn.model_validate({})
    except ValidationError as exc:
        raise RequestValidationError(
            [{**err, "loc": ("body", *err["loc"])} for err in exc.errors()]
        )


# ───────────────────────── signup ──────────────────────────
@router.post(
    "/signup",
    response_model=TokenOut,
    status_code=status.HTTP_200_OK,
    summary="Register an account and email its verification link",
)
async def signup(
    background: BackgroundTasks,
    body: SignupIn | None = None,
    db: AsyncSession = Depends(get_session),
) -> TokenOut:
    body = _signup_fields(body)
    taken = (
        await db.execute(select(Account.id).where(Account.email == body.email))
    ).scalar_one_or_none()
    if taken is not None:
        raise ValidationFailed("User already exists")

    account = Account(
        username=body.username,
        email=body.email,
        password=await run_in_threadpool(hash_password, body.password),
        first_name=body.first_name,
        verification_token=generate_verification_token(),
    )
    db.add(account)
    # a racing signup with the same username/email fails here on the unique index
    await db.commit()
    logger.info("Account %s created for %s", account.id, account.email)

    background.add_task(send_verification_email, account.email, account.verification_token)
    return TokenOut(token=create_token(account.id))


# ───────────────────────── fetch one ────────────────────────
@router.get("/{account_id}", response_model=AccountOut)
async def fetch_account(
    account_id: str,
    _: str = Depends(get_current_account_id),
    db: AsyncSession = Depends(get_session),
) -> AccountOut:
    account = await db.get(Account, account_id)
    if account is None:
        raise NotFound()
    return AccountOut.model_validate(account)


# ───────────────────────── update ───────────────────────────
@router.put("/{account_id}", response_model=AccountOut)
async def update_account(
    account_id: str,
    body: AccountUpdate | None = None,
    _: str = Depends(get_current_account_id),
    db: AsyncSession = Depends(get_session),
) -> AccountOut:
    # no body is an empty update
    present = body.present_fields() if body is not None else {}
    changes = await run_in_threadpool(build_changes, present, hash_password)

    account = await db.get(Account, account_id)
    if account is None:
        raise NotFound()
    apply_changes(account, changes)
    await db.commit()
    return AccountOut.model_validate(account)


# ───────────────────────── delete ───────────────────────────
@router.delete("/{account_id}", response_model=MessageOut)
async def delete_account(
    account_id: str,
    _: str = Depends(get_current_account_id),
    db: AsyncSession = Depends(get_session),
) -> MessageOut:
    # any valid session may delete any account; there is no ownership check
    account = await db.get(Account, account_id)
    if account is None:
        raise NotFound()
    await db.delete(account)
    await db.commit()
    logger.info("Account %s deleted", account_id)
    return MessageOut(msg="User deleted")


# same handler as POST /api/uploads/{account_id}
router.add_api_route(
    "/upload/{account_id}",
    upload_profile_picture,
    methods=["POST"],
    response_model=AccountOut,
    summary="Upload a profile picture",
)
