from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from api.deps import get_current_account_id
from api.errors import NotFound, ValidationFailed
from api.schemas import AccountOut
from core.accounts import apply_changes, build_changes
from services import images
from services.auth import hash_password
from services.db import Account, get_session

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/{account_id}", response_model=AccountOut, summary="Upload a profile picture")
async def upload_profile_picture(
    account_id: str,
    file: UploadFile | None = File(None),
    _: str = Depends(get_current_account_id),
    db: AsyncSession = Depends(get_session),
) -> AccountOut:
    """
    Stage the file, push it to the image host and store the optimized URL
    on the account. The staged copy is always removed after the upload
    attempt; if the account is gone by then the remote asset is orphaned.
    """
    if file is None or not file.filename:
        raise ValidationFailed("No file uploaded")

    staged = await run_in_threadpool(images.stage_upload, file)
    url = await run_in_threadpool(images.publish_profile_picture, staged)

    account = await db.get(Account, account_id)
    if account is None:
        logger.warning("Account %s not found after upload; %s left orphaned", account_id, url)
        raise NotFound()
    apply_changes(account, build_changes({"profile_picture": url}, hash_password))
    await db.commit()
    return AccountOut.model_validate(account)
