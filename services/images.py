"""
Profile picture pipeline: stage the client upload on local disk, push it to
Cloudinary, derive the optimized delivery URL, drop the staged copy.
"""
from __future__ import annotations

import logging
import os
import shutil
import tempfile

import cloudinary
import cloudinary.uploader
import cloudinary.utils
from fastapi import UploadFile

from config import settings

logger = logging.getLogger(__name__)

_configured = False


def _configure() -> None:
    global _configured
    if _configured:
        return
    if not all([settings.cloudinary_cloud_name, settings.cloudinary_api_key, settings.cloudinary_api_secret]):
        raise ValueError("Cloudinary credentials must be configured")
    cloudinary.config(
        cloud_name=settings.cloudinary_cloud_name,
        api_key=settings.cloudinary_api_key,
        api_secret=settings.cloudinary_api_secret,
        secure=True,
    )
    _configured = True


def stage_upload(file: UploadFile) -> str:
    """Copy the request file into UPLOAD_DIR and return the temp path."""
    os.makedirs(settings.upload_dir, exist_ok=True)
    suffix = os.path.splitext(file.filename or "")[1]
    staged = tempfile.NamedTemporaryFile(dir=settings.upload_dir, suffix=suffix, delete=False)
    try:
        file.file.seek(0)
        shutil.copyfileobj(file.file, staged)
    finally:
        staged.close()
    return staged.name


def upload_image(path: str) -> str:
    """Upload the file at `path` and return the asset's public id."""
    _configure()
    result = cloudinary.uploader.upload(path)
    logger.info("Uploaded %s to Cloudinary as %s", path, result["public_id"])
    return result["public_id"]


def optimized_url(public_id: str) -> str:
    """Delivery URL with automatic format and quality."""
    url, _ = cloudinary.utils.cloudinary_url(public_id, fetch_format="auto", quality="auto", secure=True)
    return url


def discard_staged(path: str) -> None:
    try:
        os.remove(path)
    except OSError as e:
        logger.error("Error deleting temporary file %s: %s", path, e)
    else:
        logger.debug("Temporary file %s deleted", path)


def publish_profile_picture(path: str) -> str:
    """
    Upload a staged file and return its optimized URL.

    The staged file is removed whether the upload succeeded or not.
    """
    try:
        public_id = upload_image(path)
    finally:
        discard_staged(path)
    return optimized_url(public_id)
