from __future__ import annotations

import io
import logging
import os

import pytest
from fastapi import UploadFile

from services import images


@pytest.fixture()
def cloudinary_configured(monkeypatch, isolated_settings):
    monkeypatch.setattr(isolated_settings, "cloudinary_cloud_name", "demo")
    monkeypatch.setattr(isolated_settings, "cloudinary_api_key", "key")
    monkeypatch.setattr(isolated_settings, "cloudinary_api_secret", "secret")
    monkeypatch.setattr(images, "_configured", False)
    images._configure()
    return isolated_settings


def test_stage_upload_copies_into_upload_dir(isolated_settings):
    upload = UploadFile(file=io.BytesIO(b"pixels"), filename="me.jpg")
    path = images.stage_upload(upload)
    try:
        assert os.path.dirname(path) == os.path.abspath(isolated_settings.upload_dir)
        assert path.endswith(".jpg")
        with open(path, "rb") as fh:
            assert fh.read() == b"pixels"
    finally:
        os.remove(path)


def test_discard_staged_logs_missing_file(tmp_path, caplog):
    with caplog.at_level(logging.ERROR, logger="services.images"):
        images.discard_staged(str(tmp_path / "gone.png"))
    assert "Error deleting temporary file" in caplog.text


def test_optimized_url_asks_for_auto_format_and_quality(cloudinary_configured):
    url = images.optimized_url("reppup/avatar123")
    assert url.startswith("https://res.cloudinary.com/demo/image/upload/")
    assert "f_auto" in url and "q_auto" in url
    assert url.endswith("reppup/avatar123")


def test_publish_uploads_then_removes_staged_file(cloudinary_configured, monkeypatch, tmp_path):
    staged = tmp_path / "x.png"
    staged.write_bytes(b"x")
    monkeypatch.setattr(images.cloudinary.uploader, "upload", lambda path: {"public_id": "reppup/x"})

    url = images.publish_profile_picture(str(staged))
    assert url.endswith("reppup/x")
    assert not staged.exists()


def test_missing_credentials_fail_before_upload(monkeypatch, isolated_settings, tmp_path):
    monkeypatch.setattr(images, "_configured", False)
    monkeypatch.setattr(isolated_settings, "cloudinary_cloud_name", None)
    staged = tmp_path / "x.png"
    staged.write_bytes(b"x")

    with pytest.raises(ValueError):
        images.publish_profile_picture(str(staged))
    assert not staged.exists()
