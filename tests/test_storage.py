"""
Tests for the local storage provider and the provider factory.
"""
import os

import pytest

from photo_service.services import storage_factory
from photo_service.services.storage_factory import get_storage_service
from photo_service.services.storage_interface import BlobNotFoundError
from photo_service.services.storage_providers.local_service import LocalStorageService


def test_upload_creates_missing_directories(tmp_path):
    storage = LocalStorageService()
    key = str(tmp_path / "nested" / "vault" / "1.jpg")

    info = storage.upload_bytes(b"abc", key, content_type="image/jpeg")

    assert info["size_bytes"] == 3
    assert info["content_type"] == "image/jpeg"
    assert storage.download_file_bytes(key) == b"abc"
    assert storage.file_exists(key)


def test_upload_overwrites_existing_file(tmp_path):
    storage = LocalStorageService()
    key = str(tmp_path / "1.jpg")

    storage.upload_bytes(b"first", key)
    storage.upload_bytes(b"second", key)

    assert storage.download_file_bytes(key) == b"second"


def test_missing_file_raises_blob_not_found(tmp_path):
    storage = LocalStorageService()
    key = str(tmp_path / "missing.jpg")

    with pytest.raises(BlobNotFoundError) as exc_info:
        storage.download_file_bytes(key)

    assert isinstance(exc_info.value, FileNotFoundError)
    assert exc_info.value.filename == key
    assert not storage.file_exists(key)


def test_delete_file(tmp_path):
    storage = LocalStorageService()
    key = str(tmp_path / "2.jpg")
    storage.upload_bytes(b"data", key)

    storage.delete_file(key)

    assert not storage.file_exists(key)
    with pytest.raises(BlobNotFoundError):
        storage.delete_file(key)


def test_list_files(tmp_path):
    storage = LocalStorageService()
    storage.upload_bytes(b"a", str(tmp_path / "1.jpg"))
    storage.upload_bytes(b"bb", str(tmp_path / "2.jpg"))

    files = storage.list_files(str(tmp_path))

    assert sorted(f["file_name"] for f in files) == ["1.jpg", "2.jpg"]
    assert {f["file_name"]: f["size"] for f in files} == {"1.jpg": 1, "2.jpg": 2}
    assert len(storage.list_files(str(tmp_path), max_files=1)) == 1
    assert storage.list_files(str(tmp_path / "absent")) == []


def test_factory_caches_instances(monkeypatch):
    monkeypatch.setattr(storage_factory, "_storage_instances", {})

    first = get_storage_service("local")
    second = get_storage_service("local")

    assert first is second
    assert isinstance(first, LocalStorageService)


def test_factory_falls_back_to_local(monkeypatch, caplog):
    monkeypatch.setattr(storage_factory, "_storage_instances", {})

    with caplog.at_level("WARNING"):
        instance = get_storage_service("ftp")

    assert isinstance(instance, LocalStorageService)
    assert "Unknown storage provider 'ftp'" in caplog.text


def test_list_files_reports_modification_time(tmp_path):
    storage = LocalStorageService()
    key = str(tmp_path / "1.jpg")
    storage.upload_bytes(b"a", key)
    os.utime(key, (1_700_000_000, 1_700_000_000))

    files = storage.list_files(str(tmp_path))

    assert files[0]["upload_timestamp"] == 1_700_000_000_000
