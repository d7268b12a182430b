"""Unit tests for the local upload store."""

from __future__ import annotations

import io

import pytest
from fastapi import UploadFile

from fleetdesk.core.errors import StorageError
from fleetdesk.server.core.config import StorageConfig
from fleetdesk.storage import LocalFileStorage


@pytest.fixture
def storage(tmp_path) -> LocalFileStorage:
    return LocalFileStorage(StorageConfig(root=str(tmp_path), public_base_url="/files", max_upload_bytes=16))


class TestSaveBytes:
    def test_stores_file_under_folder(self, storage, tmp_path):
        url = storage.save_bytes("vehicle-images", "front.JPG", b"jpeg-data")

        assert url.startswith("/files/vehicle-images/")
        assert url.endswith(".jpg")
        path = storage.path_for_url(url)
        assert path.parent == tmp_path / "vehicle-images"
        assert path.read_bytes() == b"jpeg-data"

    @pytest.mark.parametrize("filename", [None, "noext", "weird.e/xt"])
    def test_unknown_extension_falls_back_to_bin(self, storage, filename):
        assert storage.save_bytes("docs", filename, b"x").endswith(".bin")

    def test_each_upload_gets_a_new_name(self, storage):
        assert storage.save_bytes("docs", "a.pdf", b"1") != storage.save_bytes("docs", "a.pdf", b"1")

    @pytest.mark.parametrize("folder", ["../etc", "a/b", ""])
    def test_invalid_folder(self, storage, folder):
        with pytest.raises(StorageError, match="Invalid storage folder"):
            storage.save_bytes(folder, "a.png", b"x")

    def test_empty_content(self, storage):
        with pytest.raises(StorageError, match="empty"):
            storage.save_bytes("docs", "a.png", b"")

    def test_oversized_content(self, storage):
        with pytest.raises(StorageError, match="exceeds 16 bytes"):
            storage.save_bytes("docs", "a.png", b"x" * 17)


class TestSaveUpload:
    async def test_stores_upload(self, storage):
        url = await storage.save_upload("docs", UploadFile(io.BytesIO(b"x" * 16), filename="permit.pdf"))

        assert storage.path_for_url(url).read_bytes() == b"x" * 16

    async def test_oversized_upload_is_rejected_early(self, storage, tmp_path):
        body = io.BytesIO(b"x" * 4096)

        with pytest.raises(StorageError, match="exceeds 16 bytes"):
            await storage.save_upload("docs", UploadFile(body, filename="huge.pdf"))

        assert body.tell() == 17
        assert not (tmp_path / "docs").exists()

    async def test_empty_upload(self, storage):
        with pytest.raises(StorageError, match="empty"):
            await storage.save_upload("docs", UploadFile(io.BytesIO(b""), filename="a.png"))


class TestUrls:
    def test_foreign_urls_do_not_map(self, storage):
        assert storage.path_for_url("https://cdn.example/x.png") is None
        assert storage.path_for_url("/files/only-folder") is None
        assert storage.path_for_url("/files/../secret") is None
        assert storage.path_for_url("") is None

    def test_delete_by_url(self, storage):
        url = storage.save_bytes("docs", "a.pdf", b"pdf")

        assert storage.delete_by_url(url) is True
        assert not storage.path_for_url(url).exists()
        assert storage.delete_by_url(url) is False
        assert storage.delete_by_url(None) is False
