"""Tests for local blob storage."""

from pathlib import Path

import pytest

from familydrive.exceptions import BlobNotFoundError
from familydrive.storage import LocalBlobStorage
from familydrive.utils import safe_file_name


class TestLocalBlobStorage:
    def test_save_and_read(self, blob_storage):
        path = blob_storage.save("abc", "photo.jpg", b"jpeg bytes")

        assert Path(path).name == "abc_photo.jpg"
        assert Path(path).parent == blob_storage.root
        assert blob_storage.read(path) == b"jpeg bytes"

    def test_save_creates_directory(self, tmp_path):
        storage = LocalBlobStorage(tmp_path / "nested" / "blobs")

        path = storage.save("abc", "a.txt", b"a")

        assert storage.exists(path)

    def test_name_cannot_escape_root(self, blob_storage):
        path = blob_storage.save("abc", "../../etc/passwd", b"x")

        assert Path(path).parent == blob_storage.root
        assert Path(path).name == "abc_passwd"

    def test_read_missing_blob(self, blob_storage):
        with pytest.raises(BlobNotFoundError):
            blob_storage.read(str(blob_storage.root / "gone"))

    def test_delete(self, blob_storage):
        path = blob_storage.save("abc", "a.txt", b"a")

        assert blob_storage.delete(path) is True
        assert not blob_storage.exists(path)
        assert blob_storage.delete(path) is False

    def test_default_root_follows_config(self, uploads_dir):
        assert LocalBlobStorage().root == uploads_dir.resolve()


class TestSafeFileName:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("report.pdf", "report.pdf"),
            ("dir/sub/report.pdf", "report.pdf"),
            ("..\\evil.txt", "evil.txt"),
            ("my file (1).txt", "my_file_1_.txt"),
            ("", "file"),
            ("..", "file"),
        ],
    )
    def test_sanitizes(self, name, expected):
        assert safe_file_name(name) == expected
