"""Shared pytest fixtures for all tests."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from familydrive.database import init_database
from familydrive.repositories.memory import InMemoryFileRepository, InMemoryUserRepository
from familydrive.seed import build_test_users
from familydrive.services.file_service import FileService
from familydrive.services.user_service import UserService
from familydrive.storage import LocalBlobStorage


@pytest.fixture
def test_db(tmp_path, monkeypatch) -> Path:
    """
    Create a temporary SQLite database for each test.

    Args:
        tmp_path: pytest tmp_path fixture
        monkeypatch: pytest monkeypatch fixture

    Returns:
        Path to the database file
    """
    db_path = tmp_path / "data" / "test.db"
    monkeypatch.setattr("familydrive.database.DATABASE_PATH", str(db_path))
    monkeypatch.setattr("familydrive.config.DATABASE_PATH", str(db_path))
    init_database()
    return db_path


@pytest.fixture
def uploads_dir(tmp_path, monkeypatch) -> Path:
    """
    Point blob storage at a temporary uploads directory.
    """
    path = tmp_path / "uploads"
    monkeypatch.setattr("familydrive.config.UPLOADS_PATH", str(path))
    return path


@pytest.fixture
def user_repo():
    """
    In-memory user store seeded with admin-001, parent-001/002 and kid-001/002/003.
    """
    return InMemoryUserRepository(build_test_users())


@pytest.fixture
def file_repo():
    return InMemoryFileRepository()


@pytest.fixture
def blob_storage(tmp_path):
    return LocalBlobStorage(tmp_path / "blobs")


@pytest.fixture
def user_service(user_repo):
    return UserService(user_repo=user_repo)


@pytest.fixture
def file_service(user_repo, file_repo, blob_storage):
    return FileService(user_repo=user_repo, file_repo=file_repo, blob_storage=blob_storage)


@pytest.fixture
def client(test_db, uploads_dir, monkeypatch):
    """
    FastAPI test client running against a fresh seeded database.
    """
    monkeypatch.setattr("familydrive.config.SEED_TEST_DATA", True)

    from familydrive.main import app

    with TestClient(app) as test_client:
        yield test_client
