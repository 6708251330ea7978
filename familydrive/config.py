"""Configuration settings for the FamilyDrive server."""

import os


DATABASE_PATH = os.environ.get("FAMILYDRIVE_DATABASE_PATH", "data/familydrive.db")

UPLOADS_PATH = os.environ.get("FAMILYDRIVE_UPLOADS_PATH", "uploads")

SERVER_HOST = os.environ.get("FAMILYDRIVE_HOST", "0.0.0.0")

SERVER_PORT = int(os.environ.get("FAMILYDRIVE_PORT", "8000"))

ENVIRONMENT = os.environ.get("FAMILYDRIVE_ENVIRONMENT", "Production")

SEED_TEST_DATA = os.environ.get("FAMILYDRIVE_SEED_TEST_DATA", "true").lower() in ("1", "true", "yes")

APPLICATION_NAME = "FamilyDrive"

APPLICATION_VERSION = "1.0.0"

API_PREFIX = "/api/v1"

USER_ID_HEADER = "X-User-ID"

DEFAULT_CONTENT_TYPE = "application/octet-stream"

MAX_UPLOAD_BYTES = int(os.environ.get("FAMILYDRIVE_MAX_UPLOAD_BYTES", str(100 * 1024 * 1024)))
