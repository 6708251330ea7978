"""Utility helper functions for FamilyDrive."""

import re
import uuid
from datetime import datetime, timezone


_UNSAFE_NAME_CHARS = re.compile(r'[^A-Za-z0-9._-]+')


def generate_uuid() -> str:
    """
    Generate a new UUID4 string.

    Returns:
        UUID4 string
    """
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """
    Get the current time as a timezone-aware UTC datetime.

    Returns:
        Current UTC timestamp
    """
    return datetime.now(timezone.utc)


def safe_file_name(file_name: str) -> str:
    """
    Reduce a client supplied file name to something safe to use on disk.

    Args:
        file_name: Original file name (may contain path separators)

    Returns:
        File name with directories stripped and unusual characters replaced
    """
    base = file_name.replace('\\', '/').rsplit('/', 1)[-1]
    cleaned = _UNSAFE_NAME_CHARS.sub('_', base).strip('._')
    return cleaned or 'file'
