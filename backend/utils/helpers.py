"""
Utility helpers for the PERMA Profiler

Simple utility functions for ID, date and filename generation.
"""

import uuid
from datetime import datetime

DATE_PLACEHOLDER = "{{date}}"


def generate_session_id(short=True):
    """
    Generate unique test session identifier

    Args:
        short (bool): If True, return 8-char hex. If False, return full UUID.

    Returns:
        str: Session ID

    Examples:
        >>> generate_session_id()
        'a3f7e2b9'
    """
    full_id = uuid.uuid4().hex
    return full_id[:8] if short else full_id


def format_timestamp(moment: datetime) -> str:
    """
    Date and time as substituted for {{date}} in the result template

    Examples:
        >>> format_timestamp(datetime(2024, 12, 8, 10, 15, 3))
        '2024-12-08 10:15:03'
    """
    return moment.strftime("%Y-%m-%d %H:%M:%S")


def format_file_date(moment: datetime) -> str:
    """
    Date as substituted for {{date}} in the file naming convention

    Examples:
        >>> format_file_date(datetime(2024, 12, 8, 10, 15, 3))
        '2024-12-08'
    """
    return moment.strftime("%Y-%m-%d")


def build_result_filename(convention: str, moment: datetime, extension="md"):
    """
    Build result filename from the naming convention

    Replaces {{date}} with the file date and appends the extension when
    the convention has none. Path separators are not allowed in the name.

    Args:
        convention (str): e.g. 'PERMA-Results-{{date}}'
        moment (datetime): Date to substitute
        extension (str): Extension added when missing (without dot)

    Returns:
        str: Filename

    Raises:
        ValueError: If the result is empty or contains a path separator

    Examples:
        >>> build_result_filename('PERMA-Results-{{date}}', datetime(2024, 12, 8))
        'PERMA-Results-2024-12-08.md'
    """
    name = convention.replace(DATE_PLACEHOLDER, format_file_date(moment)).strip()

    if not name:
        raise ValueError("File naming convention produced an empty filename")
    if "/" in name or "\\" in name:
        raise ValueError(f"File naming convention must not contain path separators: {convention!r}")

    if not name.lower().endswith(f".{extension}"):
        name = f"{name}.{extension}"
    return name
