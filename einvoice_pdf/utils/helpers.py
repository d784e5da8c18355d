"""
Helper Utilities Module.

This module provides common utility functions used throughout the
renderer. Functions here should be generic and reusable across
different modules.

Functions:
    - ensure_directory: Create directory if it doesn't exist
    - get_file_extension: Extract file extension safely
    - validate_file_exists: Check a regular file exists
    - remove_if_exists: Delete a stale file
    - format_file_size: Human-readable sizes for log lines
"""

from pathlib import Path
from typing import Union


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    This function creates the directory and all parent directories
    if they don't already exist. It's safe to call even if the
    directory already exists.

    Args:
        path: Directory path to ensure exists.

    Returns:
        Path object pointing to the directory.

    Raises:
        PermissionError: If directory cannot be created due to permissions.

    Example:
        >>> ensure_directory("output")
        PosixPath('output')
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def get_file_extension(filepath: Union[str, Path]) -> str:
    """
    Extract the file extension from a filepath.

    Returns the extension in lowercase, including the dot.
    Returns empty string if no extension exists.

    Args:
        filepath: Path to the file.

    Returns:
        Lowercase file extension including dot (e.g., ".xml").

    Example:
        >>> get_file_extension("invoice.XML")
        ".xml"
        >>> get_file_extension("noextension")
        ""
    """
    return Path(filepath).suffix.lower()


def validate_file_exists(filepath: Union[str, Path]) -> bool:
    """
    Check if a file exists and is a regular file.

    Args:
        filepath: Path to check.

    Returns:
        True if file exists and is a regular file.
    """
    path = Path(filepath)
    return path.exists() and path.is_file()


def remove_if_exists(filepath: Union[str, Path]) -> bool:
    """
    Delete a file if it is present.

    Args:
        filepath: Path to delete.

    Returns:
        True if a file was removed.
    """
    path = Path(filepath)
    if path.is_file():
        path.unlink()
        return True
    return False


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: File size in bytes.

    Returns:
        Human-readable file size string.

    Example:
        >>> format_file_size(1536)
        "1.5 KB"
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size_bytes < 1024.0:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.1f} PB"
