"""
Main Input Handler Module.

This module provides the InputHandler class that discovers invoice XML
documents in the input directory.

Usage:
    from einvoice_pdf.input_handler import InputHandler

    handler = InputHandler()
    files = handler.discover("./assets/")

Classes:
    InputHandler: Discovery of invoice source files
"""

from pathlib import Path
from typing import List, Optional, Union

from config import get_config
from einvoice_pdf.utils.logger import get_logger
from einvoice_pdf.utils.helpers import get_file_extension
from einvoice_pdf.utils.exceptions import InputDirectoryNotFoundError, InputError

logger = get_logger(__name__)


class InputHandler:
    """
    Finds invoice documents in a directory.

    Only the top level of the directory is searched; subdirectories are
    never entered.

    Attributes:
        extension: Lowercase suffix of invoice documents.

    Example:
        >>> handler = InputHandler()
        >>> for path in handler.discover("./assets/"):
        ...     print(path.name)
    """

    DEFAULT_EXTENSION = '.xml'

    def __init__(self, extension: Optional[str] = None) -> None:
        """
        Initialize the InputHandler.

        Args:
            extension: Override for input.extension.
        """
        self.extension = (extension or get_config("input.extension", self.DEFAULT_EXTENSION)).lower()
        if not self.extension.startswith('.'):
            self.extension = f".{self.extension}"

        logger.debug(f"InputHandler initialized with extension: {self.extension}")

    def validate_directory(self, directory: Union[str, Path]) -> Path:
        """
        Check the input directory exists.

        Raises:
            InputDirectoryNotFoundError: If the directory is missing.
            InputError: If the path is not a directory.
        """
        path = Path(directory)

        if not path.exists():
            raise InputDirectoryNotFoundError(str(directory))

        if not path.is_dir():
            raise InputError(f"Path is not a directory: {directory}")

        return path

    def discover(self, directory: Union[str, Path]) -> List[Path]:
        """
        List invoice documents in a directory.

        Args:
            directory: Directory containing invoice XML files.

        Returns:
            Sorted list of matching files (suffix compared case-insensitively);
            empty when none match, which the caller reports.

        Raises:
            InputDirectoryNotFoundError: If the directory is missing.
        """
        path = self.validate_directory(directory)

        files = sorted(
            entry for entry in path.iterdir()
            if entry.is_file() and get_file_extension(entry) == self.extension
        )

        if files:
            logger.info(f"Found {len(files)} {self.extension} files in {path}")

        return files
