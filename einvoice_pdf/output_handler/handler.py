"""
Main Output Handler Module.

This module provides the OutputHandler class that places rendered PDFs
in the output directory, one per source document, sharing its base name.

Author: E-Invoice Tooling Team
"""

from pathlib import Path
from typing import Optional, Union

from config import get_config
from einvoice_pdf.utils.logger import get_logger
from einvoice_pdf.utils.helpers import ensure_directory, format_file_size, remove_if_exists
from einvoice_pdf.utils.exceptions import PdfWriteError

logger = get_logger(__name__)


class OutputHandler:
    """
    Writes PDF documents to the output directory.

    Attributes:
        output_dir: Directory receiving the PDFs.

    Example:
        >>> handler = OutputHandler("./output/")
        >>> target = handler.output_path_for(Path("assets/a.xml"))
        >>> handler.discard_stale(target)
        >>> handler.write(pdf_bytes, target)
    """

    PDF_EXTENSION = '.pdf'

    def __init__(self, output_dir: Optional[Union[str, Path]] = None) -> None:
        """
        Initialize the output handler and create the output directory.

        Args:
            output_dir: Override for paths.output_dir.
        """
        self.output_dir = ensure_directory(
            output_dir or get_config("paths.output_dir", "output")
        )
        logger.debug(f"OutputHandler initialized (output_dir: {self.output_dir})")

    def output_path_for(self, source: Union[str, Path]) -> Path:
        """Output path sharing the source file's base name."""
        return self.output_dir / f"{Path(source).stem}{self.PDF_EXTENSION}"

    def discard_stale(self, target: Path) -> None:
        """
        Delete a PDF left over from an earlier run.

        Called before the source is processed so that a file which fails
        this time does not leave an outdated PDF behind.
        """
        try:
            if remove_if_exists(target):
                logger.debug(f"Removed stale output: {target.name}")
        except OSError as e:
            raise PdfWriteError(str(target), str(e))

    def write(self, pdf_bytes: bytes, target: Path) -> Path:
        """
        Write PDF bytes to target.

        Args:
            pdf_bytes: Rendered document.
            target: Destination path.

        Returns:
            The written path.

        Raises:
            PdfWriteError: If the file cannot be written.
        """
        try:
            target.write_bytes(pdf_bytes)
        except OSError as e:
            raise PdfWriteError(str(target), str(e))

        logger.debug(f"Wrote {target.name} ({format_file_size(len(pdf_bytes))})")
        return target
