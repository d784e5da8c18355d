"""
Custom Exceptions Module.

This module defines all custom exceptions used throughout the e-invoice
PDF renderer. Startup failures (input directory, resources) abort the
batch; everything else is reported per file.

Exception Hierarchy:
    EInvoiceError (base)
    ├── InputError
    │   └── InputDirectoryNotFoundError
    ├── ParseError
    ├── ResourceError
    │   └── ResourceLoadError
    ├── RenderError
    └── OutputError
        └── PdfWriteError
"""


class EInvoiceError(Exception):
    """
    Base exception for all renderer errors.

    All custom exceptions in this system inherit from this class,
    allowing for easy catching of all system-specific errors.

    Attributes:
        message: Human-readable error message.
        details: Optional dictionary with additional error details.
    """

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# INPUT ERRORS
# =============================================================================

class InputError(EInvoiceError):
    """Base exception for input discovery errors."""
    pass


class InputDirectoryNotFoundError(InputError):
    """Raised when the input directory does not exist."""

    def __init__(self, directory: str):
        message = f"Input directory not found: {directory}"
        details = {"directory": directory}
        super().__init__(message, details)


# =============================================================================
# PARSE ERRORS
# =============================================================================

class ParseError(EInvoiceError):
    """
    Raised when an XML document does not match the invoice schema.

    Example:
        >>> raise ParseError("Missing required element", element="EInvoiceData/BuyerInformation")
    """

    def __init__(self, reason: str, element: str = None, source: str = None):
        message = f"Invalid invoice document: {reason}"
        details = {}
        if element:
            details["element"] = element
        if source:
            details["source"] = source
        super().__init__(message, details)


# =============================================================================
# RESOURCE ERRORS
# =============================================================================

class ResourceError(EInvoiceError):
    """Base exception for font and image resource errors."""
    pass


class ResourceLoadError(ResourceError):
    """Raised when a font or image asset is missing or unreadable."""

    def __init__(self, resource: str, reason: str = None):
        message = f"Failed to load resource: {resource}"
        details = {"resource": resource, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# RENDER ERRORS
# =============================================================================

class RenderError(EInvoiceError):
    """Raised when the PDF layout cannot be produced."""

    def __init__(self, invoice_number: str, reason: str = None):
        message = f"Failed to render invoice: {invoice_number}"
        details = {"invoice_number": invoice_number, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# OUTPUT ERRORS
# =============================================================================

class OutputError(EInvoiceError):
    """Base exception for output handling errors."""
    pass


class PdfWriteError(OutputError):
    """Raised when a PDF file cannot be written."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Failed to write PDF file: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


__all__ = [
    'EInvoiceError',
    'InputError',
    'InputDirectoryNotFoundError',
    'ParseError',
    'ResourceError',
    'ResourceLoadError',
    'RenderError',
    'OutputError',
    'PdfWriteError',
]
