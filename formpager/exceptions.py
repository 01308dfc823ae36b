"""Custom exceptions for formpager."""

from typing import Optional


class FormPagerError(Exception):
    """Base exception for formpager errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class MeasurementError(FormPagerError):
    """Raised when text cannot be measured (unknown font, missing metrics)."""

    pass


class LayoutError(FormPagerError):
    """Raised when layout cannot be computed consistently."""

    pass


class RowFilterError(LayoutError):
    """Raised when a blank-row predicate gives different answers for the same row."""

    pass


class OutputError(FormPagerError):
    """Raised when the finished artifact cannot be produced or written."""

    pass


class DocumentLoadError(FormPagerError):
    """Raised when a document description cannot be turned into a Document."""

    pass
