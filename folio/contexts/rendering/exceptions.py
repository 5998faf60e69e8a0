"""Custom exceptions for rendering context."""

from typing import List, Optional


class ExportError(RuntimeError):
    """
    Exception raised when a document cannot be exported.

    Attributes:
        message: Error description
        fmt: Export format that failed
        original_error: Underlying exception, if any
    """

    def __init__(
        self,
        message: str,
        fmt: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.fmt = fmt
        self.original_error = original_error
        super().__init__(message)


class LaTeXCompilationError(ExportError):
    """
    Exception raised when generated LaTeX fails to compile to PDF.

    Attributes:
        errors: Parsed LaTeX errors from the compiler log
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.errors = errors or []

        parts = [message]
        for error in self.errors[:5]:
            parts.append(f"  - {error}")
        if len(self.errors) > 5:
            parts.append(f"  ... and {len(self.errors) - 5} more")

        super().__init__("\n".join(parts), fmt="pdf")
