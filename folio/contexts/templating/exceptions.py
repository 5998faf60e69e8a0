"""Custom exceptions for templating context with template references."""

from pathlib import Path
from typing import List, Optional


class TemplateRenderError(Exception):
    """
    Exception raised when template rendering fails.

    Attributes:
        message: Error description
        template_id: Identifier of the template being rendered
        template_path: Path to the template file
        original_error: The original Jinja2 error
    """

    def __init__(
        self,
        message: str,
        template_id: Optional[str] = None,
        template_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.template_id = template_id
        self.template_path = template_path
        self.original_error = original_error

        parts = [message]

        if template_id and template_path:
            parts.append(f"\nTemplate: {template_path}")
            parts.append(f"Template id: {template_id}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))


class TemplateNotRegisteredError(ValueError):
    """
    Exception raised when a template type is requested that no factory knows.

    Attributes:
        template_type: The requested type
        registered_types: Types the factory does know
    """

    def __init__(self, template_type: str, registered_types: Optional[List[str]] = None):
        self.template_type = template_type
        self.registered_types = registered_types or []

        message = f"Template type '{template_type}' not registered"
        if self.registered_types:
            message += f". Registered types: {', '.join(self.registered_types)}"

        super().__init__(message)


class InvalidResumeDataError(ValueError):
    """
    Exception raised when resume or cover-letter input cannot be loaded.

    Raised for input that is not a mapping, or whose list sections hold
    something other than entries.
    """

    pass


class UnsupportedExportFormatError(ValueError):
    """
    Exception raised when an export format is unknown or a template cannot produce it.

    Attributes:
        format: The requested format
        template_id: Template asked to export, if any
    """

    def __init__(self, fmt: str, template_id: Optional[str] = None):
        self.format = fmt
        self.template_id = template_id

        if template_id:
            message = f"{fmt.upper()} export not implemented for template '{template_id}'"
        else:
            message = f"Unsupported export format: {fmt}"

        super().__init__(message)
