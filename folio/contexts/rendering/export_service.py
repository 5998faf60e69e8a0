"""
Export Service

Single entry point for turning a document plus a template into an output format.
Each format maps to a handler; the built-in handlers delegate to the template's
export_to_* methods and custom handlers can be registered at runtime.

Examples:
    >>> service = get_export_service()
    >>> html = service.export_resume("minimalist-ats", resume, "html")
    >>> result = service.export_to_file("professional", resume, "pdf", Path("outputs"))
"""

import os
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from dotenv import load_dotenv

from folio.contexts.rendering.exceptions import ExportError
from folio.contexts.rendering.logger import (
    _log_error,
    _log_info,
    log_export_result,
    log_export_start,
)
from folio.contexts.templating.base_template import BaseTemplate
from folio.contexts.templating.exceptions import (
    InvalidResumeDataError,
    UnsupportedExportFormatError,
)
from folio.contexts.templating.template_factory import resolve_template
from folio.utils.pdf_processing import page_count

load_dotenv()
RESULTS_PATH = Path(os.getenv("RESULTS_PATH", "outputs"))

ExportOutput = Union[str, bytes]
ExportHandler = Callable[[BaseTemplate, Any], ExportOutput]


class ExportFormat(Enum):
    """Built-in export formats."""

    PDF = "pdf"
    LATEX = "latex"
    HTML = "html"
    DOCX = "docx"


# Export format -> output file extension
EXPORT_EXTENSIONS = {"pdf": "pdf", "latex": "tex", "html": "html", "docx": "docx"}


@dataclass
class ExportResult:
    """
    Result of exporting a document to a file.

    Attributes:
        path: Written file
        format: Export format used
        size: File size in bytes
        page_count: Number of pages (PDF only)
    """

    path: Path
    format: str
    size: int
    page_count: Optional[int] = None


def _format_value(fmt: Union[str, ExportFormat]) -> str:
    return fmt.value if isinstance(fmt, ExportFormat) else str(fmt).lower()


class ExportService:
    """
    Dispatches exports to per-format handlers.

    Args:
        pdf_engine: "reportlab" or "latex"; None defers to the PDF_ENGINE env var
    """

    def __init__(self, pdf_engine: Optional[str] = None):
        self.pdf_engine = pdf_engine
        self._handlers: Dict[str, ExportHandler] = {
            "pdf": lambda template, data: template.export_to_pdf(data, engine=self.pdf_engine),
            "latex": lambda template, data: template.export_to_latex(data),
            "html": lambda template, data: template.export_to_html(data),
            "docx": lambda template, data: template.export_to_docx(data),
        }

    def _resolve(self, template: Union[str, BaseTemplate], kind: str) -> BaseTemplate:
        if isinstance(template, BaseTemplate):
            return template
        return resolve_template(template, kind=kind)

    def _export(self, template: BaseTemplate, data: Any, fmt: str, label: str) -> ExportOutput:
        handler = self._handlers.get(fmt)
        if handler is None:
            raise UnsupportedExportFormatError(fmt)

        try:
            document = template.coerce(data)
        except InvalidResumeDataError as e:
            _log_error(f"Export failed: {e}")
            raise ExportError(f"Failed to export {label}: {e}", fmt=fmt, original_error=e) from e

        log_export_start(template.id, fmt, document.full_name)
        start_time = time.time()

        validation = template.validate(document)
        if not validation.is_valid:
            errors = ", ".join(validation.errors)
            message = f"Failed to export {label}: Invalid {label} data: {errors}"
            _log_error(message)
            raise ExportError(message, fmt=fmt)

        try:
            output = handler(template, document)
        except Exception as e:
            _log_error(f"Export failed: {e}")
            raise ExportError(f"Failed to export {label}: {e}", fmt=fmt, original_error=e) from e

        log_export_result(template.id, fmt, len(output), time.time() - start_time)
        return output

    def export_resume(
        self, template: Union[str, BaseTemplate], data: Any, fmt: Union[str, ExportFormat]
    ) -> ExportOutput:
        """
        Export a resume with a template.

        Args:
            template: Template instance or resume template id
            data: ResumeData or mapping
            fmt: Export format ("pdf", "latex", "html", "docx" or a registered custom one)

        Returns:
            str for latex/html, bytes for pdf/docx

        Raises:
            UnsupportedExportFormatError: No handler for fmt
            ExportError: Data failed validation or the handler failed
            TemplateNotRegisteredError: Unknown template id
        """
        return self._export(self._resolve(template, "resume"), data, _format_value(fmt), "resume")

    def export_cover_letter(
        self, template: Union[str, BaseTemplate], data: Any, fmt: Union[str, ExportFormat]
    ) -> ExportOutput:
        """Export a cover letter with a template. Same contract as export_resume."""
        template = self._resolve(template, "cover_letter")
        return self._export(template, data, _format_value(fmt), "cover letter")

    def export_to_file(
        self,
        template: Union[str, BaseTemplate],
        data: Any,
        fmt: Union[str, ExportFormat],
        output_dir: Optional[Path] = None,
        kind: str = "resume",
    ) -> ExportResult:
        """
        Export a document and write it as <Full_Name>.<ext>.

        Args:
            template: Template instance or template id
            data: Document data or mapping
            fmt: Export format
            output_dir: Target directory, created if missing (default: RESULTS_PATH)
            kind: Document kind used to resolve a template id

        Returns:
            ExportResult describing the written file
        """
        template = self._resolve(template, kind)
        fmt = _format_value(fmt)
        document = template.coerce(data)

        if template.kind == "cover_letter":
            output = self.export_cover_letter(template, document, fmt)
        else:
            output = self.export_resume(template, document, fmt)

        output_dir = Path(output_dir or RESULTS_PATH)
        output_dir.mkdir(parents=True, exist_ok=True)
        path = output_dir / f"{template.output_stem(document)}.{EXPORT_EXTENSIONS.get(fmt, fmt)}"

        if isinstance(output, bytes):
            path.write_bytes(output)
        else:
            path.write_text(output, encoding="utf-8")

        result = ExportResult(
            path=path,
            format=fmt,
            size=path.stat().st_size,
            page_count=page_count(path) if fmt == "pdf" else None,
        )
        _log_info(f"Wrote {path}")
        return result

    def is_format_supported(self, fmt: Union[str, ExportFormat]) -> bool:
        return _format_value(fmt) in self._handlers

    def get_supported_formats(self) -> List[str]:
        return list(self._handlers)

    def register_export_handler(self, fmt: str, handler: ExportHandler) -> None:
        """
        Register a handler for a new format.

        Raises:
            ValueError: If the format already has a handler
        """
        fmt = _format_value(fmt)
        if fmt in self._handlers:
            raise ValueError(f"Export handler for format {fmt} is already registered")
        self._handlers[fmt] = handler

    def remove_export_handler(self, fmt: Union[str, ExportFormat]) -> bool:
        """Remove a format's handler. Returns False if none was registered."""
        return self._handlers.pop(_format_value(fmt), None) is not None


_default_service: ExportService = None


def get_export_service() -> ExportService:
    """Process-wide export service."""
    global _default_service
    if _default_service is None:
        _default_service = ExportService()
    return _default_service
