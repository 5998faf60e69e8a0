"""Unit tests for ExportService dispatch and handler registry."""

import pytest

from folio.contexts.rendering.exceptions import ExportError
from folio.contexts.rendering.export_service import (
    ExportFormat,
    ExportService,
    get_export_service,
)
from folio.contexts.templating.exceptions import (
    TemplateNotRegisteredError,
    UnsupportedExportFormatError,
)
from folio.contexts.templating.implementations import ProfessionalTemplate
from folio.contexts.templating.resume_data_structure import ResumeData


@pytest.mark.unit
def test_supported_formats():
    """Test the built-in formats."""
    service = ExportService()

    assert service.get_supported_formats() == ["pdf", "latex", "html", "docx"]
    assert service.is_format_supported(ExportFormat.DOCX)
    assert service.is_format_supported("HTML")
    assert not service.is_format_supported("rtf")


@pytest.mark.unit
def test_register_export_handler(sample_resume):
    """Test exporting through a custom handler."""
    service = ExportService()
    service.register_export_handler("txt", lambda template, data: f"{template.id}:{data.full_name}")

    assert service.export_resume("professional", sample_resume, "txt") == "professional:Jane Doe"


@pytest.mark.unit
def test_register_duplicate_handler():
    """Test that built-in handlers cannot be silently replaced."""
    with pytest.raises(ValueError, match="already registered"):
        ExportService().register_export_handler("pdf", lambda template, data: b"")


@pytest.mark.unit
def test_remove_export_handler(sample_resume):
    """Test removing a handler makes the format unsupported."""
    service = ExportService()

    assert service.remove_export_handler(ExportFormat.LATEX) is True
    assert service.remove_export_handler("latex") is False
    with pytest.raises(UnsupportedExportFormatError, match="Unsupported export format: latex"):
        service.export_resume("professional", sample_resume, "latex")


@pytest.mark.unit
def test_invalid_data_blocks_export():
    """Test that validation errors stop the export."""
    with pytest.raises(ExportError) as exc_info:
        ExportService().export_resume(ProfessionalTemplate(), ResumeData(), "html")

    assert str(exc_info.value) == (
        "Failed to export resume: Invalid resume data: Full name is required, Email is required"
    )
    assert exc_info.value.fmt == "html"


@pytest.mark.unit
def test_handler_failure_wrapped(sample_resume):
    """Test that handler exceptions become ExportError with the cause attached."""
    service = ExportService()

    def failing(template, data):
        raise RuntimeError("disk full")

    service.register_export_handler("broken", failing)

    with pytest.raises(ExportError, match="Failed to export resume: disk full") as exc_info:
        service.export_resume("professional", sample_resume, "broken")

    assert isinstance(exc_info.value.original_error, RuntimeError)


@pytest.mark.unit
def test_unknown_template(sample_resume):
    """Test that unknown template ids are reported."""
    with pytest.raises(TemplateNotRegisteredError):
        ExportService().export_resume("no-such-template", sample_resume, "html")


@pytest.mark.unit
def test_export_cover_letter_by_id(sample_cover_letter):
    """Test that template ids resolve against cover-letter templates."""
    html = ExportService().export_cover_letter("modern", sample_cover_letter, ExportFormat.HTML)

    assert "Globex Analytics" in html
    assert "Best regards," in html


@pytest.mark.unit
def test_unknown_pdf_engine_wrapped(sample_resume):
    """Test that a bad PDF engine surfaces as an export failure."""
    with pytest.raises(ExportError, match="Unknown PDF engine"):
        ExportService(pdf_engine="prince").export_resume("professional", sample_resume, "pdf")


@pytest.mark.unit
def test_get_export_service_singleton():
    """Test the process-wide service."""
    assert get_export_service() is get_export_service()


@pytest.mark.unit
def test_non_mapping_data_wrapped():
    """Test that data that is not resume-shaped surfaces as an export failure."""
    with pytest.raises(ExportError, match="Failed to export resume: Resume data must be a mapping"):
        ExportService().export_resume("professional", ["Jane Doe"], "html")


@pytest.mark.unit
def test_short_hex_colors_export(sample_resume):
    """Test that #rgb colors reach the DOCX and LaTeX writers in full form."""
    template = ProfessionalTemplate()
    template.update_customization({"colors": {"primary": "#fff", "secondary": "#0af"}})
    service = ExportService()

    latex = service.export_resume(template, sample_resume, "latex")
    docx = service.export_resume(template, sample_resume, "docx")

    assert "\\definecolor{primary}{HTML}{FFFFFF}" in latex
    assert "\\definecolor{secondary}{HTML}{00AAFF}" in latex
    assert docx[:2] == b"PK"
