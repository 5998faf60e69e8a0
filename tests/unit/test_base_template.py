"""Unit tests for BaseTemplate behavior shared by resume and cover-letter templates."""

import pytest

from folio.contexts.templating.base_template import ResumeTemplate, TemplateMetadata
from folio.contexts.templating.exceptions import TemplateRenderError, UnsupportedExportFormatError
from folio.contexts.templating.implementations import (
    ElegantDividerTemplate,
    ModernCoverLetter,
    ProfessionalTemplate,
    StandardCoverLetter,
)
from folio.contexts.templating.registries import TemplateRegistry
from folio.contexts.templating.resume_data_structure import CoverLetterData, ResumeData


class StubTemplate(ResumeTemplate):
    metadata = TemplateMetadata(id="stub", name="Stub", description="Test template")


@pytest.fixture
def stub_registry(tmp_path):
    template_dir = tmp_path / "resume" / "stub"
    template_dir.mkdir(parents=True)
    (template_dir / "template.html.jinja").write_text("<h1>{{ resume.full_name }}</h1>")
    return TemplateRegistry(types_base_path=tmp_path)


@pytest.mark.unit
def test_metadata_properties():
    """Test that template properties come from metadata."""
    template = ProfessionalTemplate()

    assert template.id == "professional"
    assert template.name == "Professional"
    assert template.version == "1.0.0"
    assert template.thumbnail == "/templates/professional.png"
    assert template.template_key == "resume/professional"
    assert StandardCoverLetter().template_key == "cover_letter/standard"


@pytest.mark.unit
def test_default_customization_from_style():
    """Test that each template starts from its style plus class overrides."""
    elegant = ElegantDividerTemplate()

    assert elegant.customization.colors.primary == "#292524"
    assert elegant.customization.layout.sidebar == "none"
    assert ModernCoverLetter().customization.fonts.body == "Inter, sans-serif"


@pytest.mark.unit
def test_update_and_reset_customization():
    """Test customization overrides and reset."""
    template = ProfessionalTemplate()
    original = template.customization

    updated = template.update_customization({"colors": {"primary": "#000000"}})
    assert updated.colors.primary == "#000000"
    assert template.default_customization == original
    assert template.customization.fonts == original.fonts

    template.reset_customization()
    assert template.customization == original


@pytest.mark.unit
def test_instances_do_not_share_customization():
    """Test that customizing one instance leaves others untouched."""
    first = ProfessionalTemplate()
    second = ProfessionalTemplate()

    first.update_customization({"colors": {"accent": "#ff0000"}})

    assert second.customization.colors.accent != "#ff0000"


@pytest.mark.unit
def test_resume_validation_required_fields():
    """Test that name and email block export and other gaps are recommendations."""
    result = ProfessionalTemplate().validate(ResumeData())

    assert result.is_valid is False
    assert result.errors == ["Full name is required", "Email is required"]
    assert len(result.issues) == 7
    assert result.score == 30


@pytest.mark.unit
def test_resume_validation_complete(sample_resume):
    """Test that a complete resume validates cleanly."""
    result = ProfessionalTemplate().validate(sample_resume)

    assert result.is_valid is True
    assert result.issues == []
    assert result.score == 100


@pytest.mark.unit
def test_cover_letter_validation():
    """Test cover-letter required and recommended fields."""
    result = StandardCoverLetter().validate(
        CoverLetterData(full_name="Jane Doe", email="jane@example.com")
    )

    assert result.errors == ["Letter content is required"]
    assert "Company name is recommended" in result.issues
    assert result.score == 60


@pytest.mark.unit
def test_check_ats_compatibility(sample_resume):
    """Test section completeness scores for a full resume."""
    report = ProfessionalTemplate().check_ats_compatibility(sample_resume)

    assert report.sections == {"experience": 100.0, "education": 100.0, "skills": 79.0}
    assert report.overall == pytest.approx(93.0)
    assert report.format_issues == []


@pytest.mark.unit
def test_check_ats_compatibility_sparse_resume():
    """Test issues and scores for a sparse resume."""
    resume = ResumeData(
        full_name="Jane Doe",
        skills=["Python", "SQL", "Docker"],
    )
    report = ProfessionalTemplate().check_ats_compatibility(resume)

    assert report.sections == {"skills": pytest.approx(42.0)}
    assert "Missing essential contact information" in report.format_issues
    assert "Add a professional summary to improve ATS score" in report.suggestions


@pytest.mark.unit
def test_get_ats_compatibility_score():
    """Test 100 minus 5 per validation issue."""
    template = ProfessionalTemplate()

    assert template.get_ats_compatibility_score(ResumeData()) == 65


@pytest.mark.unit
def test_missing_format_is_unsupported(stub_registry, sample_resume):
    """Test that a template without a LaTeX source cannot export LaTeX."""
    template = StubTemplate(registry=stub_registry)

    assert template.export_to_html(sample_resume) == "<h1>Jane Doe</h1>"
    with pytest.raises(UnsupportedExportFormatError, match="LATEX export not implemented"):
        template.export_to_latex(sample_resume)


@pytest.mark.unit
def test_render_error_wraps_jinja_error(tmp_path, sample_resume):
    """Test that Jinja2 errors surface as TemplateRenderError with the template path."""
    template_dir = tmp_path / "resume" / "stub"
    template_dir.mkdir(parents=True)
    (template_dir / "template.html.jinja").write_text("{{ no_such_variable }}")
    template = StubTemplate(registry=TemplateRegistry(types_base_path=tmp_path))

    with pytest.raises(TemplateRenderError) as exc_info:
        template.export_to_html(sample_resume)

    assert exc_info.value.template_id == "stub"
    assert exc_info.value.template_path.name == "template.html.jinja"


@pytest.mark.unit
def test_unknown_pdf_engine(sample_resume):
    """Test that the PDF engine must be reportlab or latex."""
    with pytest.raises(ValueError, match="Unknown PDF engine"):
        ProfessionalTemplate().export_to_pdf(sample_resume, engine="wkhtmltopdf")


@pytest.mark.unit
def test_output_stem():
    """Test export filename stems."""
    assert ProfessionalTemplate().output_stem(ResumeData(full_name="Jane Q. Doe")) == "Jane_Q_Doe"
    assert StandardCoverLetter().output_stem(CoverLetterData()) == "cover_letter"


@pytest.mark.unit
def test_accepts_mappings():
    """Test that exports accept camelCase mappings as well as dataclasses."""
    html = ProfessionalTemplate().export_to_html(
        {"fullName": "Jane Doe", "email": "jane@example.com"}
    )

    assert "Jane Doe" in html
