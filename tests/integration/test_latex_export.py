"""Integration tests for LaTeX export and compilation."""

import pytest

from folio.contexts.rendering.compiler import compile_latex, latex_compiler_available
from folio.contexts.templating.implementations import (
    COVER_LETTER_TEMPLATES,
    RESUME_TEMPLATES,
    ProfessionalTemplate,
)
from folio.utils.pdf_processing import extract_lines

requires_latex = pytest.mark.skipif(
    not latex_compiler_available(), reason="LaTeX compiler not installed"
)


@pytest.mark.integration
@pytest.mark.parametrize("template_cls", [*RESUME_TEMPLATES, *COVER_LETTER_TEMPLATES])
def test_latex_source(template_cls, sample_resume, sample_cover_letter):
    """Test that every template produces a complete LaTeX document."""
    template = template_cls()
    data = sample_resume if template.kind == "resume" else sample_cover_letter
    latex = template.export_to_latex(data)

    assert latex.startswith("\\documentclass")
    assert latex.rstrip().endswith("\\end{document}")
    assert "\\definecolor{primary}" in latex
    assert "Jane Doe" in latex
    assert "\n\n\n" not in latex


@pytest.mark.integration
def test_latex_escaping(sample_resume):
    """Test that user content is escaped for LaTeX."""
    sample_resume.summary = "Led R&D on 100% of #data_pipelines for $ savings"
    latex = ProfessionalTemplate().export_to_latex(sample_resume)

    assert "Led R\\&D on 100\\% of \\#data\\_pipelines for \\$ savings" in latex


@pytest.mark.integration
def test_latex_customization(sample_resume):
    """Test that colors are written as xcolor HTML values."""
    template = ProfessionalTemplate()
    template.update_customization({"colors": {"primary": "#1A2B3C"}})

    assert "\\definecolor{primary}{HTML}{1A2B3C}" in template.export_to_latex(sample_resume)


@pytest.mark.integration
@pytest.mark.latex
@requires_latex
def test_compile_resume(tmp_path, sample_resume):
    """Test compiling exported LaTeX to PDF."""
    tex_file = tmp_path / "Jane_Doe.tex"
    tex_file.write_text(ProfessionalTemplate().export_to_latex(sample_resume), encoding="utf-8")

    result = compile_latex(tex_file)

    assert result.success, result.errors
    assert result.pdf_path.exists()
    assert result.page_count >= 1
    assert not (tmp_path / "Jane_Doe.aux").exists()


@pytest.mark.integration
@pytest.mark.latex
@requires_latex
@pytest.mark.parametrize("template_cls", [*RESUME_TEMPLATES, *COVER_LETTER_TEMPLATES])
def test_latex_engine_pdf(template_cls, sample_resume, sample_cover_letter):
    """Test the LaTeX PDF engine end to end for every template."""
    template = template_cls()
    data = sample_resume if template.kind == "resume" else sample_cover_letter

    pdf = template.export_to_pdf(data, engine="latex")

    assert pdf.startswith(b"%PDF")
    assert any("Jane Doe" in line for line in extract_lines(pdf))
