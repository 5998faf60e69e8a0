"""
Base Template

Abstract document template. A template couples metadata, a customization and a
pair of Jinja2 templates (HTML and LaTeX) with binary writers for DOCX and PDF.

Concrete resume templates subclass ResumeTemplate; cover letters subclass
CoverLetterTemplate. Both are created through the TemplateFactory.
"""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from dotenv import load_dotenv
from jinja2 import TemplateError, TemplateNotFound

from folio.contexts.rendering.compiler import compile_latex_source
from folio.contexts.rendering.docx_writer import write_cover_letter_docx, write_resume_docx
from folio.contexts.rendering.outline import DocumentOutline, build_resume_outline
from folio.contexts.rendering.pdf_writer import font_family, write_cover_letter_pdf, write_resume_pdf
from folio.contexts.templating.customization import TemplateCustomization
from folio.contexts.templating.defaults import (
    DEFAULT_SECTION_ORDER,
    SAMPLE_COVER_LETTER,
    SAMPLE_RESUME,
    SECTION_HEADINGS,
    get_default_customization,
)
from folio.contexts.templating.exceptions import TemplateRenderError, UnsupportedExportFormatError
from folio.contexts.templating.logger import log_render
from folio.contexts.templating.registries import TemplateRegistry, get_template_registry
from folio.contexts.templating.resume_data_structure import (
    CoverLetterData,
    DocumentData,
    ResumeData,
    coerce_document,
)
from folio.utils.text_processing import safe_filename, set_max_consecutive_blank_lines

load_dotenv()
PDF_ENGINE = os.getenv("PDF_ENGINE", "reportlab").lower()
PDF_ENGINES = ("reportlab", "latex")


@dataclass(frozen=True)
class TemplateMetadata:
    """
    Descriptive information about a template.

    Attributes:
        id: Stable identifier used for registration and lookup (e.g., "minimalist-ats")
        name: Display name
        description: One-line description shown in template pickers
        is_ats_optimized: Layout is known to parse cleanly in applicant tracking systems
        version: Template version string
        thumbnail: Preview image path
        category: Grouping (e.g., "professional", "modern")
        tags: Free-form search tags
        is_default: Template preselected for new documents
    """

    id: str
    name: str
    description: str
    is_ats_optimized: bool = False
    version: str = "1.0.0"
    thumbnail: str = ""
    category: str = "professional"
    tags: Sequence[str] = ()
    is_default: bool = False


@dataclass
class ValidationResult:
    """
    Result of validating document data against a template.

    Attributes:
        is_valid: True when no blocking errors were found
        score: 100 minus 10 per issue, floored at 0
        issues: Every problem found, blocking or not
        errors: Subset of issues that block export
    """

    is_valid: bool
    score: int
    issues: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


@dataclass
class TemplateATSReport:
    """
    Structural ATS check of resume data as laid out by a template.

    Attributes:
        overall: Mean of the section scores (0 when no section is present)
        sections: Section name -> completeness score (0-100)
        suggestions: Improvements that would help parsing
        keyword_matches: Job keywords present in the resume
        missing_keywords: Job keywords absent from the resume
        format_issues: Problems that hurt parsing
    """

    overall: float = 0.0
    sections: Dict[str, float] = field(default_factory=dict)
    suggestions: List[str] = field(default_factory=list)
    keyword_matches: List[str] = field(default_factory=list)
    missing_keywords: List[str] = field(default_factory=list)
    format_issues: List[str] = field(default_factory=list)


class BaseTemplate(ABC):
    """
    Abstract base for all document templates.

    Subclasses set `metadata`, `kind` and optionally `style` (the key of their
    default customization in defaults.TEMPLATE_CUSTOMIZATION_OVERRIDES) plus
    `customization_overrides` applied on top of that style.
    """

    metadata: TemplateMetadata
    kind: str = "resume"
    style: Optional[str] = None
    customization_overrides: Mapping[str, Mapping[str, str]] = {}

    def __init__(
        self,
        customization: Optional[TemplateCustomization] = None,
        registry: Optional[TemplateRegistry] = None,
    ):
        if customization is None:
            customization = get_default_customization(self.style).merged(
                self.customization_overrides
            )
        self._default_customization = customization
        self._customization = self._default_customization
        self._registry = registry or get_template_registry()

    # Core template information

    @property
    def id(self) -> str:
        return self.metadata.id

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def description(self) -> str:
        return self.metadata.description

    @property
    def version(self) -> str:
        return self.metadata.version

    @property
    def thumbnail(self) -> str:
        return self.metadata.thumbnail

    @property
    def template_key(self) -> str:
        """Directory of this template's Jinja2 files under the types path."""
        return f"{self.kind}/{self.id}"

    # Styling and customization

    @property
    def customization(self) -> TemplateCustomization:
        return self._customization

    @property
    def default_customization(self) -> TemplateCustomization:
        """Customization the template was constructed with."""
        return self._default_customization

    def update_customization(self, overrides: Mapping[str, Any]) -> TemplateCustomization:
        """
        Merge partial overrides into the current customization, group by group.

        Raises:
            ValueError: Unknown customization group or key
        """
        self._customization = self._customization.merged(overrides)
        return self._customization

    def reset_customization(self) -> None:
        """Restore the customization the template was constructed with."""
        self._customization = self._default_customization

    # Rendering

    def _render(self, fmt: str, data: DocumentData) -> str:
        """Render one of the Jinja2 formats ("html" or "latex")."""
        if not self._registry.has_template(self.template_key, fmt):
            raise UnsupportedExportFormatError(fmt, template_id=self.id)

        template_path = self._registry.get_template_path(self.template_key, fmt)
        try:
            template = self._registry.get_template(self.template_key, fmt)
            output = template.render(**self.render_context(data))
        except TemplateNotFound:
            raise
        except TemplateError as e:
            raise TemplateRenderError(
                f"Failed to render {fmt} for template '{self.id}'",
                template_id=self.id,
                template_path=template_path,
                original_error=e,
            ) from e

        if fmt == "latex":
            output = set_max_consecutive_blank_lines(output, max_consecutive=1)

        log_render(self.id, fmt, len(output))
        return output

    def render_context(self, data: DocumentData) -> Dict[str, Any]:
        """Variables available to this template's Jinja2 files."""
        return {
            "template": self.metadata,
            "c": self.customization,
            "font_family": {
                "heading": font_family(self.customization.fonts.heading),
                "body": font_family(self.customization.fonts.body),
            },
        }

    def export_to_html(self, data: Any) -> str:
        return self._render("html", self.coerce(data))

    def export_to_latex(self, data: Any) -> str:
        return self._render("latex", self.coerce(data))

    def export_to_docx(self, data: Any) -> bytes:
        raise UnsupportedExportFormatError("docx", template_id=self.id)

    def export_to_pdf(self, data: Any, engine: Optional[str] = None) -> bytes:
        """
        Export as PDF.

        Args:
            data: Document data or mapping
            engine: "reportlab" (in-process) or "latex" (compile the LaTeX export).
                    Defaults to the PDF_ENGINE env var

        Raises:
            ValueError: Unknown engine
            UnsupportedExportFormatError: Template cannot produce PDF with that engine
            LaTeXCompilationError: LaTeX engine failed
        """
        engine = (engine or PDF_ENGINE).lower()
        if engine not in PDF_ENGINES:
            raise ValueError(f"Unknown PDF engine '{engine}'. Use one of: {PDF_ENGINES}")

        document = self.coerce(data)
        if engine == "latex":
            return compile_latex_source(
                self.export_to_latex(document), name=self.output_stem(document)
            )
        return self._write_pdf(document)

    def _write_pdf(self, data: DocumentData) -> bytes:
        raise UnsupportedExportFormatError("pdf", template_id=self.id)

    def output_stem(self, data: DocumentData) -> str:
        """Filename stem for exports of this document."""
        return safe_filename(data.full_name, default=self.kind)

    def get_preview(self) -> str:
        """Render the built-in sample document as HTML."""
        return self.render_preview(self.sample_data())

    @abstractmethod
    def coerce(self, data: Any) -> DocumentData:
        """Accept a dataclass instance or a raw mapping."""

    @abstractmethod
    def sample_data(self) -> DocumentData:
        """Sample document used for previews."""

    @abstractmethod
    def render_preview(self, data: Any) -> str:
        """Render an HTML preview of the document."""

    @abstractmethod
    def validate(self, data: Any) -> ValidationResult:
        """Check data completeness for this template."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"


def _issues_result(issues: List[str], errors: List[str]) -> ValidationResult:
    return ValidationResult(
        is_valid=not errors,
        score=max(0, 100 - len(issues) * 10),
        issues=issues,
        errors=errors,
    )


class ResumeTemplate(BaseTemplate):
    """
    Base for resume templates.

    Attributes:
        section_order: Default order of resume sections (a resume's own order wins)
        section_headings: Overrides of the default section headings
        uppercase_headings: DOCX/PDF writers capitalize headings
        center_header: DOCX/PDF writers center the name block
        sidebar_sections: Sections the PDF writer places in the sidebar column
    """

    kind = "resume"
    section_order: Sequence[str] = tuple(DEFAULT_SECTION_ORDER)
    section_headings: Mapping[str, str] = {}
    uppercase_headings: bool = False
    center_header: bool = True
    sidebar_sections: Sequence[str] = ()

    # Minimum and optimal skill counts for the skills section score
    MIN_SKILLS = 5
    OPTIMAL_SKILLS = 15

    def coerce(self, data: Any) -> ResumeData:
        return coerce_document(data, kind="resume")

    def sample_data(self) -> ResumeData:
        return ResumeData.from_dict(SAMPLE_RESUME)

    @property
    def headings(self) -> Dict[str, str]:
        return {**SECTION_HEADINGS, **self.section_headings}

    def outline(self, resume: ResumeData) -> DocumentOutline:
        """Writer-neutral outline of a resume in this template's section order."""
        return build_resume_outline(resume, list(self.section_order), self.headings)

    def render_context(self, data: ResumeData) -> Dict[str, Any]:
        context = super().render_context(data)
        outline = self.outline(data)
        context.update(
            {
                "resume": data,
                "outline": outline,
                "sections": outline.sections,
                "uppercase_headings": self.uppercase_headings,
                "center_header": self.center_header,
            }
        )
        return context

    def render_preview(self, data: Any) -> str:
        return self.export_to_html(data)

    def export_to_docx(self, data: Any) -> bytes:
        resume = self.coerce(data)
        return write_resume_docx(
            self.outline(resume),
            self.customization,
            uppercase_headings=self.uppercase_headings,
            center_header=self.center_header,
        )

    def _write_pdf(self, data: ResumeData) -> bytes:
        return write_resume_pdf(
            self.outline(data),
            self.customization,
            uppercase_headings=self.uppercase_headings,
            center_header=self.center_header,
            sidebar_sections=self.sidebar_sections,
        )

    def validate(self, data: Any) -> ValidationResult:
        """
        Check a resume for required and recommended content.

        Full name and email are required and block export; every other issue is a
        recommendation that only lowers the score.
        """
        resume = self.coerce(data)
        errors = []
        issues = []

        if not resume.full_name:
            errors.append("Full name is required")
        if not resume.email:
            errors.append("Email is required")
        issues.extend(errors)

        if not resume.target_job_title:
            issues.append("Target job title is recommended")
        if not resume.summary:
            issues.append("Professional summary is recommended")
        if not resume.work_experience:
            issues.append("Work experience section is recommended")
        if not resume.education:
            issues.append("Education section is recommended")
        if not resume.all_skills:
            issues.append("Skills section is recommended")

        return _issues_result(issues, errors)

    def check_ats_compatibility(self, data: Any) -> TemplateATSReport:
        """Score how completely each resume section is filled in for ATS parsing."""
        resume = self.coerce(data)
        report = TemplateATSReport()

        if not resume.full_name or not resume.email or not resume.phone:
            report.format_issues.append("Missing essential contact information")

        if not resume.summary:
            report.suggestions.append("Add a professional summary to improve ATS score")

        if resume.work_experience:
            report.sections["experience"] = self._experience_score(resume)
        if resume.education:
            report.sections["education"] = self._education_score(resume)
        if resume.all_skills:
            report.sections["skills"] = self._skills_score(resume)

        scores = list(report.sections.values())
        report.overall = sum(scores) / len(scores) if scores else 0.0
        return report

    def get_ats_compatibility_score(self, data: Any) -> int:
        """100 minus 5 per validation issue, clamped to 0-100."""
        issues = self.validate(data).issues
        return max(0, min(100, 100 - len(issues) * 5))

    def _experience_score(self, resume: ResumeData) -> float:
        total = 0
        for exp in resume.work_experience:
            total += 20 * sum(
                [
                    bool(exp.position),
                    bool(exp.company),
                    exp.has_dates,
                    bool(exp.description),
                    bool(exp.achievements),
                ]
            )
        return min(total / len(resume.work_experience), 100.0)

    def _education_score(self, resume: ResumeData) -> float:
        total = 0
        for edu in resume.education:
            total += 30 if edu.degree else 0
            total += 30 if edu.institution else 0
            total += 20 if edu.start_date and (edu.end_date or edu.current) else 0
            total += 20 if edu.field_of_study else 0
        return min(total / len(resume.education), 100.0)

    def _skills_score(self, resume: ResumeData) -> float:
        count = len(resume.all_skills)
        if count == 0:
            return 0.0
        if count < self.MIN_SKILLS:
            return count / self.MIN_SKILLS * 70
        if count >= self.OPTIMAL_SKILLS:
            return 100.0
        return 70 + (count - self.MIN_SKILLS) / (self.OPTIMAL_SKILLS - self.MIN_SKILLS) * 30


class CoverLetterTemplate(BaseTemplate):
    """
    Base for cover-letter templates.

    Attributes:
        closing: Sign-off line above the signature
        accent_rule: PDF writer draws an accent-colored rule under the sender block
    """

    kind = "cover_letter"
    closing: str = "Sincerely,"
    accent_rule: bool = False

    def coerce(self, data: Any) -> CoverLetterData:
        return coerce_document(data, kind="cover_letter")

    def sample_data(self) -> CoverLetterData:
        return CoverLetterData.from_dict(SAMPLE_COVER_LETTER)

    def render_context(self, data: CoverLetterData) -> Dict[str, Any]:
        context = super().render_context(data)
        context.update(
            {
                "letter": data.with_placeholders(),
                "closing": self.closing,
                "accent_rule": self.accent_rule,
            }
        )
        return context

    def render_preview(self, data: Any) -> str:
        return self.export_to_html(data)

    def export_to_docx(self, data: Any) -> bytes:
        letter = self.coerce(data).with_placeholders()
        return write_cover_letter_docx(letter, self.customization, closing=self.closing)

    def _write_pdf(self, data: CoverLetterData) -> bytes:
        return write_cover_letter_pdf(
            data.with_placeholders(),
            self.customization,
            closing=self.closing,
            accent_rule=self.accent_rule,
        )

    def validate(self, data: Any) -> ValidationResult:
        """
        Check a cover letter for required and recommended content.

        Sender name, email and body are required; recipient and company are recommended.
        """
        letter = self.coerce(data)
        errors = []
        issues = []

        if not letter.full_name:
            errors.append("Full name is required")
        if not letter.email:
            errors.append("Email is required")
        if not letter.content:
            errors.append("Letter content is required")
        issues.extend(errors)

        if not letter.company_name:
            issues.append("Company name is recommended")
        if not letter.recipient_name:
            issues.append("Recipient name is recommended")
        if not letter.job_title:
            issues.append("Job title is recommended")

        return _issues_result(issues, errors)
