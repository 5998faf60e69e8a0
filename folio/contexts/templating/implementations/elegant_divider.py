"""Elegant Divider resume template: single column with ruled section breaks."""

from folio.contexts.templating.base_template import ResumeTemplate, TemplateMetadata


class ElegantDividerTemplate(ResumeTemplate):
    metadata = TemplateMetadata(
        id="elegant-divider",
        name="Elegant Divider",
        description=(
            "A professional single-column layout with elegant horizontal dividers "
            "between sections."
        ),
        is_ats_optimized=True,
        thumbnail="/templates/elegant-divider.png",
        category="professional",
        tags=("elegant", "professional", "single-column", "modern", "clean"),
    )
    style = "elegant"
    customization_overrides = {"layout": {"sidebar": "none"}}
    section_headings = {"summary": "Profile", "skills": "Expertise"}
