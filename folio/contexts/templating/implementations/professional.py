"""Professional resume template: traditional single column with uppercase headings."""

from folio.contexts.templating.base_template import ResumeTemplate, TemplateMetadata


class ProfessionalTemplate(ResumeTemplate):
    metadata = TemplateMetadata(
        id="professional",
        name="Professional",
        description="A clean, traditional layout optimized for ATS systems.",
        is_ats_optimized=True,
        thumbnail="/templates/professional.png",
        category="professional",
        tags=("professional", "traditional", "ats-friendly"),
        is_default=True,
    )
    style = "professional"
    uppercase_headings = True
