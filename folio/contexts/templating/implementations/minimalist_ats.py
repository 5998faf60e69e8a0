"""
Minimalist ATS resume template.

Left-aligned header with an accent border, no columns and no decoration beyond
section rules, so applicant tracking systems read the text in order.
"""

from folio.contexts.templating.base_template import ResumeTemplate, TemplateMetadata


class MinimalistATSTemplate(ResumeTemplate):
    metadata = TemplateMetadata(
        id="minimalist-ats",
        name="Minimalist ATS",
        description="A clean, minimal layout optimized for ATS parsing with maximum readability.",
        is_ats_optimized=True,
        thumbnail="/templates/minimalist-ats.png",
        category="professional",
        tags=("ats-friendly", "minimal", "clean", "professional", "simple"),
    )
    style = "minimalist"
    center_header = False
    section_headings = {"summary": "Summary"}
