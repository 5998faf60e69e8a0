"""Modern Sidebar resume template: contact details and skills in a side column."""

from folio.contexts.templating.base_template import ResumeTemplate, TemplateMetadata


class ModernSidebarTemplate(ResumeTemplate):
    metadata = TemplateMetadata(
        id="modern-sidebar",
        name="Modern Sidebar",
        description=(
            "A clean, modern two-column layout with a sidebar for contact info and skills, "
            "perfect for showcasing technical expertise."
        ),
        is_ats_optimized=True,
        thumbnail="/templates/modern-sidebar.png",
        category="modern",
        tags=("modern", "sidebar", "two-column", "clean", "technical"),
    )
    style = "modern"
    center_header = False
    section_headings = {"summary": "About Me"}
    sidebar_sections = ("skills", "certifications")

    def render_context(self, data):
        context = super().render_context(data)
        has_sidebar = self.customization.layout.sidebar != "none"
        main, side = [], []
        for section in context["sections"]:
            if has_sidebar and section.key in self.sidebar_sections:
                side.append(section)
            else:
                main.append(section)
        context.update({"main_sections": main, "side_sections": side})
        return context
