"""
Cover-letter templates.

All three share the letter layout (sender block, date, recipient, body, closing)
and differ in styling.
"""

from folio.contexts.templating.base_template import CoverLetterTemplate, TemplateMetadata


class StandardCoverLetter(CoverLetterTemplate):
    metadata = TemplateMetadata(
        id="standard",
        name="Standard",
        description="Traditional cover letter format suitable for formal applications",
        thumbnail="/templates/cover-letter-standard.png",
        category="professional",
        tags=("traditional", "formal"),
        is_default=True,
    )


class ModernCoverLetter(CoverLetterTemplate):
    metadata = TemplateMetadata(
        id="modern",
        name="Modern",
        description="Modern design with contemporary styling for creative roles",
        thumbnail="/templates/cover-letter-modern.png",
        category="modern",
        tags=("modern", "creative"),
    )
    style = "modern"
    closing = "Best regards,"
    accent_rule = True


class ProfessionalCoverLetter(CoverLetterTemplate):
    metadata = TemplateMetadata(
        id="professional",
        name="Professional",
        description="Polished business letter with a serif typeface for corporate roles",
        thumbnail="/templates/cover-letter-professional.png",
        category="professional",
        tags=("professional", "corporate"),
    )
    style = "professional"
    closing = "Respectfully,"
