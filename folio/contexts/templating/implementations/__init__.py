"""Built-in resume and cover-letter templates."""

from folio.contexts.templating.implementations.cover_letters import (
    ModernCoverLetter,
    ProfessionalCoverLetter,
    StandardCoverLetter,
)
from folio.contexts.templating.implementations.elegant_divider import ElegantDividerTemplate
from folio.contexts.templating.implementations.minimalist_ats import MinimalistATSTemplate
from folio.contexts.templating.implementations.modern_sidebar import ModernSidebarTemplate
from folio.contexts.templating.implementations.professional import ProfessionalTemplate

# Registration order is display order
RESUME_TEMPLATES = [
    ProfessionalTemplate,
    ElegantDividerTemplate,
    MinimalistATSTemplate,
    ModernSidebarTemplate,
]

COVER_LETTER_TEMPLATES = [
    StandardCoverLetter,
    ModernCoverLetter,
    ProfessionalCoverLetter,
]

__all__ = [
    "ProfessionalTemplate",
    "ElegantDividerTemplate",
    "MinimalistATSTemplate",
    "ModernSidebarTemplate",
    "StandardCoverLetter",
    "ModernCoverLetter",
    "ProfessionalCoverLetter",
    "RESUME_TEMPLATES",
    "COVER_LETTER_TEMPLATES",
]
