"""
Default values for FOLIO templates.

Provides shared defaults used by:
- Template implementations (per-template customization and metadata)
- BaseTemplate.get_preview() (sample documents)
- Writers (section order and headings)
"""

from typing import Any, Dict

from folio.contexts.templating.customization import TemplateCustomization

DEFAULT_CUSTOMIZATION = TemplateCustomization()

# Per-style overrides applied on top of DEFAULT_CUSTOMIZATION
TEMPLATE_CUSTOMIZATION_OVERRIDES: Dict[str, Dict[str, Dict[str, str]]] = {
    "modern": {
        "colors": {"primary": "#3b82f6", "secondary": "#6b7280", "accent": "#f97316"},
        "fonts": {"heading": "Inter, sans-serif", "body": "Inter, sans-serif"},
        "layout": {"sidebar": "left"},
    },
    "professional": {
        "colors": {"primary": "#1e293b", "secondary": "#334155", "accent": "#0ea5e9"},
        "fonts": {"heading": "Times New Roman, serif", "body": "Times New Roman, serif"},
        "spacing": {"section_gap": "1.25rem", "item_gap": "0.75rem"},
        "layout": {"sidebar": "none"},
    },
    "minimalist": {
        "colors": {"primary": "#333333", "secondary": "#666666", "accent": "#808080"},
        "fonts": {"heading": "Helvetica, Arial, sans-serif", "body": "Helvetica, Arial, sans-serif"},
        "spacing": {"section_gap": "1rem", "item_gap": "0.5rem"},
        "layout": {"sidebar": "none"},
    },
    "elegant": {
        "colors": {"primary": "#292524", "secondary": "#57534e", "accent": "#78716c"},
        "fonts": {"heading": "Playfair Display, serif", "body": "Lato, sans-serif"},
        "spacing": {"section_gap": "1.75rem", "item_gap": "1rem"},
        "layout": {"sidebar": "left"},
    },
    "corporate": {
        "colors": {"primary": "#0f172a", "secondary": "#1e293b", "accent": "#3b82f6"},
        "fonts": {"heading": "Arial, sans-serif", "body": "Arial, sans-serif"},
        "layout": {"sidebar": "none"},
    },
}


def get_default_customization(style: str = None) -> TemplateCustomization:
    """
    Get the customization a template style starts from.

    Args:
        style: Style key (e.g. "modern", "professional"); None for the global default

    Raises:
        KeyError: Unknown style
    """
    if style is None:
        return DEFAULT_CUSTOMIZATION
    return DEFAULT_CUSTOMIZATION.merged(TEMPLATE_CUSTOMIZATION_OVERRIDES[style])


# Resume section keys in the order templates render them unless the resume sets its own
DEFAULT_SECTION_ORDER = [
    "summary",
    "work_experience",
    "education",
    "skills",
    "projects",
    "certifications",
    "publications",
]

SECTION_HEADINGS = {
    "summary": "Professional Summary",
    "work_experience": "Experience",
    "education": "Education",
    "skills": "Skills",
    "projects": "Projects",
    "certifications": "Certifications",
    "publications": "Publications",
}

SAMPLE_RESUME: Dict[str, Any] = {
    "fullName": "Alex Morgan",
    "targetJobTitle": "Senior Software Engineer",
    "email": "alex.morgan@example.com",
    "phone": "(555) 123-4567",
    "city": "Portland",
    "state": "OR",
    "linkedinUrl": "https://linkedin.com/in/alexmorgan",
    "portfolioUrl": "https://alexmorgan.dev",
    "summary": (
        "Software engineer with eight years of experience building reliable web platforms "
        "and data services. Leads small teams through design, delivery and operations."
    ),
    "technicalSkills": ["Python", "TypeScript", "PostgreSQL", "AWS", "Docker"],
    "softSkills": ["Mentoring", "Communication"],
    "skills": ["Agile", "Technical Writing"],
    "workExperience": [
        {
            "position": "Senior Software Engineer",
            "company": "Northwind Labs",
            "location": "Portland, OR",
            "startDate": "2021-03",
            "current": True,
            "description": "Own the billing platform serving 40k business customers.",
            "achievements": [
                "Cut invoice generation time by 65% by moving batch jobs to a queue",
                "Mentored 4 engineers through their first on-call rotations",
            ],
        },
        {
            "position": "Software Engineer",
            "company": "Bluebird Analytics",
            "location": "Seattle, WA",
            "startDate": "2017-06",
            "endDate": "2021-02",
            "description": "Built ingestion services for customer event data.",
            "achievements": ["Scaled event ingestion to 2M events per minute"],
        },
    ],
    "education": [
        {
            "institution": "Oregon State University",
            "degree": "B.S.",
            "fieldOfStudy": "Computer Science",
            "startDate": "2013-09",
            "endDate": "2017-06",
        }
    ],
    "projects": [
        {
            "name": "Ledger CLI",
            "description": "Open-source command-line tool for reconciling bank exports.",
            "url": "https://github.com/alexmorgan/ledger-cli",
            "technologies": ["Python", "SQLite"],
        }
    ],
    "certifications": [
        {"name": "AWS Certified Developer", "issuer": "Amazon Web Services", "date": "2022-05"}
    ],
}

SAMPLE_COVER_LETTER: Dict[str, Any] = {
    "title": "Application for Senior Software Engineer",
    "fullName": "Alex Morgan",
    "email": "alex.morgan@example.com",
    "phone": "(555) 123-4567",
    "address": "Portland, OR",
    "recipientName": "Jordan Lee",
    "companyName": "Acme Corporation",
    "jobTitle": "Senior Software Engineer",
    "content": (
        "I am writing to apply for the Senior Software Engineer role at Acme Corporation.\n\n"
        "For the past four years I have led the billing platform at Northwind Labs, where my "
        "team cut invoice generation time by 65%.\n\n"
        "I would welcome the chance to discuss how I can help your team."
    ),
}
