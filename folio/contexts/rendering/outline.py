"""
Document outline shared by the DOCX and PDF writers.

Flattens a ResumeData into header lines and ordered sections of display-ready
entries, so every binary writer renders the same content in the same order.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from folio.contexts.templating.defaults import DEFAULT_SECTION_ORDER, SECTION_HEADINGS
from folio.contexts.templating.resume_data_structure import ResumeData
from folio.utils.timestamp import format_date_range, format_resume_date


@dataclass
class OutlineEntry:
    """One item within a section (a job, a degree, a project...)."""

    title: str
    subtitle: str = ""
    dates: str = ""
    location: str = ""
    text: str = ""
    bullets: List[str] = field(default_factory=list)
    link: str = ""


@dataclass
class OutlineSection:
    key: str
    heading: str
    text: str = ""
    entries: List[OutlineEntry] = field(default_factory=list)
    groups: Dict[str, List[str]] = field(default_factory=dict)


@dataclass
class DocumentOutline:
    name: str
    headline: str = ""
    contact: List[str] = field(default_factory=list)
    links: List[str] = field(default_factory=list)
    sections: List[OutlineSection] = field(default_factory=list)

    def section(self, key: str) -> OutlineSection:
        """Section by key; raises KeyError if the outline does not include it."""
        for section in self.sections:
            if section.key == key:
                return section
        raise KeyError(key)


def _experience_entries(resume: ResumeData) -> List[OutlineEntry]:
    return [
        OutlineEntry(
            title=exp.position,
            subtitle=exp.company,
            dates=format_date_range(exp.start_date, exp.end_date, exp.current),
            location=exp.location,
            text=exp.description,
            bullets=list(exp.achievements),
        )
        for exp in resume.work_experience
    ]


def _education_entries(resume: ResumeData) -> List[OutlineEntry]:
    entries = []
    for edu in resume.education:
        title = edu.degree
        if edu.field_of_study:
            title = f"{title} in {edu.field_of_study}" if title else edu.field_of_study
        text = edu.description
        if edu.gpa:
            text = f"GPA: {edu.gpa}" + (f". {text}" if text else "")
        entries.append(
            OutlineEntry(
                title=title,
                subtitle=edu.institution,
                dates=format_date_range(edu.start_date, edu.end_date, edu.current),
                location=edu.display_location,
                text=text,
            )
        )
    return entries


def _project_entries(resume: ResumeData) -> List[OutlineEntry]:
    entries = []
    for project in resume.projects:
        has_dates = project.start_date or project.end_date or project.current
        entries.append(
            OutlineEntry(
                title=project.name,
                subtitle=", ".join(project.technologies),
                dates=(
                    format_date_range(project.start_date, project.end_date, project.current)
                    if has_dates
                    else ""
                ),
                text=project.description,
                link=project.url,
            )
        )
    return entries


def _certification_entries(resume: ResumeData) -> List[OutlineEntry]:
    entries = []
    for cert in resume.certifications:
        if cert.expires and cert.expiry_date:
            validity = f"Expires: {format_resume_date(cert.expiry_date)}"
        elif cert.date:
            validity = format_resume_date(cert.date)
        else:
            validity = ""
        entries.append(
            OutlineEntry(
                title=cert.name,
                subtitle=cert.issuer,
                dates=validity,
                text=cert.description,
                link=cert.url,
            )
        )
    return entries


def _publication_entries(resume: ResumeData) -> List[OutlineEntry]:
    return [
        OutlineEntry(
            title=pub.title,
            subtitle=", ".join(part for part in (pub.authors, pub.publisher) if part),
            dates=format_resume_date(pub.publication_date) if pub.publication_date else "",
            text=pub.description,
            link=pub.url,
        )
        for pub in resume.publications
    ]


ENTRY_BUILDERS = {
    "work_experience": _experience_entries,
    "education": _education_entries,
    "projects": _project_entries,
    "certifications": _certification_entries,
    "publications": _publication_entries,
}


def build_resume_outline(
    resume: ResumeData,
    section_order: List[str] = None,
    headings: Dict[str, str] = None,
) -> DocumentOutline:
    """
    Flatten a resume into a writer-neutral outline.

    Args:
        resume: Resume content
        section_order: Template's default section order (the resume's own order wins)
        headings: Section key -> heading text

    Returns:
        DocumentOutline with only non-empty sections
    """
    headings = {**SECTION_HEADINGS, **(headings or {})}

    outline = DocumentOutline(
        name=resume.full_name,
        headline=resume.target_job_title,
        contact=[part for part in (resume.email, resume.phone, resume.display_location) if part],
        links=[link for link in (resume.linkedin_url, resume.portfolio_url) if link],
    )

    for key in resume.ordered_sections(section_order or DEFAULT_SECTION_ORDER):
        section = OutlineSection(key=key, heading=headings[key])
        if key == "summary":
            section.text = resume.summary
        elif key == "skills":
            section.groups = resume.grouped_skills
        else:
            section.entries = ENTRY_BUILDERS[key](resume)
        outline.sections.append(section)

    return outline
