"""
Resume and Cover Letter Data Structures

Defines the structured representation of resume and cover-letter content used by
every template, the export service and the ATS scorer.

Input may come from the web client (camelCase keys such as ``fullName`` or
``workExperience``) or from hand-written YAML (snake_case keys). Both are accepted;
unknown keys are ignored.
"""

import re
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from omegaconf import OmegaConf

from folio.contexts.templating.exceptions import InvalidResumeDataError
from folio.utils.timestamp import format_long_date

T = TypeVar("T")

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def to_snake_case(key: str) -> str:
    """
    Convert a camelCase key to snake_case.

    Example:
        >>> to_snake_case("linkedinUrl")
        'linkedin_url'
    """
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def _clean_value(value: Any) -> Any:
    # None means "not provided" in client payloads
    return "" if value is None else value


def _string_list(value: Any, field_name: str) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if not isinstance(value, (list, tuple)):
        raise InvalidResumeDataError(f"'{field_name}' must be a list of strings")
    return [str(item).strip() for item in value if item is not None and str(item).strip()]


def _build(cls: Type[T], data: Any, context: str) -> T:
    """Build a flat dataclass from a mapping, normalizing keys and dropping unknowns."""
    if isinstance(data, cls):
        return data
    if not isinstance(data, dict):
        raise InvalidResumeDataError(
            f"{context} entry must be a mapping, got {type(data).__name__}"
        )

    known = {f.name: f for f in fields(cls)}
    kwargs = {}
    for key, value in data.items():
        name = to_snake_case(str(key))
        if name not in known:
            continue
        if name in cls._list_fields:
            kwargs[name] = _string_list(value, name)
        elif known[name].type is bool:
            kwargs[name] = bool(value)
        else:
            kwargs[name] = str(_clean_value(value)).strip()

    return cls(**kwargs)


def _build_list(cls: Type[T], data: Any, context: str) -> List[T]:
    if data is None:
        return []
    if not isinstance(data, (list, tuple)):
        raise InvalidResumeDataError(f"'{context}' must be a list of entries")
    return [_build(cls, item, context) for item in data]


@dataclass
class WorkExperience:
    """A single position held."""

    position: str = ""
    company: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    description: str = ""
    achievements: List[str] = field(default_factory=list)

    _list_fields = ("achievements",)

    @property
    def has_dates(self) -> bool:
        """Start date present and either an end date or marked current."""
        return bool(self.start_date) and (bool(self.end_date) or self.current)


@dataclass
class Education:
    """A degree or course of study."""

    institution: str = ""
    degree: str = ""
    field_of_study: str = ""
    city: str = ""
    country: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    description: str = ""
    gpa: str = ""

    _list_fields = ()

    @property
    def display_location(self) -> str:
        return ", ".join(part for part in (self.city, self.country) if part)


@dataclass
class Project:
    name: str = ""
    description: str = ""
    url: str = ""
    technologies: List[str] = field(default_factory=list)
    start_date: str = ""
    end_date: str = ""
    current: bool = False

    _list_fields = ("technologies",)


@dataclass
class Certification:
    name: str = ""
    issuer: str = ""
    date: str = ""
    expires: bool = False
    expiry_date: str = ""
    description: str = ""
    url: str = ""

    _list_fields = ()


@dataclass
class Publication:
    title: str = ""
    publisher: str = ""
    authors: str = ""
    publication_date: str = ""
    url: str = ""
    description: str = ""

    _list_fields = ()


# Nested sections and the entry type each holds
SECTION_TYPES = {
    "work_experience": WorkExperience,
    "education": Education,
    "projects": Project,
    "certifications": Certification,
    "publications": Publication,
}


@dataclass
class ResumeData:
    """
    Complete structured resume content.

    Attributes mirror the web client's resume form. ``job_description`` and
    ``target_job_title`` are not rendered by most templates but drive ATS scoring.
    """

    full_name: str = ""
    target_job_title: str = ""
    job_description: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    country: str = ""
    city: str = ""
    state: str = ""
    linkedin_url: str = ""
    portfolio_url: str = ""
    summary: str = ""
    template: str = ""
    skills: List[str] = field(default_factory=list)
    technical_skills: List[str] = field(default_factory=list)
    soft_skills: List[str] = field(default_factory=list)
    use_skill_categories: bool = False
    skill_categories: Dict[str, List[str]] = field(default_factory=dict)
    work_experience: List[WorkExperience] = field(default_factory=list)
    education: List[Education] = field(default_factory=list)
    projects: List[Project] = field(default_factory=list)
    certifications: List[Certification] = field(default_factory=list)
    publications: List[Publication] = field(default_factory=list)
    section_order: List[str] = field(default_factory=list)

    _list_fields = ("skills", "technical_skills", "soft_skills", "section_order")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResumeData":
        """
        Build ResumeData from a plain mapping with camelCase or snake_case keys.

        Raises:
            InvalidResumeDataError: If data is not a mapping or a section is malformed
        """
        if not isinstance(data, dict):
            raise InvalidResumeDataError(
                f"Resume data must be a mapping, got {type(data).__name__}"
            )

        normalized = {to_snake_case(str(k)): v for k, v in data.items()}

        scalar_data = {
            k: v
            for k, v in normalized.items()
            if k not in SECTION_TYPES and k != "skill_categories"
        }
        resume = _build(cls, scalar_data, "resume")

        for section, entry_cls in SECTION_TYPES.items():
            setattr(resume, section, _build_list(entry_cls, normalized.get(section), section))

        categories = normalized.get("skill_categories") or {}
        if not isinstance(categories, dict):
            raise InvalidResumeDataError("'skill_categories' must map category names to lists")
        resume.skill_categories = {
            str(name): _string_list(items, f"skill_categories.{name}")
            for name, items in categories.items()
        }

        return resume

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ResumeData":
        """
        Load ResumeData from a YAML or JSON file.

        Raises:
            FileNotFoundError: If the file does not exist
            InvalidResumeDataError: If the content is not a resume mapping
        """
        return cls.from_dict(_load_mapping(path))

    def to_dict(self) -> Dict[str, Any]:
        """Plain snake_case representation."""
        return asdict(self)

    @property
    def all_skills(self) -> List[str]:
        """General, technical and soft skills in that order."""
        return [*self.skills, *self.technical_skills, *self.soft_skills]

    @property
    def has_skills(self) -> bool:
        return bool(self.all_skills) or any(self.skill_categories.values())

    @property
    def display_location(self) -> str:
        """Free-form location, else "City, State" (or "City, Country")."""
        if self.location:
            return self.location
        return ", ".join(part for part in (self.city, self.state or self.country) if part)

    @property
    def grouped_skills(self) -> Dict[str, List[str]]:
        """
        Skills grouped for display.

        Uses the user's own categories when enabled, else technical/soft/other groups.
        """
        if self.use_skill_categories and any(self.skill_categories.values()):
            return {name: items for name, items in self.skill_categories.items() if items}

        groups = {
            "Technical Skills": self.technical_skills,
            "Soft Skills": self.soft_skills,
            "Other Skills" if (self.technical_skills or self.soft_skills) else "Skills": self.skills,
        }
        return {name: items for name, items in groups.items() if items}

    def has_section(self, section: str) -> bool:
        """Whether a section key (e.g. "work_experience") has anything to render."""
        if section == "summary":
            return bool(self.summary)
        if section == "skills":
            return self.has_skills
        return bool(getattr(self, section, None))

    def ordered_sections(self, default_order: List[str]) -> List[str]:
        """
        Non-empty section keys in render order.

        The resume's own section_order wins when set (camelCase keys accepted);
        unknown keys are dropped.
        """
        order = [to_snake_case(s) for s in self.section_order] or list(default_order)
        valid = set(default_order)
        return [s for s in order if s in valid and self.has_section(s)]


# Shown in place of missing cover-letter fields
COVER_LETTER_PLACEHOLDERS = {
    "full_name": "Your Name",
    "phone": "Phone Number",
    "email": "Email Address",
    "address": "City, State",
    "recipient_name": "Hiring Manager",
    "company_name": "Company Name",
    "content": "Your cover letter content will appear here...",
}


@dataclass
class CoverLetterData:
    """Structured cover-letter content."""

    title: str = ""
    full_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    date: str = ""
    recipient_name: str = ""
    company_name: str = ""
    job_title: str = ""
    content: str = ""
    template: str = ""

    _list_fields = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CoverLetterData":
        """
        Build CoverLetterData from a plain mapping with camelCase or snake_case keys.

        Raises:
            InvalidResumeDataError: If data is not a mapping
        """
        if not isinstance(data, dict):
            raise InvalidResumeDataError(
                f"Cover letter data must be a mapping, got {type(data).__name__}"
            )
        return _build(cls, data, "cover letter")

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "CoverLetterData":
        """Load CoverLetterData from a YAML or JSON file."""
        return cls.from_dict(_load_mapping(path))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def with_placeholders(self) -> "CoverLetterData":
        """Copy with missing fields replaced by placeholders and the date in long form."""
        filled = {
            name: getattr(self, name) or placeholder
            for name, placeholder in COVER_LETTER_PLACEHOLDERS.items()
        }
        return replace(self, date=format_long_date(self.date), **filled)


def _load_mapping(path: Union[str, Path]) -> Dict[str, Any]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    # JSON is valid YAML, so one loader covers both
    content = OmegaConf.to_container(OmegaConf.load(path), resolve=True)
    if not isinstance(content, dict):
        raise InvalidResumeDataError(f"{path} must contain a mapping at the top level")
    return content


DocumentData = Union[ResumeData, CoverLetterData]


def coerce_document(data: Any, kind: Optional[str] = None) -> DocumentData:
    """
    Accept a ResumeData/CoverLetterData instance or a raw mapping.

    Args:
        data: Dataclass instance or mapping
        kind: "resume" or "cover_letter", used when data is a mapping
    """
    if isinstance(data, (ResumeData, CoverLetterData)):
        return data
    if kind == "cover_letter":
        return CoverLetterData.from_dict(data)
    return ResumeData.from_dict(data)
