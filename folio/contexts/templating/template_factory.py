"""
Template Factory

Keeps one registry of template classes per document kind (resume, cover_letter)
and the template instances created from them.

Examples:
    >>> factory = register_templates()
    >>> template = factory.get_template("minimalist-ats")
    >>> template.name
    'Minimalist ATS'
"""

from typing import Dict, List, Optional, Type

from folio.contexts.templating.base_template import BaseTemplate
from folio.contexts.templating.exceptions import TemplateNotRegisteredError
from folio.contexts.templating.logger import (
    _log_debug,
    _log_error,
    _log_info,
    log_template_registration,
)

DOCUMENT_KINDS = ("resume", "cover_letter")


class TemplateFactory:
    """
    Registry of template classes and their instances for one document kind.

    Instances are created on demand and reused, so customization changes made
    through one lookup are seen by the next.
    """

    def __init__(self, kind: str):
        self.kind = kind
        self._constructors: Dict[str, Type[BaseTemplate]] = {}
        self._templates: Dict[str, BaseTemplate] = {}

    def register_template_type(self, template_type: str, template_cls: Type[BaseTemplate]) -> None:
        """
        Register a template class under a type id. Re-registering replaces the class.

        Raises:
            TypeError: If template_cls is not a template of this factory's kind
        """
        if not (isinstance(template_cls, type) and issubclass(template_cls, BaseTemplate)):
            raise TypeError(f"{template_cls!r} is not a BaseTemplate subclass")
        if template_cls.kind != self.kind:
            raise TypeError(
                f"{template_cls.__name__} is a {template_cls.kind} template, "
                f"cannot register it as {self.kind}"
            )
        self._constructors[template_type] = template_cls

    def create_template(self, template_type: str) -> BaseTemplate:
        """
        Create a fresh instance of a registered type, replacing any cached one.

        Raises:
            TemplateNotRegisteredError: If the type is not registered
        """
        template_cls = self._constructors.get(template_type)
        if template_cls is None:
            raise TemplateNotRegisteredError(template_type, self.get_registered_types())

        template = template_cls()
        self._templates[template_type] = template
        _log_debug(f"Created {self.kind} template '{template_type}'")
        return template

    def get_template(self, template_type: str) -> Optional[BaseTemplate]:
        """
        Cached instance for a type, created on first use.

        Returns None when the type is unknown or its construction fails.
        """
        if template_type in self._templates:
            return self._templates[template_type]
        if not self.has_template_type(template_type):
            return None

        try:
            return self.create_template(template_type)
        except Exception as e:
            _log_error(f"Error creating {self.kind} template '{template_type}': {e}")
            return None

    def get_all_templates(self) -> List[BaseTemplate]:
        """Instances created so far, in creation order."""
        return list(self._templates.values())

    def get_templates_by_type(self, template_type: str) -> List[BaseTemplate]:
        return [t for t in self.get_all_templates() if t.metadata.id == template_type]

    def remove_template(self, template_type: str) -> None:
        """Drop the cached instance; the type stays registered."""
        self._templates.pop(template_type, None)

    def clear_templates(self) -> None:
        """Drop all cached instances; registrations are kept."""
        self._templates.clear()

    def has_template_type(self, template_type: str) -> bool:
        return template_type in self._constructors

    def get_registered_types(self) -> List[str]:
        return list(self._constructors)

    def get_ats_optimized_templates(self) -> List[BaseTemplate]:
        """Templates whose layout is known to parse cleanly in applicant tracking systems."""
        templates = [self.get_template(t) for t in self.get_registered_types()]
        return [t for t in templates if t is not None and t.metadata.is_ats_optimized]

    def get_default_template(self) -> BaseTemplate:
        """
        Template marked as default, else the first registered one.

        Raises:
            TemplateNotRegisteredError: If nothing is registered
        """
        registered = self.get_registered_types()
        if not registered:
            raise TemplateNotRegisteredError("default", [])

        for template_type in registered:
            if self._constructors[template_type].metadata.is_default:
                return self.get_template(template_type)
        return self.get_template(registered[0])


_factories: Dict[str, TemplateFactory] = {}
_registered: Dict[str, bool] = {}


def get_factory(kind: str = "resume") -> TemplateFactory:
    """
    Process-wide factory for a document kind.

    Raises:
        ValueError: Unknown kind
    """
    if kind not in DOCUMENT_KINDS:
        raise ValueError(f"Unknown document kind '{kind}'. Use one of: {DOCUMENT_KINDS}")
    if kind not in _factories:
        _factories[kind] = TemplateFactory(kind)
    return _factories[kind]


def _register_all(kind: str, template_classes: List[Type[BaseTemplate]]) -> TemplateFactory:
    factory = get_factory(kind)
    label = "Templates" if kind == "resume" else "Cover letter templates"
    if _registered.get(kind):
        _log_info(f"{label} already registered, skipping")
        return factory

    for template_cls in template_classes:
        factory.register_template_type(template_cls.metadata.id, template_cls)
        factory.create_template(template_cls.metadata.id)

    _registered[kind] = True
    log_template_registration(kind, factory.get_registered_types())
    return factory


def register_templates() -> TemplateFactory:
    """Register and instantiate the built-in resume templates. Safe to call repeatedly."""
    from folio.contexts.templating.implementations import RESUME_TEMPLATES

    return _register_all("resume", RESUME_TEMPLATES)


def register_cover_letter_templates() -> TemplateFactory:
    """Register and instantiate the built-in cover-letter templates. Safe to call repeatedly."""
    from folio.contexts.templating.implementations import COVER_LETTER_TEMPLATES

    return _register_all("cover_letter", COVER_LETTER_TEMPLATES)


def resolve_template(template_type: str, kind: str = "resume") -> BaseTemplate:
    """
    Template instance for a type id, registering the built-ins first.

    Raises:
        TemplateNotRegisteredError: If no template of that kind has the id
    """
    factory = register_templates() if kind == "resume" else register_cover_letter_templates()
    template = factory.get_template(template_type)
    if template is None:
        raise TemplateNotRegisteredError(template_type, factory.get_registered_types())
    return template
