"""Unit tests for TemplateFactory and built-in template registration."""

import pytest

from folio.contexts.templating import template_factory
from folio.contexts.templating.exceptions import TemplateNotRegisteredError
from folio.contexts.templating.implementations import (
    MinimalistATSTemplate,
    ModernCoverLetter,
    ProfessionalTemplate,
)
from folio.contexts.templating.template_factory import (
    TemplateFactory,
    get_factory,
    register_cover_letter_templates,
    register_templates,
    resolve_template,
)


class BrokenTemplate(ProfessionalTemplate):
    def __init__(self, *args, **kwargs):
        raise RuntimeError("cannot build")


@pytest.mark.unit
def test_register_and_create():
    """Test registering a class and creating an instance."""
    factory = TemplateFactory("resume")
    factory.register_template_type("minimalist-ats", MinimalistATSTemplate)

    template = factory.create_template("minimalist-ats")

    assert isinstance(template, MinimalistATSTemplate)
    assert factory.has_template_type("minimalist-ats")
    assert factory.get_registered_types() == ["minimalist-ats"]


@pytest.mark.unit
def test_create_template_always_fresh():
    """Test that create_template replaces the cached instance."""
    factory = TemplateFactory("resume")
    factory.register_template_type("professional", ProfessionalTemplate)

    first = factory.create_template("professional")
    second = factory.create_template("professional")

    assert first is not second
    assert factory.get_template("professional") is second


@pytest.mark.unit
def test_get_template_lazy_and_cached():
    """Test that get_template creates on first use and then reuses."""
    factory = TemplateFactory("resume")
    factory.register_template_type("professional", ProfessionalTemplate)

    assert factory.get_all_templates() == []
    template = factory.get_template("professional")

    assert factory.get_template("professional") is template
    assert factory.get_all_templates() == [template]


@pytest.mark.unit
def test_get_template_unknown_returns_none():
    """Test that unknown types return None instead of raising."""
    assert TemplateFactory("resume").get_template("nope") is None


@pytest.mark.unit
def test_get_template_construction_failure_returns_none():
    """Test that a template whose constructor fails yields None."""
    factory = TemplateFactory("resume")
    factory.register_template_type("broken", BrokenTemplate)

    assert factory.get_template("broken") is None


@pytest.mark.unit
def test_create_unregistered_raises():
    """Test TemplateNotRegisteredError lists the registered types."""
    factory = TemplateFactory("resume")
    factory.register_template_type("professional", ProfessionalTemplate)

    with pytest.raises(TemplateNotRegisteredError, match="Registered types: professional"):
        factory.create_template("fancy")


@pytest.mark.unit
def test_register_rejects_wrong_kind_and_non_templates():
    """Test that only templates of the factory's kind can be registered."""
    factory = TemplateFactory("resume")

    with pytest.raises(TypeError, match="cover_letter template"):
        factory.register_template_type("modern", ModernCoverLetter)
    with pytest.raises(TypeError, match="not a BaseTemplate subclass"):
        factory.register_template_type("dict", dict)


@pytest.mark.unit
def test_remove_and_clear_keep_registrations():
    """Test that removing instances leaves the types registered."""
    factory = TemplateFactory("resume")
    factory.register_template_type("professional", ProfessionalTemplate)
    factory.register_template_type("minimalist-ats", MinimalistATSTemplate)
    factory.get_template("professional")
    factory.get_template("minimalist-ats")

    factory.remove_template("professional")
    assert [t.id for t in factory.get_all_templates()] == ["minimalist-ats"]

    factory.clear_templates()
    assert factory.get_all_templates() == []
    assert factory.get_registered_types() == ["professional", "minimalist-ats"]


@pytest.mark.unit
def test_get_templates_by_type():
    """Test filtering created instances by metadata id."""
    factory = TemplateFactory("resume")
    factory.register_template_type("professional", ProfessionalTemplate)
    factory.get_template("professional")

    assert len(factory.get_templates_by_type("professional")) == 1
    assert factory.get_templates_by_type("minimalist-ats") == []


@pytest.mark.unit
def test_default_template():
    """Test default selection: is_default first, else first registered."""
    factory = TemplateFactory("resume")
    with pytest.raises(TemplateNotRegisteredError):
        factory.get_default_template()

    factory.register_template_type("minimalist-ats", MinimalistATSTemplate)
    assert factory.get_default_template().id == "minimalist-ats"

    factory.register_template_type("professional", ProfessionalTemplate)
    assert factory.get_default_template().id == "professional"


@pytest.mark.unit
def test_register_templates_builtins():
    """Test registering the built-in resume templates."""
    factory = register_templates()

    assert factory.get_registered_types() == [
        "professional",
        "elegant-divider",
        "minimalist-ats",
        "modern-sidebar",
    ]
    assert len(factory.get_all_templates()) == 4
    assert {t.id for t in factory.get_ats_optimized_templates()} == set(
        factory.get_registered_types()
    )


@pytest.mark.unit
def test_register_templates_is_idempotent():
    """Test that a second registration is skipped and returns the same factory."""
    factory = register_templates()
    first = factory.get_template("professional")

    assert register_templates() is factory
    assert factory.get_template("professional") is first


@pytest.mark.unit
def test_register_cover_letter_templates():
    """Test registering the built-in cover-letter templates."""
    factory = register_cover_letter_templates()

    assert factory.get_registered_types() == ["standard", "modern", "professional"]
    assert factory.get_default_template().id == "standard"
    assert factory is not register_templates()


@pytest.mark.unit
def test_get_factory_unknown_kind():
    """Test that only resume and cover_letter factories exist."""
    assert get_factory("resume") is get_factory("resume")
    with pytest.raises(ValueError, match="Unknown document kind"):
        get_factory("invoice")


@pytest.mark.unit
def test_resolve_template():
    """Test lookup by id per document kind."""
    assert resolve_template("modern-sidebar").name == "Modern Sidebar"
    assert resolve_template("professional", kind="cover_letter").closing == "Respectfully,"

    with pytest.raises(TemplateNotRegisteredError):
        resolve_template("modern-sidebar", kind="cover_letter")


@pytest.mark.unit
def test_factory_state_is_reset_between_tests():
    """Test the autouse fixture leaves no registered factories behind."""
    assert template_factory._factories == {}
    assert template_factory._registered == {}
