"""
Template Customization

Visual settings a user can adjust per template: colors, fonts, spacing and layout.
Customizations are immutable; merging partial overrides returns a new instance.

Examples:
    >>> base = TemplateCustomization()
    >>> navy = base.merged({"colors": {"primary": "#1e3a8a"}})
    >>> navy.colors.primary, navy.colors.secondary == base.colors.secondary
    ('#1e3a8a', True)
"""

import re
from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Dict, Mapping

SIDEBAR_POSITIONS = ("left", "right", "none")

HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def normalize_hex_color(value: str) -> str:
    """
    Validate a CSS hex color and expand the short form.

    Example:
        >>> normalize_hex_color("#fA0")
        '#ffAA00'

    Raises:
        ValueError: If value is not #rgb or #rrggbb
    """
    value = str(value).strip()
    if not HEX_COLOR.match(value):
        raise ValueError(f"Invalid color '{value}'. Use a hex color like #1e3a8a or #fff")
    if len(value) == 4:
        value = "#" + "".join(c * 2 for c in value[1:])
    return value


@dataclass(frozen=True)
class ColorScheme:
    primary: str = "#2563eb"
    secondary: str = "#4b5563"
    accent: str = "#ec4899"
    background: str = "#ffffff"
    text: str = "#1f2937"

    def __post_init__(self):
        for f in fields(self):
            object.__setattr__(self, f.name, normalize_hex_color(getattr(self, f.name)))


@dataclass(frozen=True)
class FontSettings:
    heading: str = "system-ui, sans-serif"
    body: str = "system-ui, sans-serif"


@dataclass(frozen=True)
class SpacingSettings:
    section_gap: str = "1.5rem"
    item_gap: str = "1rem"


@dataclass(frozen=True)
class LayoutSettings:
    max_width: str = "210mm"
    sidebar: str = "left"

    def __post_init__(self):
        if self.sidebar not in SIDEBAR_POSITIONS:
            raise ValueError(
                f"Invalid sidebar position '{self.sidebar}'. Use one of: {SIDEBAR_POSITIONS}"
            )


# Group name -> settings type
CUSTOMIZATION_GROUPS = {
    "colors": ColorScheme,
    "fonts": FontSettings,
    "spacing": SpacingSettings,
    "layout": LayoutSettings,
}


def _normalize_key(key: str) -> str:
    # Client payloads use camelCase (sectionGap, maxWidth)
    return "".join("_" + c.lower() if c.isupper() else c for c in key)


@dataclass(frozen=True)
class TemplateCustomization:
    """
    Complete visual customization of a template.

    Attributes:
        colors: Primary, secondary and accent colors plus background and text
        fonts: Heading and body font families
        spacing: Gap between sections and between items within a section
        layout: Page max width and sidebar position (left, right or none)
    """

    colors: ColorScheme = field(default_factory=ColorScheme)
    fonts: FontSettings = field(default_factory=FontSettings)
    spacing: SpacingSettings = field(default_factory=SpacingSettings)
    layout: LayoutSettings = field(default_factory=LayoutSettings)

    def merged(self, overrides: Mapping[str, Any]) -> "TemplateCustomization":
        """
        Return a copy with nested partial overrides applied group by group.

        Args:
            overrides: Mapping like {"colors": {"primary": "#000"}, "layout": {"sidebar": "none"}}

        Raises:
            ValueError: Unknown group or key
        """
        updates = {}
        for group_name, group_overrides in (overrides or {}).items():
            group_name = _normalize_key(group_name)
            if group_name not in CUSTOMIZATION_GROUPS:
                raise ValueError(
                    f"Unknown customization group '{group_name}'. "
                    f"Available groups: {list(CUSTOMIZATION_GROUPS)}"
                )
            if not group_overrides:
                continue

            current = getattr(self, group_name)
            allowed = {f.name for f in fields(current)}
            changes = {}
            for key, value in group_overrides.items():
                key = _normalize_key(key)
                if key not in allowed:
                    raise ValueError(
                        f"Unknown {group_name} setting '{key}'. Available: {sorted(allowed)}"
                    )
                changes[key] = str(value)
            updates[group_name] = replace(current, **changes)

        return replace(self, **updates)

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TemplateCustomization":
        """Build from a (possibly partial) nested mapping on top of the global defaults."""
        return cls().merged(data)
