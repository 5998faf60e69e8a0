"""
Templating Registries

Centralized registry for loading and caching the Jinja2 templates behind each
document template's HTML and LaTeX output.
"""

import os
import re
from pathlib import Path
from typing import Dict, Tuple

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound

from folio.utils.text_processing import escape_latex, split_paragraphs
from folio.utils.timestamp import format_date_range, format_long_date, format_resume_date

load_dotenv()
TYPES_PATH = Path(os.getenv("TEMPLATE_TYPES_PATH", Path(__file__).parent / "types"))

# Output format -> template file extension
TEMPLATE_FORMATS = {"html": "html", "latex": "tex"}


def _hex_color(value: str) -> str:
    """Strip the leading '#' so colors can feed xcolor's HTML model."""
    return str(value).lstrip("#").upper()


def _first_font(value: str) -> str:
    """First family of a CSS font stack (e.g. 'Lato, sans-serif' -> 'Lato')."""
    return str(value).split(",")[0].strip().strip("'\"")


def _latex_length(value: str) -> str:
    """
    Convert a CSS length to a LaTeX length (rem/em -> em, px -> pt).

    Example:
        >>> _latex_length("1.5rem")
        '1.5em'
    """
    match = re.fullmatch(r"\s*([\d.]+)\s*(rem|em|px|pt|mm|cm|in)?\s*", str(value))
    if not match:
        return "1em"
    number, unit = match.groups()
    if unit in (None, "rem", "em"):
        return f"{number}em"
    if unit == "px":
        return f"{float(number) * 0.75:g}pt"
    return f"{number}{unit}"


def _shared_filters() -> Dict[str, object]:
    return {
        "date": format_resume_date,
        "date_range": format_date_range,
        "long_date": format_long_date,
        "paragraphs": split_paragraphs,
        "hex": _hex_color,
        "first_font": _first_font,
    }


class TemplateRegistry:
    """
    Registry for loading and caching Jinja2 templates for document output.

    Templates are stored in types/{kind}/{template_id}/template.{html,tex}.jinja.
    HTML templates use standard Jinja2 delimiters with autoescaping. LaTeX templates
    use custom delimiters to avoid conflicts with LaTeX syntax:
    - Variable: <<< var >>>
    - Block: <%% block %%>
    - Comment: <# comment #>
    """

    def __init__(self, types_base_path: Path = None):
        """
        Initialize the template registry.

        Args:
            types_base_path: Base path for template directories. Defaults to
                           TEMPLATE_TYPES_PATH from environment
        """
        if types_base_path is None:
            types_base_path = TYPES_PATH

        self.types_base_path = Path(types_base_path)
        self._cache: Dict[Tuple[str, str], Template] = {}

        loader = FileSystemLoader(str(self.types_base_path))

        self.html_env = Environment(
            loader=loader,
            undefined=StrictUndefined,
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.html_env.filters.update(_shared_filters())

        # Custom delimiters avoid clashing with LaTeX braces
        self.latex_env = Environment(
            loader=loader,
            undefined=StrictUndefined,
            variable_start_string="<<<",
            variable_end_string=">>>",
            block_start_string="<%%",
            block_end_string="%%>",
            comment_start_string="<#",
            comment_end_string="#>",
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.latex_env.filters.update(_shared_filters())
        self.latex_env.filters["latex"] = escape_latex
        self.latex_env.filters["latex_length"] = _latex_length

    def _env_for(self, fmt: str) -> Environment:
        if fmt not in TEMPLATE_FORMATS:
            raise ValueError(
                f"Unknown template format '{fmt}'. Available: {list(TEMPLATE_FORMATS)}"
            )
        return self.html_env if fmt == "html" else self.latex_env

    def _relative_path(self, template_id: str, fmt: str) -> str:
        return f"{template_id}/template.{TEMPLATE_FORMATS[fmt]}.jinja"

    def get_template(self, template_id: str, fmt: str = "html") -> Template:
        """
        Get a template, loading and caching it if necessary.

        Args:
            template_id: Template directory relative to the types path (e.g., 'resume/professional')
            fmt: "html" or "latex"

        Returns:
            Jinja2 Template object

        Raises:
            ValueError: If fmt is not a known format
            TemplateNotFound: If template file doesn't exist
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        env = self._env_for(fmt)

        key = (template_id, fmt)
        if key in self._cache:
            return self._cache[key]

        template_path = self._relative_path(template_id, fmt)

        try:
            template = env.get_template(template_path)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template not found for '{template_id}' ({fmt}) at "
                f"{self.types_base_path / template_path}"
            ) from e

        self._cache[key] = template
        return template

    def get_template_path(self, template_id: str, fmt: str = "html") -> Path:
        """
        Get the file path for a template.

        Raises:
            ValueError: If fmt is not a known format
        """
        self._env_for(fmt)
        return self.types_base_path / self._relative_path(template_id, fmt)

    def has_template(self, template_id: str, fmt: str = "html") -> bool:
        """Check whether a template file exists for the given format."""
        if fmt not in TEMPLATE_FORMATS:
            return False
        return self.get_template_path(template_id, fmt).exists()

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, template_id: str, fmt: str = "html") -> bool:
        """Check if a template is in the cache."""
        return (template_id, fmt) in self._cache

    def get_template_source(self, template_id: str, fmt: str = "html") -> str:
        """
        Get the raw template source.

        Useful for showing expected structure in error messages.
        """
        template_path = self.get_template_path(template_id, fmt)

        if not template_path.exists():
            return f"Template not found: {template_path}"

        return template_path.read_text()


_default_registry: TemplateRegistry = None


def get_template_registry() -> TemplateRegistry:
    """Process-wide registry shared by all template implementations."""
    global _default_registry
    if _default_registry is None:
        _default_registry = TemplateRegistry()
    return _default_registry
