"""
Template engine wrapper for code generation.

Renders the fixed support sources a generator ships alongside its output
from Jinja2 templates kept next to the generator.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import (
    DictLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
)
from jinja2.exceptions import TemplateError as Jinja2TemplateError


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Jinja2 environment preconfigured for emitting source text."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files; without one,
                every lookup fails with TemplateError
        """
        self.template_dir = template_dir

        if template_dir and template_dir.exists():
            loader = FileSystemLoader(str(template_dir))
        else:
            loader = DictLoader({})

        # Source text is emitted verbatim, so no HTML escaping
        self._env = Environment(
            loader=loader,
            autoescape=False,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self._env.filters["attribute_class"] = attribute_class_name

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content

        Raises:
            TemplateError: If the template is missing or fails to render
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except TemplateNotFound as e:
            raise TemplateError(f"Template not found: {template_name}") from e
        except Jinja2TemplateError as e:
            raise TemplateError(
                f"Failed to render template {template_name}: {e}"
            ) from e


def attribute_class_name(value: str) -> str:
    """Append the ``Attribute`` suffix C# expects on attribute classes."""
    value = str(value)
    return value if value.endswith("Attribute") else f"{value}Attribute"


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine over ``template_dir``."""
    return TemplateEngine(template_dir)
