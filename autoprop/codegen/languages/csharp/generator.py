"""
C# code generator implementation.

Generates a partial type with a field-initializing constructor and one
read/write accessor per backing field.
"""

from pathlib import Path
from typing import Dict, Iterable, List, Optional

from ....logging_config import get_logger
from ...core.emitter import IndentedEmitter
from ...core.generator import CodeGenerator, GeneratorError
from ...core.naming import derive_accessor_name
from ...core.schema import FILE_KEY_SUFFIX, GenerationRequest
from ...core.templates import TemplateError, attribute_class_name
from .naming import accessor_collides_with_type, is_reserved

logger = get_logger(__name__)

ATTRIBUTE_TEMPLATE = "attribute.cs.j2"


class CSharpGenerator(CodeGenerator):
    """Code generator for C# partial classes and structs."""

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "csharp"

    @property
    def file_extension(self) -> str:
        """Return C# file extension."""
        return self.config.file_extension

    def get_template_directory(self) -> Optional[Path]:
        """Return the C# templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    def generate(self, request: GenerationRequest) -> str:
        """Generate the partial type for a single request."""
        if request.is_empty:
            logger.debug("No fields for %s; nothing generated", request.type_name)
            return ""

        out = self.create_emitter()

        if request.has_namespace:
            out.append_line(f"namespace {request.namespace_name}")
            out.append_line("{")

        with out.indent(request.has_namespace):
            out.append_line(f"partial {request.type_kind} {request.type_name}")
            out.append_line("{")

            with out.indent():
                self._emit_constructor(out, request)
                self._emit_accessors(out, request)

            out.append_line("}")

        if request.has_namespace:
            out.append_line("}")

        logger.debug(
            "Generated %s with %d field(s)", request.type_name, len(request.fields)
        )
        return out.render()

    def _emit_constructor(self, out: IndentedEmitter, request: GenerationRequest):
        out.append(f"public {request.type_name}(", indent=True)
        out.append(
            ", ".join(f"{f.type_name} {f.identifier}" for f in request.fields)
        )
        out.append_line(")", indent=False)
        out.append_line("{")

        with out.indent():
            for descriptor in request.fields:
                out.append_line(
                    f"this.{descriptor.identifier} = {descriptor.identifier};"
                )

        out.append_line("}")

    def _emit_accessors(self, out: IndentedEmitter, request: GenerationRequest):
        for descriptor in request.fields:
            name = descriptor.identifier
            out.append_line(
                f"public {descriptor.type_name} {derive_accessor_name(name)} "
                f"{{ get => {name}; set => {name} = value; }}"
            )

    def get_support_sources(self) -> Dict[str, str]:
        """Return the marker attribute definition, unless disabled in config."""
        if not self.config.emit_attribute:
            return {}

        attribute_class = attribute_class_name(self.config.attribute_name)
        return {f"{attribute_class}{FILE_KEY_SUFFIX}": self.render_attribute_source()}

    def render_attribute_source(self) -> str:
        """Render the marker attribute definition the host injects once."""
        try:
            return self.render_template(
                ATTRIBUTE_TEMPLATE,
                {
                    "namespace": self.config.attribute_namespace,
                    "attribute_name": self.config.attribute_name,
                },
            )
        except TemplateError as e:
            raise GeneratorError(f"Cannot render marker attribute: {e}") from e

    def validate_requests(self, requests: Iterable[GenerationRequest]) -> List[str]:
        """Validate requests for C# generation."""
        requests = list(requests)
        warnings = super().validate_requests(requests)

        for request in requests:
            if is_reserved(request.type_name):
                warnings.append(f"Type name '{request.type_name}' is a C# keyword")

            for descriptor in request.fields:
                accessor = derive_accessor_name(descriptor.identifier)
                if is_reserved(descriptor.identifier):
                    warnings.append(
                        f"Field {request.type_name}.{descriptor.identifier} "
                        f"is a C# keyword"
                    )
                if accessor_collides_with_type(
                    descriptor.identifier, request.type_name
                ):
                    warnings.append(
                        f"Accessor {request.type_name}.{accessor} has the same "
                        f"name as its enclosing type"
                    )

        return warnings
