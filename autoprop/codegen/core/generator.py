"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from ...logging_config import get_logger
from .config import GeneratorConfig, load_config
from .emitter import IndentedEmitter
from .naming import accessor_shadows_field
from .schema import GenerationRequest
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or load_config()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'csharp')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.cs')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Subclasses should override this to provide their template directory.
        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    def create_emitter(self) -> IndentedEmitter:
        """Create a fresh emitter configured for this generator's code style."""
        return IndentedEmitter(
            indent_unit=self.config.indent_unit, line_ending=self.config.line_ending
        )

    @abstractmethod
    def generate(self, request: GenerationRequest) -> str:
        """
        Generate source for a single type.

        Args:
            request: Type and fields to generate members for

        Returns:
            Generated code, or an empty string when the request has no fields
        """
        pass

    def generate_all(self, requests: Iterable[GenerationRequest]) -> Dict[str, str]:
        """
        Generate source for many types.

        Args:
            requests: Requests in output order

        Returns:
            Dict mapping each request's file key to its generated code.
            Requests without fields are skipped.

        Raises:
            GeneratorError: If two requests map to the same file key
        """
        outputs: Dict[str, str] = {}
        owners: Dict[str, GenerationRequest] = {}
        for request in requests:
            if request.is_empty:
                logger.debug("Skipping %s: no fields", request.type_name)
                continue
            if request.file_key in owners:
                first = owners[request.file_key]
                raise GeneratorError(
                    f"Types {_qualified_name(first)} and {_qualified_name(request)} "
                    f"both generate {request.file_key}"
                )
            owners[request.file_key] = request
            outputs[request.file_key] = self.generate(request)
        return outputs

    def get_support_sources(self) -> Dict[str, str]:
        """
        Fixed sources emitted once per run alongside the generated types.

        Returns:
            Dict mapping file key to source text (empty by default)
        """
        return {}

    def validate_requests(self, requests: Iterable[GenerationRequest]) -> List[str]:
        """
        Check requests for problems the generated code would trip over.

        Nothing here stops generation; malformed text is emitted verbatim.
        Language generators may extend this with their own checks.

        Args:
            requests: Requests to validate

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        for request in requests:
            if not request.type_name:
                warnings.append("Type with empty name")

            if request.is_empty:
                warnings.append(f"Type '{request.type_name}' has no fields - skipped")
                continue

            for identifier in request.duplicate_identifiers():
                warnings.append(
                    f"Duplicate field '{identifier}' in {request.type_name} "
                    f"produces duplicate parameters and accessors"
                )

            for descriptor in request.fields:
                if not descriptor.identifier:
                    warnings.append(
                        f"Field with empty identifier in {request.type_name}"
                    )
                    continue

                if not descriptor.type_name:
                    warnings.append(
                        f"Field {request.type_name}.{descriptor.identifier} has no type"
                    )

                if accessor_shadows_field(descriptor.identifier):
                    warnings.append(
                        f"Accessor for {request.type_name}.{descriptor.identifier} "
                        f"has the same name as its backing field"
                    )

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply language-specific formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        return code

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with context.

        Args:
            template_name: Template file name
            context: Template variables

        Returns:
            Rendered content
        """
        return self.template_engine.render_template(template_name, context)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        files: Optional[Dict[str, str]] = None,
        warnings: Optional[List[str]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize generation result.

        Args:
            files: Generated code keyed by file key
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.files = files or {}
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @property
    def code(self) -> str:
        """All generated files concatenated in output order."""
        return "".join(self.files.values())

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls()
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(
    generator: CodeGenerator, requests: Iterable[GenerationRequest]
) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Args:
        generator: Code generator instance
        requests: Requests to generate code for

    Returns:
        GenerationResult with files, warnings, and metadata
    """
    requests = list(requests)

    try:
        warnings = generator.validate_requests(requests)

        files = {
            key: generator.format_code(code)
            for key, code in generator.generate_all(requests).items()
        }

        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "type_count": len(files),
            "field_count": sum(len(r.fields) for r in requests if not r.is_empty),
            "skipped": sum(1 for r in requests if r.is_empty),
        }

        return GenerationResult(files, warnings, metadata)

    except Exception as e:
        logger.error("Code generation failed: %s", e, exc_info=True)
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)


def _qualified_name(request: GenerationRequest) -> str:
    if request.has_namespace:
        return f"{request.namespace_name}.{request.type_name}"
    return request.type_name
