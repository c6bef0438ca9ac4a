"""
Host-side discovery for code generation.

Stands in for a compiler front-end: takes type declarations described as
plain data, decides which ones opted in through the marker attribute, turns
them into ``GenerationRequest`` values and collects the generated sources
keyed by output file name.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Set, Tuple

from ..logging_config import get_logger
from .core.generator import (
    CodeGenerator,
    GenerationResult,
    GeneratorError,
    generate_code,
)
from .core.schema import DEFAULT_TYPE_KIND, FieldDescriptor, GenerationRequest

logger = get_logger(__name__)

PARTIAL_MODIFIER = "partial"
ATTRIBUTE_SUFFIX = "Attribute"


class DeclarationError(Exception):
    """Exception raised for malformed type declarations."""

    pass


@dataclass(frozen=True)
class FieldDeclaration:
    """One field declaration; ``int a, b;`` declares two identifiers."""

    type_name: str
    identifiers: Tuple[str, ...]

    def to_descriptors(self) -> List[FieldDescriptor]:
        return [FieldDescriptor(name, self.type_name) for name in self.identifiers]


@dataclass(frozen=True)
class TypeDeclaration:
    """A type declaration as seen by the host."""

    name: str
    namespace: str = ""
    kind: str = DEFAULT_TYPE_KIND
    modifiers: Tuple[str, ...] = ()
    attributes: Tuple[str, ...] = ()
    fields: Tuple[FieldDeclaration, ...] = field(default_factory=tuple)

    @property
    def is_partial(self) -> bool:
        return PARTIAL_MODIFIER in self.modifiers


def marker_spellings(attribute_name: str, attribute_namespace: str = "") -> Set[str]:
    """
    All textual spellings that refer to the marker attribute.

    ``AutoProp`` in namespace ``System`` matches ``AutoProp``,
    ``AutoPropAttribute``, ``System.AutoProp`` and ``System.AutoPropAttribute``.
    """
    short = attribute_name
    if short.endswith(ATTRIBUTE_SUFFIX) and short != ATTRIBUTE_SUFFIX:
        short = short[: -len(ATTRIBUTE_SUFFIX)]

    names = {short, f"{short}{ATTRIBUTE_SUFFIX}"}
    if attribute_namespace:
        names |= {f"{attribute_namespace}.{name}" for name in names}
    return names


def make_eligibility_predicate(
    attribute_name: str = "AutoProp", attribute_namespace: str = "System"
) -> Callable[[TypeDeclaration], bool]:
    """Build a predicate accepting partial types that carry the marker."""
    spellings = marker_spellings(attribute_name, attribute_namespace)

    def is_eligible(declaration: TypeDeclaration) -> bool:
        if not any(attr in spellings for attr in declaration.attributes):
            return False
        return declaration.is_partial

    return is_eligible


is_eligible = make_eligibility_predicate()


def to_request(
    declaration: TypeDeclaration, default_namespace: str = ""
) -> GenerationRequest:
    """Convert a declaration into a generation request, keeping field order."""
    descriptors = []
    for field_decl in declaration.fields:
        descriptors.extend(field_decl.to_descriptors())

    return GenerationRequest(
        namespace_name=declaration.namespace or default_namespace,
        type_name=declaration.name,
        fields=tuple(descriptors),
        type_kind=declaration.kind,
    )


def _string_tuple(value: Any, what: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise DeclarationError(f"{what} must be a string or a list of strings")
    return tuple(value)


def parse_field_declaration(data: Dict[str, Any]) -> FieldDeclaration:
    """
    Parse a field declaration.

    Accepts ``{"type": "int", "names": ["a", "b"]}`` or the single-variable
    form ``{"type": "int", "name": "a"}``.
    """
    if not isinstance(data, dict):
        raise DeclarationError(f"Field declaration must be an object: {data!r}")

    type_name = data.get("type")
    if not isinstance(type_name, str):
        raise DeclarationError(f"Field declaration has no type: {data}")

    identifiers = _string_tuple(data.get("names", data.get("name")), "Field names")
    if not identifiers:
        raise DeclarationError(f"Field of type {type_name} declares no names")

    return FieldDeclaration(type_name=type_name, identifiers=identifiers)


def parse_type_declaration(
    data: Dict[str, Any], default_kind: str = DEFAULT_TYPE_KIND
) -> TypeDeclaration:
    """Parse a single type declaration dictionary."""
    if not isinstance(data, dict):
        raise DeclarationError(f"Type declaration must be an object: {data!r}")

    name = data.get("name")
    if not isinstance(name, str) or not name:
        raise DeclarationError(f"Type declaration has no name: {data}")

    namespace = data.get("namespace") or ""
    if not isinstance(namespace, str):
        raise DeclarationError(f"Namespace of {name} must be a string")

    raw_fields = data.get("fields", [])
    if not isinstance(raw_fields, list):
        raise DeclarationError(f"Fields of {name} must be a list")

    return TypeDeclaration(
        name=name,
        namespace=namespace,
        kind=data.get("kind") or default_kind,
        modifiers=_string_tuple(data.get("modifiers"), f"Modifiers of {name}"),
        attributes=_string_tuple(data.get("attributes"), f"Attributes of {name}"),
        fields=tuple(parse_field_declaration(item) for item in raw_fields),
    )


def load_declarations(
    data: Any, default_kind: str = DEFAULT_TYPE_KIND
) -> List[TypeDeclaration]:
    """
    Load declarations from parsed JSON.

    Args:
        data: ``{"types": [...]}`` or a bare list of type declarations
        default_kind: Kind for declarations that don't specify one

    Returns:
        Declarations in input order

    Raises:
        DeclarationError: If the input is malformed
    """
    if isinstance(data, dict):
        if "types" not in data:
            raise DeclarationError("Declaration document has no 'types' list")
        data = data["types"]

    if not isinstance(data, list):
        raise DeclarationError("Declarations must be a list")

    return [parse_type_declaration(item, default_kind) for item in data]


class SourceGeneratorHost:
    """Drives a generator over a set of declarations."""

    def __init__(
        self,
        generator: CodeGenerator,
        predicate: Optional[Callable[[TypeDeclaration], bool]] = None,
    ):
        """
        Initialize the host.

        Args:
            generator: Generator producing the type sources
            predicate: Eligibility check; defaults to the marker attribute
                configured on the generator
        """
        self.generator = generator
        config = generator.config
        self.predicate = predicate or make_eligibility_predicate(
            config.attribute_name, config.attribute_namespace
        )
        self._support_registered = False

    def file_name(self, file_key: str) -> str:
        return f"{file_key}{self.generator.file_extension}"

    def collect_requests(
        self, declarations: Iterable[TypeDeclaration]
    ) -> Tuple[List[GenerationRequest], List[str]]:
        """
        Filter eligible declarations and convert them.

        Returns:
            Requests for eligible types with fields, and the names of
            eligible types skipped for having none
        """
        requests = []
        skipped = []
        default_namespace = self.generator.config.default_namespace

        for declaration in declarations:
            if not self.predicate(declaration):
                logger.debug("Declaration %s is not opted in", declaration.name)
                continue

            request = to_request(declaration, default_namespace)
            if request.is_empty:
                logger.warning("Skipping %s: no fields to expose", declaration.name)
                skipped.append(declaration.name)
                continue

            requests.append(request)

        return requests, skipped

    def register_support_sources(self) -> Dict[str, str]:
        """
        Emit the generator's fixed sources on the first call only.

        Returns:
            File name to source text, empty on every later call
        """
        if self._support_registered:
            return {}

        sources = {
            self.file_name(key): text
            for key, text in self.generator.get_support_sources().items()
        }
        self._support_registered = True
        return sources

    def run(self, declarations: Iterable[TypeDeclaration]) -> Dict[str, str]:
        """
        Generate sources for all eligible declarations.

        Returns:
            File name to source text, support sources first

        Raises:
            GeneratorError: If two eligible types map to the same file
        """
        requests, _ = self.collect_requests(declarations)
        generated = self.generator.generate_all(requests)

        outputs = self.register_support_sources()
        for key, code in generated.items():
            name = self.file_name(key)
            logger.info("Generated %s", name)
            outputs[name] = code

        return outputs

    def build(self, declarations: Iterable[TypeDeclaration]) -> GenerationResult:
        """
        Like ``run`` but reports failures and warnings in a GenerationResult.

        Returns:
            GenerationResult whose files are keyed by file name
        """
        requests, skipped = self.collect_requests(declarations)
        result = generate_code(self.generator, requests)
        if not result.success:
            return result

        try:
            files = self.register_support_sources()
        except GeneratorError as e:
            logger.error("Support sources failed: %s", e)
            return GenerationResult.error(str(e), exception=e)

        for key, code in result.files.items():
            files[self.file_name(key)] = code

        result.files = files
        result.warnings.extend(
            f"Type '{name}' has no fields - skipped" for name in skipped
        )
        result.metadata["skipped"] += len(skipped)
        return result
