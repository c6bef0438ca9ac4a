"""
Core model for code generation.

Describes a type and its stored fields independently of any host syntax
tree. Generators consume ``GenerationRequest`` values built here.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

DEFAULT_TYPE_KIND = "class"
FILE_KEY_SUFFIX = ".g"


class SchemaError(Exception):
    """Exception raised when model input has the wrong shape."""

    pass


@dataclass(frozen=True)
class FieldDescriptor:
    """A stored field to be exposed through an accessor."""

    identifier: str
    type_name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldDescriptor":
        """
        Build a field descriptor from a dictionary.

        Accepts ``{"identifier": ..., "type": ...}``; ``name`` and
        ``type_name`` are accepted as alternative keys.

        Raises:
            SchemaError: If a key is missing or a value is not a string
        """
        if not isinstance(data, dict):
            raise SchemaError(
                f"Field entry must be an object, got {type(data).__name__}"
            )

        identifier = data.get("identifier", data.get("name"))
        type_name = data.get("type", data.get("type_name"))

        if identifier is None:
            raise SchemaError(f"Field entry has no identifier: {data}")
        if type_name is None:
            raise SchemaError(f"Field '{identifier}' has no type")
        if not isinstance(identifier, str) or not isinstance(type_name, str):
            raise SchemaError(f"Field identifier and type must be strings: {data}")

        return cls(identifier=identifier, type_name=type_name)


@dataclass(frozen=True)
class GenerationRequest:
    """Unit of work for one generated type."""

    namespace_name: str
    type_name: str
    fields: Tuple[FieldDescriptor, ...] = field(default_factory=tuple)
    type_kind: str = DEFAULT_TYPE_KIND

    def __post_init__(self):
        # Fields may be given as (identifier, type_name) pairs
        descriptors = tuple(
            f if isinstance(f, FieldDescriptor) else FieldDescriptor(*f)
            for f in self.fields
        )
        object.__setattr__(self, "fields", descriptors)

    @property
    def has_namespace(self) -> bool:
        """Whether the type is wrapped in a namespace block."""
        return bool(self.namespace_name)

    @property
    def is_empty(self) -> bool:
        """Whether there is nothing to generate."""
        return not self.fields

    @property
    def file_key(self) -> str:
        """Logical output name; the caller appends the file extension."""
        return f"{self.type_name}{FILE_KEY_SUFFIX}"

    def duplicate_identifiers(self) -> List[str]:
        """Identifiers that appear more than once, in first-seen order."""
        seen = set()
        duplicates = []
        for descriptor in self.fields:
            identifier = descriptor.identifier
            if identifier in seen and identifier not in duplicates:
                duplicates.append(identifier)
            seen.add(identifier)
        return duplicates

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], default_kind: str = DEFAULT_TYPE_KIND
    ) -> "GenerationRequest":
        """
        Build a request from a dictionary.

        Expected shape::

            {
                "namespace": "MyNamespace",
                "name": "Book",
                "kind": "class",
                "fields": [{"identifier": "writer", "type": "string"}]
            }

        Args:
            data: Request dictionary
            default_kind: Kind used when ``kind`` is absent

        Returns:
            GenerationRequest

        Raises:
            SchemaError: If required keys are missing or malformed
        """
        if not isinstance(data, dict):
            raise SchemaError(f"Request must be an object, got {type(data).__name__}")

        type_name = data.get("name", data.get("type_name"))
        if not isinstance(type_name, str):
            raise SchemaError(f"Request has no valid type name: {data}")

        namespace_name = data.get("namespace") or ""
        if not isinstance(namespace_name, str):
            raise SchemaError(f"Namespace of '{type_name}' must be a string")

        raw_fields = data.get("fields", [])
        if not isinstance(raw_fields, list):
            raise SchemaError(f"Fields of '{type_name}' must be a list")

        return cls(
            namespace_name=namespace_name,
            type_name=type_name,
            fields=tuple(FieldDescriptor.from_dict(item) for item in raw_fields),
            type_kind=data.get("kind") or default_kind,
        )


def load_requests(
    data: Any, default_kind: str = DEFAULT_TYPE_KIND
) -> List[GenerationRequest]:
    """
    Convert a list (or ``{"types": [...]}`` object) into requests.

    Raises:
        SchemaError: If the container or any entry is malformed
    """
    if isinstance(data, dict):
        data = data.get("types", [])
    if not isinstance(data, list):
        raise SchemaError("Expected a list of type requests")
    return [GenerationRequest.from_dict(item, default_kind) for item in data]
