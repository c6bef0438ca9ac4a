"""
Autoprop Code Generation Module

Generates constructors and accessors for declared backing fields.
"""

from typing import Any, Dict, List, Optional, Union

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    list_all_language_info,
    list_supported_languages,
)
from .core.generator import (
    CodeGenerator,
    GenerationResult,
    GeneratorError,
    generate_code,
)
from .core.schema import (
    FieldDescriptor,
    GenerationRequest,
    SchemaError,
    load_requests,
)
from .core.naming import derive_accessor_name
from .core.emitter import IndentedEmitter
from .core.config import ConfigError, ConfigManager, GeneratorConfig, load_config
from .host import (
    DeclarationError,
    FieldDeclaration,
    SourceGeneratorHost,
    TypeDeclaration,
    is_eligible,
    load_declarations,
)


def generate_source(
    namespace_name: str,
    type_name: str,
    fields: List[Union[FieldDescriptor, tuple]],
    language: str = "csharp",
    config: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None,
) -> str:
    """
    Generate source for one type.

    Args:
        namespace_name: Enclosing namespace, or "" for none
        type_name: Name of the partial type
        fields: FieldDescriptor values or (identifier, type_name) pairs
        language: Target language name
        config: Generator configuration

    Returns:
        Generated code ("" when there are no fields)
    """
    request = GenerationRequest(namespace_name, type_name, tuple(fields))
    return get_generator(language, config).generate(request)


def generate_from_declarations(
    data: Any,
    language: str = "csharp",
    config: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None,
) -> GenerationResult:
    """
    Generate sources from a parsed declaration document.

    Args:
        data: ``{"types": [...]}`` declaration document
        language: Target language name
        config: Generator configuration

    Returns:
        GenerationResult with files keyed by file name
    """
    generator = get_generator(language, config)
    try:
        declarations = load_declarations(data, generator.config.type_kind)
    except DeclarationError as e:
        return GenerationResult.error(f"Invalid declarations: {e}", exception=e)

    return SourceGeneratorHost(generator).build(declarations)


__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "FieldDescriptor",
    "GenerationRequest",
    "SchemaError",
    "IndentedEmitter",
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "DeclarationError",
    "FieldDeclaration",
    "TypeDeclaration",
    "SourceGeneratorHost",
    "derive_accessor_name",
    "generate_code",
    "generate_source",
    "generate_from_declarations",
    "get_generator",
    "get_language_info",
    "is_eligible",
    "list_all_language_info",
    "list_supported_languages",
    "load_config",
    "load_declarations",
    "load_requests",
]
