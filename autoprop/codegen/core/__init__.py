"""
Core code generation components.

Provides base classes and utilities used by all language generators.
"""

from .generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .schema import (
    FieldDescriptor,
    GenerationRequest,
    SchemaError,
    load_requests,
)
from .naming import derive_accessor_name, accessor_shadows_field
from .emitter import IndentedEmitter
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    # Model
    "FieldDescriptor",
    "GenerationRequest",
    "SchemaError",
    "load_requests",
    # Naming
    "derive_accessor_name",
    "accessor_shadows_field",
    # Text emission
    "IndentedEmitter",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
