"""
autoprop - constructor and accessor generation for partial types.
"""

from .codegen import (
    FieldDescriptor,
    GenerationRequest,
    derive_accessor_name,
    generate_from_declarations,
    generate_source,
)

__version__ = "0.1.0"

__all__ = [
    "FieldDescriptor",
    "GenerationRequest",
    "derive_accessor_name",
    "generate_from_declarations",
    "generate_source",
    "__version__",
]
