"""
C# code generator module.

Generates partial classes and structs with a constructor and
accessors for each backing field.
"""

from typing import Any, Dict, Optional

from ...core.config import load_config
from .generator import CSharpGenerator
from .naming import CSHARP_RESERVED_WORDS, is_reserved

__all__ = [
    "CSharpGenerator",
    "CSHARP_RESERVED_WORDS",
    "is_reserved",
    "create_csharp_generator",
]


def create_csharp_generator(config: Optional[Dict[str, Any]] = None) -> CSharpGenerator:
    """
    Create a C# generator.

    Args:
        config: Overrides applied on top of the default configuration

    Returns:
        Configured CSharpGenerator instance
    """
    return CSharpGenerator(load_config(custom_config=config))

