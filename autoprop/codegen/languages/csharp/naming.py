"""
C#-specific naming checks.

Used to warn about accessor names that C# would reject.
"""

from ...core.naming import derive_accessor_name

# C# reserved keywords (contextual keywords are legal member names)
CSHARP_RESERVED_WORDS = {
    "abstract",
    "as",
    "base",
    "bool",
    "break",
    "byte",
    "case",
    "catch",
    "char",
    "checked",
    "class",
    "const",
    "continue",
    "decimal",
    "default",
    "delegate",
    "do",
    "double",
    "else",
    "enum",
    "event",
    "explicit",
    "extern",
    "false",
    "finally",
    "fixed",
    "float",
    "for",
    "foreach",
    "goto",
    "if",
    "implicit",
    "in",
    "int",
    "interface",
    "internal",
    "is",
    "lock",
    "long",
    "namespace",
    "new",
    "null",
    "object",
    "operator",
    "out",
    "override",
    "params",
    "private",
    "protected",
    "public",
    "readonly",
    "ref",
    "return",
    "sbyte",
    "sealed",
    "short",
    "sizeof",
    "stackalloc",
    "static",
    "string",
    "struct",
    "switch",
    "this",
    "throw",
    "true",
    "try",
    "typeof",
    "uint",
    "ulong",
    "unchecked",
    "unsafe",
    "ushort",
    "using",
    "virtual",
    "void",
    "volatile",
    "while",
}


def is_reserved(name: str) -> bool:
    """Check if a name is a C# keyword and needs an ``@`` prefix."""
    return name in CSHARP_RESERVED_WORDS


def accessor_collides_with_type(identifier: str, type_name: str) -> bool:
    """Member names may not equal their enclosing type's name in C#."""
    return derive_accessor_name(identifier) == type_name
