"""
Naming utilities for accessor generation.

Derives the public accessor name exposed for a backing field.
"""


def derive_accessor_name(identifier: str) -> str:
    """
    Derive the accessor name for a field identifier.

    Rules, first match wins:

    1. A leading underscore means the name is already public-shaped and is
       returned unchanged (``_writer`` -> ``_writer``).
    2. A lowercase first character is upper-cased (``writer`` -> ``Writer``).
    3. Anything else has its first character passed through ``str.upper``,
       which leaves upper-case and non-alphabetic characters as they are.

    Only the first character is examined; no collision checking is done
    against other fields.

    Args:
        identifier: Field identifier as declared

    Returns:
        Accessor name
    """
    if not identifier:
        return identifier

    if identifier[0] == "_":
        return identifier

    # Rules 2 and 3 both reduce to upper-casing the first character.
    return identifier[0].upper() + identifier[1:]


def accessor_shadows_field(identifier: str) -> bool:
    """Check if the derived accessor would reuse the backing field's name."""
    return bool(identifier) and derive_accessor_name(identifier) == identifier
