"""Variable type names and their aliases.

Type names are what rule strings and builders declare (``type=port``).
Aliases resolve to a canonical :class:`VariableType`; anything else is
reported as an unknown type when a value has to be validated.
"""

from __future__ import annotations

from enum import StrEnum


class VariableType(StrEnum):
    """Canonical variable types understood by the validator."""

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOLEAN = "boolean"
    PORT = "port"
    URL = "url"
    EMAIL = "email"


TYPE_ALIASES: dict[str, VariableType] = {
    "": VariableType.STRING,
    "str": VariableType.STRING,
    "integer": VariableType.INT,
    "bool": VariableType.BOOLEAN,
}

ZERO_VALUES: dict[VariableType, object] = {
    VariableType.STRING: "",
    VariableType.INT: 0,
    VariableType.FLOAT: 0.0,
    VariableType.BOOLEAN: False,
    VariableType.PORT: 0,
    VariableType.URL: "",
    VariableType.EMAIL: "",
}


def resolve_type(name: str) -> VariableType | None:
    """Return the canonical type for *name*, or None if it is unknown.

    Examples:
        >>> resolve_type("integer")
        <VariableType.INT: 'int'>
        >>> resolve_type("") is VariableType.STRING
        True
        >>> resolve_type("uuid") is None
        True
    """
    alias = TYPE_ALIASES.get(name)
    if alias is not None:
        return alias
    try:
        return VariableType(name)
    except ValueError:
        return None


def zero_value(name: str) -> object:
    """Zero value for a type name (``None`` when the type is unknown)."""
    vtype = resolve_type(name)
    if vtype is None:
        return None
    return ZERO_VALUES[vtype]
