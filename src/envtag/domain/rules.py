"""Declarative rule strings: parse ``name=APP_PORT, type=port, default=80``.

A rule is a comma-separated list of ``key[=value]`` tokens:

- ``name=<KEY>``: environment variable to read
- ``type=<TypeName>``: a :class:`VariableType` name or alias
- ``default=<literal>``: used when the variable is absent or empty
- ``optional``: flag, zero value instead of an error when absent
- ``oneof=<v1>|<v2>|...``: allowed values
- ``desc=<text>``: free-text description (may not contain commas)

``default`` and ``oneof`` literals are parsed with the declared type, so
the resulting :class:`Variable` holds typed values.  An empty rule or
``-`` opts the field out and yields a variable with no name.
"""

from __future__ import annotations

from typing import Any

from envtag.domain.errors import EnvError, InvalidTagError, UnknownTypeError
from envtag.domain.types import VariableType
from envtag.domain.validation import validate_type
from envtag.domain.variable import UNSET, Variable

OPT_OUT = "-"

_VALUE_KEYS = frozenset({"name", "type", "default", "oneof", "desc"})
_FLAG_KEYS = frozenset({"optional"})


def parse_rule(rule: str) -> dict[str, str | None]:
    """Split a rule string into a ``{key: value}`` dict.

    Flags map to None.  Raises InvalidTagError for unknown keys, empty
    tokens, missing or unexpected values, and duplicate keys.

    Examples:
        >>> parse_rule("name=APP_ENV, oneof=dev|prod, optional")
        {'name': 'APP_ENV', 'oneof': 'dev|prod', 'optional': None}
    """
    tokens: dict[str, str | None] = {}
    for raw_token in rule.split(","):
        token = raw_token.strip()
        if not token:
            raise InvalidTagError(f"empty token in {rule!r}")

        key, sep, value = token.partition("=")
        key = key.strip()
        if key in tokens:
            raise InvalidTagError(f"duplicate key {key!r}")

        if key in _FLAG_KEYS:
            if sep:
                raise InvalidTagError(f"{key!r} is a flag and takes no value")
            tokens[key] = None
        elif key in _VALUE_KEYS:
            if not sep:
                raise InvalidTagError(f"{key!r} requires a value")
            tokens[key] = value.strip()
        else:
            raise InvalidTagError(f"unknown key {key!r}")
    return tokens


def coerce_literal(type_name: str, literal: str, key: str) -> Any:
    """Parse a rule literal (a default or a choice) with the declared type."""
    try:
        return validate_type(type_name, literal)
    except UnknownTypeError:
        raise
    except EnvError as exc:
        msg = f"{key} {literal!r} does not match type {type_name!r}: {exc}"
        raise InvalidTagError(msg) from exc


def variable_from_rule(rule: str | None) -> Variable[Any]:
    """Build a :class:`Variable` from a declarative rule string.

    Returns an unnamed variable (which loaders skip) for a missing, empty,
    or ``-`` rule.
    """
    if rule is None:
        return Variable()
    rule = rule.strip()
    if rule in ("", OPT_OUT):
        return Variable()

    tokens = parse_rule(rule)
    # An unknown type fails here only when a literal has to be parsed;
    # otherwise it surfaces once a value is present.
    type_name = tokens.get("type") or ""

    default: Any = UNSET
    if "default" in tokens:
        default = coerce_literal(type_name, tokens["default"] or "", "default")

    oneof: tuple[Any, ...] = ()
    if tokens.get("oneof"):
        choices = [choice.strip() for choice in (tokens["oneof"] or "").split("|")]
        oneof = tuple(coerce_literal(type_name, choice, "oneof") for choice in choices)

    return Variable(
        name=tokens.get("name") or "",
        type=type_name or VariableType.STRING,
        default=default,
        optional="optional" in tokens,
        oneof=oneof,
        description=tokens.get("desc") or "",
    )
