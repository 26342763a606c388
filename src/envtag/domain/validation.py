"""Type-directed parsing and validation of raw environment strings.

Each validator takes the raw string and returns the typed value, or
raises the matching :mod:`envtag.domain.errors` kind.  ``TYPE_REGISTRY``
maps every canonical :class:`VariableType` to its validator; aliases are
resolved through :func:`envtag.domain.types.resolve_type`.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from envtag.domain.errors import (
    InvalidBoolError,
    InvalidEmailError,
    InvalidFloatError,
    InvalidIntError,
    InvalidPortError,
    InvalidUrlError,
    InvalidValueError,
    NotInOneofError,
    UnknownTypeError,
)
from envtag.domain.types import VariableType, resolve_type

if TYPE_CHECKING:
    from envtag.domain.variable import Variable

PORT_MIN = 1
PORT_MAX = 65535

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_FLOAT_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

_BOOL_LITERALS: dict[str, bool] = {
    "true": True,
    "1": True,
    "on": True,
    "false": False,
    "0": False,
    "off": False,
}

# local-part: dot-atom (no leading, trailing or doubled dots) or a quoted string
# domain: hostname labels separated by dots
_NON_ASCII = r"\u0080-\U0010ffff"
_ATEXT = rf"[A-Za-z0-9!#$%&'*+/=?^_`{{|}}~{_NON_ASCII}-]"
_LABEL_CHAR = rf"[A-Za-z0-9{_NON_ASCII}]"
_LABEL = rf"{_LABEL_CHAR}(?:[A-Za-z0-9{_NON_ASCII}-]{{0,61}}{_LABEL_CHAR})?"
_EMAIL_PATTERN = re.compile(
    rf"(?:{_ATEXT}+(?:\.{_ATEXT}+)*|\"(?:[^\"\\\r\n]|\\.)+\")"
    rf"@{_LABEL}(?:\.{_LABEL})*"
)

# scheme followed by a non-empty authority
_URL_AUTHORITY = re.compile(r"[A-Za-z][A-Za-z0-9+.-]*://[^/?#]")

_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


def validate_string(v: str) -> str:
    return v


def _parse_int(v: str, kind: type[InvalidValueError]) -> int:
    if not _INT_PATTERN.fullmatch(v):
        raise kind(f"unable to parse {v!r} as integer", value=v)
    try:
        return int(v)
    except ValueError as exc:
        # digit strings past the interpreter's conversion limit
        raise kind(f"unable to parse {v[:20]!r}... as integer: {exc}", value=v) from exc


def validate_int(v: str) -> int:
    return _parse_int(v, InvalidIntError)


def validate_float(v: str) -> float:
    if not _FLOAT_PATTERN.fullmatch(v):
        raise InvalidFloatError(f"unable to parse {v!r} as float", value=v)
    result = float(v)
    if math.isinf(result):
        raise InvalidFloatError(f"{v!r} is out of range for a float", value=v)
    return result


def validate_boolean(v: str) -> bool:
    """Parse one of ``true/false``, ``1/0`` or ``on/off`` (case-sensitive)."""
    try:
        return _BOOL_LITERALS[v]
    except KeyError:
        choices = ", ".join(_BOOL_LITERALS)
        raise InvalidBoolError(
            f"unable to parse {v!r} as boolean (expected one of: {choices})", value=v
        ) from None


def validate_port(v: str) -> int:
    """Parse a TCP port number in the closed range 1-65535.

    Parse failures and range failures share the InvalidPortError kind;
    only the detail differs.
    """
    port = _parse_int(v, InvalidPortError)
    if port < PORT_MIN or port > PORT_MAX:
        raise InvalidPortError(f"{port} is out of range ({PORT_MIN}-{PORT_MAX})", value=v)
    return port


def validate_url(v: str) -> str:
    """Require an absolute ``scheme://host...`` URL.

    The raw string is returned unchanged; normalization done by the
    parser is discarded.
    """
    if v == "":
        raise InvalidUrlError("empty string", value=v)
    if v != v.strip():
        raise InvalidUrlError(f"{v!r} has surrounding whitespace", value=v)
    if not _URL_AUTHORITY.match(v):
        raise InvalidUrlError(f"{v!r} is not an absolute URL with an authority", value=v)
    try:
        parsed = _URL_ADAPTER.validate_python(v)
    except PydanticValidationError as exc:
        reason = exc.errors()[0]["msg"]
        raise InvalidUrlError(f"unable to parse {v!r} as URL: {reason}", value=v) from exc
    if not parsed.host:
        raise InvalidUrlError(f"{v!r} has no host", value=v)
    return v


def validate_email(v: str) -> str:
    """Require a single bare ``local-part@domain`` address."""
    if v == "":
        raise InvalidEmailError("empty string", value=v)
    if not _EMAIL_PATTERN.fullmatch(v):
        raise InvalidEmailError(f"unable to parse {v!r} as email address", value=v)
    return v


TYPE_REGISTRY: dict[VariableType, Callable[[str], Any]] = {
    VariableType.STRING: validate_string,
    VariableType.INT: validate_int,
    VariableType.FLOAT: validate_float,
    VariableType.BOOLEAN: validate_boolean,
    VariableType.PORT: validate_port,
    VariableType.URL: validate_url,
    VariableType.EMAIL: validate_email,
}


def validate_type(type_name: str, v: str) -> Any:
    """Parse *v* according to *type_name* (canonical name or alias)."""
    vtype = resolve_type(type_name)
    if vtype is None:
        raise UnknownTypeError(f"unknown type {type_name!r}")
    return TYPE_REGISTRY[vtype](v)


def validate(variable: Variable[Any], v: str) -> Any:
    """Validate *v* against the variable's type, then its ``oneof`` choices.

    Membership is checked on the typed value, so ``oneof=80|443`` on an
    int variable compares integers.
    """
    validated = validate_type(variable.type, v)
    if variable.oneof and validated not in variable.oneof:
        choices = ", ".join(str(c) for c in variable.oneof)
        raise NotInOneofError(f"available choices: {choices}", value=v)
    return validated
