"""Standalone variable constructors.

Each constructor returns a :class:`VariableBuilder` for one type::

    debug = boolean("APP_DEBUG").default(False).must_load()
    env = string("APP_ENV").oneof("dev", "staging", "prod").must_load()
"""

from __future__ import annotations

from envtag.domain.types import VariableType
from envtag.domain.variable import Variable, VariableBuilder


def string(name: str) -> VariableBuilder[str]:
    """Any string value."""
    return VariableBuilder(Variable(name=name, type=VariableType.STRING))


def integer(name: str) -> VariableBuilder[int]:
    """A base-10 integer."""
    return VariableBuilder(Variable(name=name, type=VariableType.INT))


def floating(name: str) -> VariableBuilder[float]:
    """A decimal number."""
    return VariableBuilder(Variable(name=name, type=VariableType.FLOAT))


def boolean(name: str) -> VariableBuilder[bool]:
    """One of ``true``, ``false``, ``1``, ``0``, ``on``, ``off``."""
    return VariableBuilder(Variable(name=name, type=VariableType.BOOLEAN))


def port(name: str) -> VariableBuilder[int]:
    """A TCP port number (1-65535)."""
    return VariableBuilder(Variable(name=name, type=VariableType.PORT))


def url(name: str) -> VariableBuilder[str]:
    """An absolute URL with a scheme and a host."""
    return VariableBuilder(Variable(name=name, type=VariableType.URL))


def email(name: str) -> VariableBuilder[str]:
    """A single ``local-part@domain`` email address."""
    return VariableBuilder(Variable(name=name, type=VariableType.EMAIL))
