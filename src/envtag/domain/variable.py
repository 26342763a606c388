"""Variable descriptors and the resolution policy.

A :class:`Variable` describes one environment variable: its name, type,
default, optionality, allowed choices, and an optional user validator.
:func:`resolve_variable` applies the precedence policy::

    present value -> validate
    no value      -> default -> optional zero value -> MissingValueError

An absent key and an empty string are both "no value".  Explicit values
such as ``"0"`` or ``"false"`` are present values.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Any, Final, Generic, TypeVar

from envtag.domain.errors import EnvError, MissingNameError, MissingValueError
from envtag.domain.result import LoadResult
from envtag.domain.types import VariableType, zero_value
from envtag.domain.validation import validate

T = TypeVar("T")

VariableValidator = Callable[[T], T]


class _Unset:
    """Marker type for a variable declared without a default."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _Unset()


class ValueSource(StrEnum):
    """Which branch of the precedence policy produced a value."""

    ENVIRONMENT = "environment"
    DEFAULT = "default"
    OPTIONAL = "optional"


@dataclass(frozen=True)
class Resolution(Generic[T]):
    """A resolved value together with where it came from."""

    value: T
    source: ValueSource


@dataclass(frozen=True)
class Variable(Generic[T]):
    """Rule descriptor for one environment variable.

    Immutable; use :class:`VariableBuilder` (or ``dataclasses.replace``)
    to derive modified copies.
    """

    name: str = ""
    type: str = VariableType.STRING
    default: T | _Unset = UNSET
    optional: bool = False
    oneof: tuple[T, ...] = ()
    description: str = ""
    validator: VariableValidator[T] | None = field(default=None, compare=False)

    @property
    def has_default(self) -> bool:
        return not isinstance(self.default, _Unset)

    @property
    def zero_value(self) -> Any:
        return zero_value(self.type)

    def resolve(self, environ: Mapping[str, str] | None = None) -> Resolution[T]:
        """Resolve the variable, attaching its name to any error raised.

        Built-in error kinds get ``variable`` set; errors raised by a user
        validator are re-raised as the same object with a note added.
        """
        try:
            return resolve_variable(self, environ)
        except EnvError as exc:
            exc.for_variable(self.name)
            raise
        except Exception as exc:
            if self.name:
                exc.add_note(f"while loading variable {self.name!r}")
            raise

    def load(self, environ: Mapping[str, str] | None = None) -> LoadResult:
        """Fetch, validate, and return the value (or the error) as a LoadResult."""
        try:
            resolution = self.resolve(environ)
        except Exception as exc:
            return LoadResult(value=self.zero_value, error=exc)
        return LoadResult(value=resolution.value, sources={self.name: resolution.source})

    def must_load(self, environ: Mapping[str, str] | None = None) -> T:
        """Like :meth:`load`, but raise the error instead of returning it."""
        return self.load(environ).unwrap()


def resolve_variable(
    variable: Variable[T],
    environ: Mapping[str, str] | None = None,
) -> Resolution[T]:
    """Apply the precedence policy to *variable* against *environ*.

    *environ* defaults to the process environment.  Errors are raised
    without the variable name attached; see :meth:`Variable.resolve`.
    """
    if not variable.name:
        raise MissingNameError()

    env = os.environ if environ is None else environ
    value = env.get(variable.name)

    if not value:
        if variable.has_default:
            return Resolution(variable.default, ValueSource.DEFAULT)  # type: ignore[arg-type]
        if variable.optional:
            return Resolution(variable.zero_value, ValueSource.OPTIONAL)
        raise MissingValueError()

    validated = validate(variable, value)
    if variable.validator is not None:
        validated = variable.validator(validated)
    return Resolution(validated, ValueSource.ENVIRONMENT)


@dataclass(frozen=True)
class VariableBuilder(Generic[T]):
    """Fluent, copy-on-write builder around a :class:`Variable`.

    Every method returns a new builder; the original is left untouched::

        port = envtag.port("APP_PORT").default(8080).desc("HTTP port")
        value = port.must_load()
    """

    variable: Variable[T]

    def optional(self) -> VariableBuilder[T]:
        return replace(self, variable=replace(self.variable, optional=True))

    def oneof(self, *choices: T) -> VariableBuilder[T]:
        return replace(self, variable=replace(self.variable, oneof=tuple(choices)))

    def default(self, value: T) -> VariableBuilder[T]:
        return replace(self, variable=replace(self.variable, default=value))

    def desc(self, description: str) -> VariableBuilder[T]:
        return replace(self, variable=replace(self.variable, description=description))

    def validate(self, validator: VariableValidator[T]) -> VariableBuilder[T]:
        return replace(self, variable=replace(self.variable, validator=validator))

    def load(self, environ: Mapping[str, str] | None = None) -> LoadResult:
        return self.variable.load(environ)

    def must_load(self, environ: Mapping[str, str] | None = None) -> T:
        return self.variable.must_load(environ)
