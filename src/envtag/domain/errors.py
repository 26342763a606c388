"""Error kinds raised while validating and loading variables.

Every failure raises exactly one kind.  Callers match on the class
(``except InvalidPortError``) rather than on message text; context such
as the variable name is attached to the same exception object so the
kind survives wrapping.
"""

from __future__ import annotations

from typing import Any, ClassVar, Self


class EnvError(Exception):
    """Base class for all envtag errors.

    Attributes:
        detail: Human-readable diagnostic for this occurrence.
        variable: Environment variable being resolved, if known.
        field: Target field being loaded, if known.
        value: Raw value that failed validation, if any.
    """

    code: ClassVar[str] = "ENV_ERROR"
    message: ClassVar[str] = "environment error"

    def __init__(
        self,
        detail: str | None = None,
        *,
        variable: str | None = None,
        field: str | None = None,
        value: str | None = None,
    ) -> None:
        super().__init__(detail or self.message)
        self.detail = detail
        self.variable = variable
        self.field = field
        self.value = value

    def for_variable(self, name: str) -> Self:
        """Attach the variable name and return the same error."""
        if name and self.variable is None:
            self.variable = name
        return self

    def for_field(self, name: str) -> Self:
        """Attach the target field name and return the same error."""
        if self.field is None:
            self.field = name
        return self

    def __str__(self) -> str:
        text = self.message
        if self.detail:
            text = f"{text}. {self.detail}"
        if self.field:
            text = f"{text} (field {self.field!r})"
        if self.variable:
            text = f"variable {self.variable!r}: {text}"
        return text

    def to_dict(self) -> dict[str, Any]:
        """Return a ``{code, message, detail}`` payload for structured output."""
        detail: dict[str, Any] = {}
        for key in ("variable", "field", "value"):
            val = getattr(self, key)
            if val is not None:
                detail[key] = val
        if self.detail:
            detail["reason"] = self.detail
        return {"code": self.code, "message": str(self), "detail": detail}


# --- Validation kinds ---


class InvalidValueError(EnvError):
    """A present value does not satisfy its declared type."""

    code = "INVALID_VALUE"
    message = "invalid value"


class InvalidPortError(InvalidValueError):
    code = "INVALID_PORT"
    message = "invalid port"


class InvalidUrlError(InvalidValueError):
    code = "INVALID_URL"
    message = "invalid url"


class InvalidEmailError(InvalidValueError):
    code = "INVALID_EMAIL"
    message = "invalid email"


class InvalidBoolError(InvalidValueError):
    code = "INVALID_BOOL"
    message = "invalid boolean value"


class InvalidIntError(InvalidValueError):
    code = "INVALID_INT"
    message = "invalid int"


class InvalidFloatError(InvalidValueError):
    code = "INVALID_FLOAT"
    message = "invalid float"


class UnknownTypeError(EnvError):
    code = "UNKNOWN_TYPE"
    message = "unknown variable type"


class NotInOneofError(EnvError):
    code = "NOT_IN_ONEOF"
    message = "the value is not a possible choice"


# --- Resolution kinds ---


class MissingValueError(EnvError):
    code = "MISSING_VALUE"
    message = "missing required variable"


class MissingNameError(EnvError):
    code = "MISSING_NAME"
    message = "missing variable name"


# --- Struct loading kinds ---


class InvalidTagError(EnvError):
    code = "INVALID_TAG"
    message = "invalid variable tag"


class SetFieldError(EnvError):
    code = "SET_FIELD"
    message = "field is not settable"


class UnsupportedTypeError(EnvError):
    code = "UNSUPPORTED_TYPE"
    message = "unsupported target type"


class UnexpectedError(EnvError):
    code = "UNEXPECTED"
    message = "unexpected error"
