"""envtag: typed, validated configuration from environment variables.

Declare rules on a dataclass or pydantic model and load it::

    @dataclass
    class Config:
        name: str = env_field("name=APP_NAME, type=string")
        port: int = env_field("name=APP_PORT, type=port, default=3000")

    config = envtag.must_load(Config)

or resolve single variables with the fluent constructors::

    debug = envtag.boolean("APP_DEBUG").default(False).must_load()
"""

from envtag.domain.errors import (
    EnvError,
    InvalidBoolError,
    InvalidEmailError,
    InvalidFloatError,
    InvalidIntError,
    InvalidPortError,
    InvalidTagError,
    InvalidUrlError,
    InvalidValueError,
    MissingNameError,
    MissingValueError,
    NotInOneofError,
    SetFieldError,
    UnexpectedError,
    UnknownTypeError,
    UnsupportedTypeError,
)
from envtag.domain.primitives import boolean, email, floating, integer, port, string, url
from envtag.domain.result import LoadResult
from envtag.domain.types import VariableType
from envtag.domain.variable import UNSET, ValueSource, Variable, VariableBuilder
from envtag.infrastructure.fields import env_field
from envtag.services.loader import load, must_load

__version__ = "0.1.0"

__all__ = [
    "UNSET",
    "EnvError",
    "InvalidBoolError",
    "InvalidEmailError",
    "InvalidFloatError",
    "InvalidIntError",
    "InvalidPortError",
    "InvalidTagError",
    "InvalidUrlError",
    "InvalidValueError",
    "LoadResult",
    "MissingNameError",
    "MissingValueError",
    "NotInOneofError",
    "SetFieldError",
    "UnexpectedError",
    "UnknownTypeError",
    "UnsupportedTypeError",
    "ValueSource",
    "Variable",
    "VariableBuilder",
    "VariableType",
    "boolean",
    "email",
    "env_field",
    "floating",
    "integer",
    "load",
    "must_load",
    "port",
    "string",
    "url",
]
