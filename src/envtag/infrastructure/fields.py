"""Field discovery for load targets: dataclasses and pydantic models.

An inspector walks the fields of a target class in declaration order and
yields a :class:`FieldDescriptor` per field: its name, its rule string
(read from field metadata under the tag key), and a setter.  Setters
check the value against the field annotation and stage it; ``build()``
constructs the instance from the staged values once every field is done.

Declaring rules::

    @dataclass
    class Config:
        port: int = env_field("name=APP_PORT, type=port, default=8080")

    class Config(BaseModel):
        port: int = Field(0, json_schema_extra={"env": "name=APP_PORT, type=port"})
"""

from __future__ import annotations

import dataclasses
import types
import typing
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Annotated, Any, Union

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from envtag.domain.errors import SetFieldError, UnexpectedError, UnsupportedTypeError

DEFAULT_TAG = "env"

_ZERO_BY_TYPE: dict[type, Any] = {str: "", int: 0, float: 0.0, bool: False}


def env_field(rule: str, *, tag: str = DEFAULT_TAG, **kwargs: Any) -> Any:
    """``dataclasses.field`` with *rule* stored in its metadata under *tag*."""
    metadata = {**kwargs.pop("metadata", {}), tag: rule}
    return dataclasses.field(metadata=metadata, **kwargs)


def zero_for(annotation: Any) -> Any:
    """Zero value for a field annotation (``None`` for anything non-scalar).

    Examples:
        >>> zero_for(int)
        0
        >>> zero_for(str | None) is None
        True
    """
    if typing.get_origin(annotation) is Annotated:
        annotation = typing.get_args(annotation)[0]
    return _ZERO_BY_TYPE.get(annotation)


def _is_optional(annotation: Any) -> bool:
    origin = typing.get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        return type(None) in typing.get_args(annotation)
    return False


@dataclass
class FieldDescriptor:
    """One field of a load target."""

    name: str
    rule: str | None
    annotation: Any
    setter: Callable[[Any], None]

    def set(self, value: Any) -> None:
        """Stage *value* for this field; raises SetFieldError on a type mismatch."""
        self.setter(value)


class TargetInspector(ABC):
    """Field provider for one kind of target class."""

    def __init__(self, target: type[Any], *, tag: str = DEFAULT_TAG) -> None:
        self.target = target
        self.tag = tag
        self._values: dict[str, Any] = {}

    @abstractmethod
    def fields(self) -> list[FieldDescriptor]:
        """Fields in declaration order."""
        ...

    @abstractmethod
    def zero(self) -> Any:
        """An instance with every field at its declared default or zero value."""
        ...

    @abstractmethod
    def build(self) -> Any:
        """An instance populated with the staged values."""
        ...

    def _setter(self, name: str, annotation: Any) -> Callable[[Any], None]:
        def set_value(value: Any) -> None:
            self._values[name] = _check_value(name, annotation, value)

        return set_value


def _check_value(name: str, annotation: Any, value: Any) -> Any:
    if annotation is Any or annotation is None:
        return value
    if _is_optional(annotation) and value is None:
        return value
    try:
        return TypeAdapter(annotation).validate_python(value, strict=True)
    except PydanticValidationError as exc:
        reason = exc.errors()[0]["msg"]
        raise SetFieldError(
            f"cannot assign {type(value).__name__} to {annotation!r}: {reason}",
            field=name,
        ) from exc


class DataclassInspector(TargetInspector):
    """Inspector for ``@dataclass`` targets; rules live in ``field.metadata``."""

    def __init__(self, target: type[Any], *, tag: str = DEFAULT_TAG) -> None:
        super().__init__(target, tag=tag)
        try:
            self._hints = typing.get_type_hints(target, include_extras=True)
        except NameError as exc:
            raise UnsupportedTypeError(
                f"cannot resolve annotations of {target.__name__}: {exc}"
            ) from exc
        self._fields = [f for f in dataclasses.fields(target) if f.init]

    def fields(self) -> list[FieldDescriptor]:
        return [
            FieldDescriptor(
                name=f.name,
                rule=f.metadata.get(self.tag),
                annotation=self._hints.get(f.name, Any),
                setter=self._setter(f.name, self._hints.get(f.name, Any)),
            )
            for f in self._fields
        ]

    def _required_zeros(self) -> dict[str, Any]:
        return {
            f.name: zero_for(self._hints.get(f.name, Any))
            for f in self._fields
            if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING
        }

    def zero(self) -> Any:
        return self.target(**self._required_zeros())

    def build(self) -> Any:
        kwargs = {**self._required_zeros(), **self._values}
        try:
            return self.target(**kwargs)
        except (TypeError, ValueError) as exc:
            raise UnexpectedError(f"cannot construct {self.target.__name__}: {exc}") from exc


class PydanticInspector(TargetInspector):
    """Inspector for pydantic models; rules live in ``json_schema_extra``."""

    def __init__(self, target: type[BaseModel], *, tag: str = DEFAULT_TAG) -> None:
        super().__init__(target, tag=tag)
        self._fields = dict(target.model_fields)

    def _rule(self, name: str) -> str | None:
        extra = self._fields[name].json_schema_extra
        if isinstance(extra, dict):
            rule = extra.get(self.tag)
            return rule if isinstance(rule, str) else None
        return None

    def fields(self) -> list[FieldDescriptor]:
        return [
            FieldDescriptor(
                name=name,
                rule=self._rule(name),
                annotation=info.annotation,
                setter=self._setter(name, info.annotation),
            )
            for name, info in self._fields.items()
        ]

    def _required_zeros(self) -> dict[str, Any]:
        return {
            name: zero_for(info.annotation)
            for name, info in self._fields.items()
            if info.is_required()
        }

    def zero(self) -> Any:
        return self.target.model_construct(**self._required_zeros())

    def build(self) -> Any:
        values = {**self._required_zeros(), **self._values}
        data = {(self._fields[name].alias or name): value for name, value in values.items()}
        try:
            return self.target.model_validate(data)
        except PydanticValidationError as exc:
            error = exc.errors()[0]
            if not error["loc"]:
                raise UnexpectedError(
                    f"cannot construct {self.target.__name__}: {error['msg']}"
                ) from exc
            by_alias = {(info.alias or name): name for name, info in self._fields.items()}
            loc = str(error["loc"][0])
            raise SetFieldError(error["msg"], field=by_alias.get(loc, loc)) from exc


def inspect_target(target: Any, *, tag: str = DEFAULT_TAG) -> TargetInspector:
    """Return the inspector for *target*, a dataclass or pydantic model class."""
    if not isinstance(target, type):
        raise UnsupportedTypeError(f"{target!r} is not a class")
    if dataclasses.is_dataclass(target):
        return DataclassInspector(target, tag=tag)
    if issubclass(target, BaseModel):
        return PydanticInspector(target, tag=tag)
    raise UnsupportedTypeError(f"{target.__name__} is neither a dataclass nor a pydantic model")
