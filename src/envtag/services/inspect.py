"""InspectService: describe, check, and resolve configuration from the CLI."""

from __future__ import annotations

import dataclasses
import importlib
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from envtag.domain.errors import EnvError, UnsupportedTypeError
from envtag.domain.rules import coerce_literal, variable_from_rule
from envtag.domain.variable import UNSET, Variable
from envtag.infrastructure.fields import DEFAULT_TAG, inspect_target
from envtag.services.loader import load
from envtag.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)


def import_target(spec: str) -> type[Any]:
    """Import ``package.module:ClassName`` and return the class."""
    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        raise UnsupportedTypeError(f"expected 'module:ClassName', got {spec!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise UnsupportedTypeError(f"cannot import {module_name!r}: {exc}") from exc
    target: Any = module
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise UnsupportedTypeError(f"{module_name!r} has no attribute {attr!r}") from exc
    return target  # type: ignore[no-any-return]


def _as_dict(instance: Any) -> dict[str, Any]:
    if isinstance(instance, BaseModel):
        return instance.model_dump(mode="json")
    return dataclasses.asdict(instance)


def _failure(op: str, exc: Exception) -> ServiceResult:
    return ServiceResult(ok=False, op=op, error=ServiceError.from_exception(exc))


class InspectService:
    """Read-only operations over load targets and single variables."""

    def __init__(
        self,
        *,
        environ: Mapping[str, str] | None = None,
        tag: str = DEFAULT_TAG,
    ) -> None:
        self.environ = environ
        self.tag = tag

    def describe(self, target: type[Any]) -> ServiceResult:
        """List the variables declared by *target*, one row per field.

        Never reads the environment.
        """
        op = "describe"
        try:
            inspector = inspect_target(target, tag=self.tag)
        except EnvError as exc:
            return _failure(op, exc)

        rows: list[dict[str, Any]] = []
        for descriptor in inspector.fields():
            try:
                variable = variable_from_rule(descriptor.rule)
            except EnvError as exc:
                return _failure(op, exc.for_field(descriptor.name))
            rows.append(
                {
                    "field": descriptor.name,
                    "variable": variable.name or None,
                    "type": str(variable.type),
                    "default": variable.default if variable.has_default else None,
                    "optional": variable.optional,
                    "oneof": list(variable.oneof),
                    "description": variable.description,
                    "skipped": not variable.name,
                }
            )
        return ServiceResult(
            ok=True,
            op=op,
            data={"target": target.__name__, "variables": rows, "count": len(rows)},
        )

    def check(self, target: type[Any]) -> ServiceResult:
        """Load *target* and report the resolved values and their sources."""
        op = "check"
        result = load(target, environ=self.environ, tag=self.tag)
        if result.error is not None:
            return _failure(op, result.error)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "target": target.__name__,
                "values": _as_dict(result.value),
                "sources": dict(result.sources),
            },
        )

    def get(
        self,
        name: str,
        *,
        type_name: str = "string",
        default: str | None = None,
        optional: bool = False,
        oneof: list[str] | None = None,
    ) -> ServiceResult:
        """Resolve a single variable built from command-line arguments."""
        op = "get"
        try:
            variable: Variable[Any] = Variable(
                name=name,
                type=type_name,
                default=UNSET if default is None else coerce_literal(type_name, default, "default"),
                optional=optional,
                oneof=tuple(coerce_literal(type_name, c, "oneof") for c in oneof or ()),
            )
        except EnvError as exc:
            return _failure(op, exc.for_variable(name))

        result = variable.load(self.environ)
        if result.error is not None:
            return _failure(op, result.error)
        return ServiceResult(
            ok=True,
            op=op,
            data={"name": name, "value": result.value, "source": result.sources[name]},
        )
