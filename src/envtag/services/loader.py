"""Struct loading: populate a dataclass or pydantic model from the environment.

Per field::

    Unvisited -> TagParsed -> Skipped
                           -> Resolving -> Resolved | Failed

INVARIANT: loading is fail-fast.  The first failing field aborts the
load; the error is returned unmodified alongside the zero-valued
instance, and no partially populated instance is ever produced.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from envtag.domain.errors import EnvError, SetFieldError, UnexpectedError, UnsupportedTypeError
from envtag.domain.result import LoadResult
from envtag.domain.rules import variable_from_rule
from envtag.domain.variable import ValueSource
from envtag.infrastructure.fields import DEFAULT_TAG, TargetInspector, inspect_target

logger = logging.getLogger(__name__)

T = TypeVar("T")


def load(
    target: type[T],
    *,
    environ: Mapping[str, str] | None = None,
    tag: str = DEFAULT_TAG,
) -> LoadResult:
    """Load *target* from *environ* (default: the process environment).

    Returns a LoadResult whose ``value`` is the populated instance, or the
    zero-valued instance together with the first error encountered.  When
    the target rejects its own zero values, ``value`` is None.
    """
    try:
        inspector = inspect_target(target, tag=tag)
    except UnsupportedTypeError as exc:
        logger.warning("Cannot load %r: %s", target, exc)
        return LoadResult(value=None, error=exc)

    try:
        value, sources = _load_fields(inspector, environ)
    except Exception as exc:
        logger.warning("Loading %s failed: %s", inspector.target.__name__, exc)
        return LoadResult(value=_zero_or_none(inspector), error=exc)
    return LoadResult(value=value, sources=sources)


def must_load(
    target: type[T],
    *,
    environ: Mapping[str, str] | None = None,
    tag: str = DEFAULT_TAG,
) -> T:
    """Like :func:`load`, but return the instance or raise the original error."""
    result: T = load(target, environ=environ, tag=tag).unwrap()
    return result


def _zero_or_none(inspector: TargetInspector) -> Any:
    try:
        return inspector.zero()
    except Exception as exc:
        logger.warning("Cannot build a zero-valued %s: %s", inspector.target.__name__, exc)
        return None


def _load_fields(
    inspector: TargetInspector,
    environ: Mapping[str, str] | None,
) -> tuple[Any, dict[str, str]]:
    sources: dict[str, str] = {}

    for descriptor in inspector.fields():
        if descriptor.rule is None:
            continue

        try:
            variable = variable_from_rule(descriptor.rule)
        except EnvError as exc:
            exc.for_field(descriptor.name)
            raise
        except Exception as exc:
            raise UnexpectedError(str(exc), field=descriptor.name) from exc

        if not variable.name:
            logger.debug("Skipping field %s: no variable name", descriptor.name)
            continue

        resolution = variable.resolve(environ)
        logger.debug(
            "Resolved %s for field %s from %s", variable.name, descriptor.name, resolution.source
        )
        sources[descriptor.name] = resolution.source

        # Optional zero values leave the field at its declared default.
        if resolution.source is ValueSource.OPTIONAL:
            continue

        try:
            descriptor.set(resolution.value)
        except SetFieldError:
            raise
        except Exception as exc:
            raise SetFieldError(str(exc), field=descriptor.name) from exc

    return inspector.build(), sources
