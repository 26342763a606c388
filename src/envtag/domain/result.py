"""LoadResult: the outcome of loading a variable or a whole structure.

INVARIANT: ``error`` is None exactly when the load succeeded.  On
failure ``value`` still holds the zero value (or zero-valued instance)
so callers can inspect what would have been returned.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class LoadResult(BaseModel):
    """Value/error pair returned by ``load`` operations.

    Attributes:
        value: Loaded value, or the zero value when ``error`` is set.
        error: The first error encountered, as the original exception object.
        sources: Where each resolved variable came from, keyed by field
            (struct loads) or variable name (single variables).
    """

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    value: Any = None
    error: Exception | None = None
    sources: dict[str, str] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return ``value``, or raise ``error`` if the load failed."""
        if self.error is not None:
            raise self.error
        return self.value
