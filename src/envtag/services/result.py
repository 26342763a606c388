"""ServiceResult and ServiceError: the contract between services and the CLI.

INVARIANT: All InspectService methods return ServiceResult.
Error kinds are reported by their ``code``; messages are for humans.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from envtag.domain.errors import EnvError, UnexpectedError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: Exception) -> ServiceError:
        if isinstance(exc, EnvError):
            return cls(**exc.to_dict())
        return cls(
            code=UnexpectedError.code,
            message=str(exc),
            detail={"type": type(exc).__name__},
        )


class ServiceResult(BaseModel):
    """Universal return type for service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"check"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
