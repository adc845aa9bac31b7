"""Return type shared by every service operation.

Services never let a :class:`~slnctl.domain.errors.SlnError` escape: they
return ``ServiceResult(ok=False, error=...)`` instead, and the CLI decides how
to print it and which exit code to use.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from slnctl.domain.errors import SlnError


class ServiceError(BaseModel):
    """Machine-readable failure: stable ``code``, human ``message``, ``detail``."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: SlnError) -> ServiceError:
        return cls(code=exc.code, message=exc.message, detail=dict(exc.detail))


class ServiceResult(BaseModel):
    """Outcome of one service call.

    Attributes:
        ok: True on success.
        op: Operation name, e.g. ``"add_projects"``; selects the renderer.
        data: Operation payload (only meaningful when ``ok``).
        warnings: Non-fatal notes, printed on stderr.
        error: Set when ``ok`` is False.
        meta: Extra information shown in verbose mode.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, exc: SlnError) -> ServiceResult:
        """Failed result for *op* carrying the details of *exc*."""
        return cls(ok=False, op=op, error=ServiceError.from_exception(exc))
