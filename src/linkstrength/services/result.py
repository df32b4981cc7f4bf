"""Result envelope returned by every linkstrength service call.

Services never raise for expected failures such as an unknown page, a bad
argument or an unreadable edge list.  They return ``ok=False`` with a
:class:`ServiceError` instead, and the CLI decides how to show it.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

ErrorCode = Literal["NOT_FOUND", "INVALID_ARGUMENT", "INVALID_EDGE_LIST"]


class ServiceError(BaseModel):
    """Why a service call failed; ``detail`` names the offending input."""

    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: False when ``error`` is set.
        op: Operation name, e.g. ``"rank"``; selects the renderer.
        data: Payload of a successful call (scores, walks, listings).
        warnings: Things worth telling the user that did not stop the call.
        error: Failure details when ``ok`` is False.
        meta: Telemetry span tree in verbose mode.
    """

    # Infinite scores serialize as Infinity instead of null.
    model_config = {"frozen": True, "ser_json_inf_nan": "constants"}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, code: ErrorCode, message: str, **detail: Any) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
