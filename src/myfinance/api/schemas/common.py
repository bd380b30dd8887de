"""
Common API schemas: RFC 7807 error bodies.

Every non-2xx response is a :class:`ProblemDetail`.  Field-level failures
(one per offending field) are listed in ``errors``.

Example::

    {
        "type": "about:blank",
        "title": "Validation error",
        "status": 400,
        "detail": "Validation error",
        "instance": "/financial-transactions",
        "errors": [
            {"code": "GREATER_THAN", "message": "Input should be greater than 0", "field": "valor"}
        ]
    }
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """One field-level violation."""

    code: str = Field(description="Machine-readable error code (e.g. 'MISSING', 'INVALID')")
    message: str = Field(description="Human-readable error description")
    field: str | None = Field(default=None, description="Field path if error is field-specific")


class ProblemDetail(BaseModel):
    """RFC 7807 "Problem Details for HTTP APIs".

    Error Codes:
        - ``VALIDATION_FAILED`` (400): invalid body, query or path parameter
        - ``CONFLICT`` (400): email already registered
        - ``UNAUTHORIZED`` (401): missing/invalid/expired token, bad credentials
        - ``NOT_FOUND`` (404): resource absent or owned by someone else
        - ``UNAVAILABLE`` (503): database unreachable or request timed out
        - ``INTERNAL`` (500): unexpected server error
    """

    type: str = Field(default="about:blank", description="Error type URI")
    title: str = Field(description="Short human-readable error summary")
    status: int = Field(description="HTTP status code")
    detail: str = Field(default="", description="Human-readable explanation of the error")
    instance: str = Field(default="", description="Path of the failing request")
    errors: list[ErrorDetail] = Field(default_factory=list)
