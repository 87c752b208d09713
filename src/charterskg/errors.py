"""Failure taxonomy for upstream calls.

Every error carries the HTTP status it is surfaced with plus the message
and upstream detail for the JSON body, so route handlers never have to
inspect the underlying ``requests`` exception.
"""

from __future__ import annotations

from typing import Any


class ExecutionError(Exception):
    """Base class for all failures surfaced to API callers."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        *,
        error: Any = None,
        status_code: int | None = None,
        query_excerpt: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error = error
        if status_code is not None:
            self.status_code = status_code
        self.query_excerpt = query_excerpt


class InvalidRequest(ExecutionError):
    """A required parameter is absent or empty."""

    status_code = 400


class UpstreamRejected(ExecutionError):
    """The upstream answered with a non-2xx status (or an unusable body)."""

    status_code = 502


class UpstreamUnreachable(ExecutionError):
    """The request went out but no response came back."""

    status_code = 503


class LocalSetupError(ExecutionError):
    """The outbound request could not be built or sent."""

    status_code = 500
