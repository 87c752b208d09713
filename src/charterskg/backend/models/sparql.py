"""Pydantic models for request bodies and error responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from charterskg.errors import ExecutionError


class SparqlQueryRequest(BaseModel):
    """Body of ``POST /api/sparql``."""

    query: str | None = None


class ErrorResponse(BaseModel):
    """JSON body returned for every classified failure."""

    message: str
    error: Any = None
    query_excerpt: str | None = None

    @classmethod
    def from_error(cls, exc: ExecutionError) -> ErrorResponse:
        return cls(
            message=exc.message,
            error=exc.error,
            query_excerpt=exc.query_excerpt,
        )

    def to_json(self) -> dict[str, Any]:
        # Only top-level fields are dropped; upstream detail stays verbatim
        unset = {name for name, value in self if value is None}
        return self.model_dump(exclude=unset)
