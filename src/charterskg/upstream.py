"""
Upstream HTTP client - one GET, one answer, classified failures.

This module is the only place that talks to the Wikibase API, the
Wikibase query service and the Wikidata query service. It handles:
- Content negotiation for SPARQL JSON results
- A fixed timeout and an identifying User-Agent on every request
- Mapping of ``requests`` failures onto :mod:`charterskg.errors`
- Consistent logging across all upstream operations

No retries are attempted: a failed request is reported to the
caller, who may resubmit.

Usage:
    from charterskg.upstream import UpstreamClient

    client = UpstreamClient(timeout=60)
    data = client.get_json(
        "https://query.wikidata.org/sparql",
        params={"query": "ASK {}", "format": "json"},
        source="SPARQL endpoint",
        accept=MimeTypes.SPARQL_JSON,
    )
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from charterskg.errors import (
    LocalSetupError,
    UpstreamRejected,
    UpstreamUnreachable,
)

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "MedievalChartersWebApp/1.0"

# Length of the query excerpt echoed back for syntax errors
EXCERPT_LENGTH = 500
# Length of the query logged for syntax errors
LOGGED_QUERY_LENGTH = 1000

# Markers of a query the upstream parser rejected
SYNTAX_EXCEPTIONS = ("MalformedQueryException", "QueryParseException")
SYNTAX_PHRASES = ("lexical error", "syntax")


class MimeTypes:
    """MIME types used when talking to upstream services."""

    JSON = "application/json"
    SPARQL_JSON = "application/sparql-results+json"


class UpstreamClient:
    """
    Single-attempt JSON client for the Wikibase and Wikidata services.

    Attributes:
        timeout: Request timeout in seconds
        user_agent: Value of the ``User-Agent`` header sent upstream

    Example:
        >>> with UpstreamClient(timeout=5) as client:
        ...     client.get_json(url, params={"action": "wbsearchentities"},
        ...                     source="Wikibase API")
    """

    def __init__(
        self,
        *,
        timeout: float = 60.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._session = requests.Session()

    def __enter__(self) -> UpstreamClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    def get_json(
        self,
        url: str,
        params: dict[str, str],
        *,
        source: str,
        accept: str = MimeTypes.JSON,
        query: str | None = None,
    ) -> Any:
        """
        Issue one GET request and return the decoded JSON body.

        Args:
            url: Upstream URL
            params: Query-string parameters
            source: Human-readable upstream name used in error messages
            accept: Accept header value for content negotiation
            query: SPARQL text, if any; used to build a debugging excerpt
                when the upstream reports a syntax error

        Returns:
            The parsed JSON body of a 2xx response

        Raises:
            UpstreamRejected: The upstream answered with a non-2xx status
                or a 2xx body that is not JSON
            UpstreamUnreachable: Timeout, DNS or connection failure
            LocalSetupError: The request could not be built or sent
        """
        headers = {"Accept": accept, "User-Agent": self.user_agent}

        try:
            response = self._session.get(
                url, params=params, headers=headers, timeout=self.timeout,
            )
        except (requests.exceptions.Timeout, requests.exceptions.ConnectionError) as e:
            logger.error("No response from %s at %s: %s", source, url, e)
            raise UpstreamUnreachable(
                f"No response from {source}", error="Service unavailable",
            ) from e
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error("Error setting up request to %s: %s", source, e)
            raise LocalSetupError(
                f"Error setting up request to {source}", error=str(e),
            ) from e

        if not response.ok:
            raise self._rejected(response, source=source, query=query)

        try:
            return response.json()
        except ValueError as e:
            logger.error("%s returned a non-JSON body", source)
            raise UpstreamRejected(
                f"Invalid JSON from {source}",
                error=response.text[:EXCERPT_LENGTH],
                status_code=502,
            ) from e

    @staticmethod
    def _error_body(response: requests.Response) -> Any:
        """Return the upstream error body, decoded if it is JSON."""
        try:
            return response.json()
        except ValueError:
            return response.text

    def _rejected(
        self,
        response: requests.Response,
        *,
        source: str,
        query: str | None,
    ) -> UpstreamRejected:
        status = response.status_code
        body = self._error_body(response)

        upstream_message = None
        if isinstance(body, dict) and isinstance(body.get("message"), str):
            upstream_message = body["message"]
        elif isinstance(body, str) and body.strip():
            upstream_message = body.strip().splitlines()[0]

        logger.error("%s responded with HTTP %s", source, status)

        syntax_line = _syntax_error_line(
            upstream_message if isinstance(body, dict) else body,
        )
        if query is not None and syntax_line is not None:
            logger.error("Syntax error details: %s", body)
            logger.error(
                "Problem query (first %d chars): %s",
                LOGGED_QUERY_LENGTH,
                query[:LOGGED_QUERY_LENGTH],
            )
            return UpstreamRejected(
                f"SPARQL Syntax Error: {syntax_line}",
                error=body,
                status_code=status,
                query_excerpt=query[:EXCERPT_LENGTH] + "...",
            )

        reason = upstream_message or response.reason or f"HTTP {status}"
        return UpstreamRejected(
            f"Error from {source}: {reason}",
            error=body,
            status_code=status,
        )


def _syntax_error_line(text: Any) -> str | None:
    """Return the line of *text* that reports a SPARQL parse failure, if any.

    Blazegraph wraps parser failures in a Java stack trace, so the line is
    cut to start at the exception name.
    """
    if not isinstance(text, str):
        return None
    lines = text.splitlines()
    for line in lines:
        for name in SYNTAX_EXCEPTIONS:
            index = line.find(name)
            if index >= 0:
                return line[index:].strip()
    for line in lines:
        lowered = line.lower()
        if any(phrase in lowered for phrase in SYNTAX_PHRASES):
            return line.strip()
    return None
