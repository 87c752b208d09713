"""SPARQL endpoint routing and execution (pure library, no Flask dependency).

This module decides which upstream SPARQL service a query belongs to and
runs a single query against it:

* :func:`select_endpoint` inspects the raw query text and picks either
  the charters Wikibase query service or the public Wikidata one.
* :class:`EndpointUrls` maps that choice onto configured URLs.
* :func:`execute_sparql` performs one request through
  :class:`~charterskg.upstream.UpstreamClient`.

Caching lives in the backend service layer, see
:mod:`charterskg.backend.services.sparql_service`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from charterskg.upstream import MimeTypes, UpstreamClient

logger = logging.getLogger(__name__)

WIKIBASE_SPARQL_URL = "https://medievalcharterskg.wikibase.cloud/query/sparql"
WIKIDATA_SPARQL_URL = "https://query.wikidata.org/sparql"

# The coordinate-location predicate only Wikidata can answer
COORDINATE_PREDICATE = "wdt:P625"

# Any of these marks the query as addressing Wikidata items
WIKIDATA_ITEM_MARKERS = (
    "<http://www.wikidata.org/entity/",
    "VALUES ?wdItem",
    "VALUES ?residenceWdItem",
)

# Length of the query preview written to the log
PREVIEW_LENGTH = 200


class Endpoint(str, Enum):
    """The two upstream SPARQL services a query can be routed to."""

    WIKIBASE = "wikibase"
    WIKIDATA = "wikidata"


@dataclass(frozen=True)
class EndpointUrls:
    """Concrete URLs for each :class:`Endpoint`."""

    wikibase: str = WIKIBASE_SPARQL_URL
    wikidata: str = WIKIDATA_SPARQL_URL

    def url_for(self, endpoint: Endpoint) -> str:
        if endpoint is Endpoint.WIKIDATA:
            return self.wikidata
        return self.wikibase


def select_endpoint(query: str) -> Endpoint:
    """Pick the upstream service for *query* by substring tests.

    A query goes to Wikidata only when it asks for coordinates
    (``wdt:P625``) *and* references Wikidata items, either by full entity
    IRI or through a ``VALUES ?wdItem`` / ``VALUES ?residenceWdItem``
    block. Everything else goes to the charters Wikibase.

    The tests are case-sensitive and know nothing about SPARQL syntax, so
    a marker inside a comment or string literal counts as well.
    """
    if COORDINATE_PREDICATE in query and any(
        marker in query for marker in WIKIDATA_ITEM_MARKERS
    ):
        return Endpoint.WIKIDATA
    return Endpoint.WIKIBASE


def count_bindings(result: Any) -> int:
    """Return the number of result rows in a SPARQL JSON document."""
    if not isinstance(result, dict):
        return 0
    results = result.get("results")
    if not isinstance(results, dict):
        return 0
    bindings = results.get("bindings")
    if not isinstance(bindings, list):
        return 0
    return len(bindings)


def execute_sparql(
    query: str,
    endpoint_url: str,
    *,
    client: UpstreamClient,
) -> Any:
    """Run *query* once against *endpoint_url* and return the JSON results.

    Parameters
    ----------
    query:
        Full SPARQL query string, sent verbatim.
    endpoint_url:
        URL of the SPARQL endpoint.
    client:
        Client used for the request; it carries timeout and User-Agent.

    Returns
    -------
    Any
        The decoded ``application/sparql-results+json`` body.

    Raises
    ------
    charterskg.errors.ExecutionError
        Any classified upstream failure.
    """
    logger.info("Using SPARQL endpoint: %s", endpoint_url)
    logger.debug("Query: %s...", query[:PREVIEW_LENGTH])

    result = client.get_json(
        endpoint_url,
        params={"query": query, "format": "json"},
        source="SPARQL endpoint",
        accept=MimeTypes.SPARQL_JSON,
        query=query,
    )

    logger.info(
        "Query successful, returned %d results", count_bindings(result),
    )
    return result
