"""SPARQL query execution service with routing and result caching.

Endpoint selection and the upstream request live in
:mod:`charterskg.query`. This service adds request validation and
response caching via :mod:`~charterskg.backend.services.cache_service`.
"""

from __future__ import annotations

import logging
from typing import Any

from charterskg.backend.services.cache_service import MemoryCache, cache_key
from charterskg.errors import InvalidRequest
from charterskg.query import EndpointUrls, execute_sparql, select_endpoint
from charterskg.upstream import UpstreamClient

logger = logging.getLogger(__name__)


class SparqlService:
    """Execute SPARQL queries against Wikibase or Wikidata, with caching.

    The cache is owned by the caller (the Flask app) and shared between
    service instances. Two concurrent misses for the same query both reach
    the upstream; only successful results are stored.
    """

    def __init__(
        self,
        cache: MemoryCache,
        client: UpstreamClient,
        endpoints: EndpointUrls | None = None,
    ) -> None:
        self.cache = cache
        self.client = client
        self.endpoints = endpoints or EndpointUrls()

    def execute(self, query: str | None) -> Any:
        """Return the SPARQL JSON results for *query*.

        Raises
        ------
        InvalidRequest
            If *query* is empty or missing.
        charterskg.errors.ExecutionError
            Any classified upstream failure; nothing is cached.
        """
        if not query:
            raise InvalidRequest("SPARQL query is required")

        key = cache_key(query)
        cached = self.cache.get(key)
        if cached is not None:
            logger.info("Cache hit for SPARQL query")
            return cached

        endpoint = select_endpoint(query)
        result = execute_sparql(
            query, self.endpoints.url_for(endpoint), client=self.client,
        )

        self.cache.set(key, result)
        return result
