"""Wikibase entity search service: forwards to ``wbsearchentities``."""

from __future__ import annotations

from typing import Any

from charterskg.errors import InvalidRequest
from charterskg.upstream import UpstreamClient


class SearchService:
    """Keyword search over the charters Wikibase items."""

    def __init__(self, client: UpstreamClient, api_url: str) -> None:
        self.client = client
        self.api_url = api_url

    def search(self, query: str | None) -> Any:
        """Return the raw ``wbsearchentities`` response for *query*."""
        if not query:
            raise InvalidRequest("Query parameter is required")

        return self.client.get_json(
            self.api_url,
            params={
                "action": "wbsearchentities",
                "search": query,
                "language": "en",
                "format": "json",
                "uselang": "en",
                "type": "item",
            },
            source="Wikibase API",
        )
