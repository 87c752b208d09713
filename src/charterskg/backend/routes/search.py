"""Entity search route: /api/search."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from charterskg.backend.services.search_service import SearchService
from charterskg.upstream import UpstreamClient

search_bp = Blueprint("search", __name__)


@search_bp.route("", methods=["GET"])
def search_entities():
    """Search charters items by label through ``wbsearchentities``."""
    config = current_app.config
    with UpstreamClient(
        timeout=config["SPARQL_TIMEOUT"], user_agent=config["USER_AGENT"],
    ) as client:
        svc = SearchService(client, config["WIKIBASE_API_URL"])
        result = svc.search(request.args.get("query"))

    return jsonify(result)
