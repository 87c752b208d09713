"""SPARQL proxy route: /api/sparql."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from charterskg.backend.models.sparql import SparqlQueryRequest
from charterskg.backend.services.sparql_service import SparqlService
from charterskg.errors import InvalidRequest
from charterskg.query import EndpointUrls
from charterskg.upstream import UpstreamClient

sparql_bp = Blueprint("sparql", __name__)


def _get_svc(client: UpstreamClient) -> SparqlService:
    config = current_app.config
    return SparqlService(
        cache=config["QUERY_CACHE"],
        client=client,
        endpoints=EndpointUrls(
            wikibase=config["WIKIBASE_SPARQL_URL"],
            wikidata=config["WIKIDATA_SPARQL_URL"],
        ),
    )


@sparql_bp.route("", methods=["POST"])
def run_query():
    """Run a SPARQL query on the charters Wikibase or on Wikidata.

    Solves CORS by making the request server-side; results are cached.
    """
    try:
        body = SparqlQueryRequest.model_validate(
            request.get_json(silent=True) or {},
        )
    except ValidationError as exc:
        raise InvalidRequest("SPARQL query is required") from exc

    config = current_app.config
    with UpstreamClient(
        timeout=config["SPARQL_TIMEOUT"], user_agent=config["USER_AGENT"],
    ) as client:
        result = _get_svc(client).execute(body.query)

    return jsonify(result)
