"""Entity properties route: /api/searchProperties/*."""

from __future__ import annotations

import logging

from flask import Blueprint, current_app, jsonify

from charterskg.backend.services.properties_service import PropertiesService
from charterskg.errors import ExecutionError, InvalidRequest
from charterskg.upstream import UpstreamClient

logger = logging.getLogger(__name__)

properties_bp = Blueprint("properties", __name__)


@properties_bp.route("/<entity_id>", methods=["GET"])
def entity_properties(entity_id: str):
    """Return the statements of one entity, with Wikidata coordinates."""
    config = current_app.config
    with UpstreamClient(
        timeout=config["SPARQL_TIMEOUT"], user_agent=config["USER_AGENT"],
    ) as client:
        svc = PropertiesService(
            client,
            sparql_url=config["WIKIBASE_SPARQL_URL"],
            entity_prefix=config["WIKIBASE_ENTITY_URL"],
            direct_prefix=config["WIKIBASE_PROP_DIRECT_URL"],
            wikidata_url=config["WIKIDATA_SPARQL_URL"],
        )
        try:
            result = svc.properties(entity_id)
        except InvalidRequest:
            raise
        except ExecutionError as exc:
            logger.error("Error fetching properties for %s: %s", entity_id, exc)
            return jsonify({"error": "Error fetching properties"}), 500

    return jsonify(result)
