"""Tests for the entity search route."""

from __future__ import annotations

import requests

SEARCH_RESULT = {
    "searchinfo": {"search": "Alfonso"},
    "search": [
        {"id": "Q42", "label": "Alfonso VI", "description": "King of León"},
    ],
    "success": 1,
}


def test_search_missing_query(client, upstream):
    resp = client.get("/api/search")
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Query parameter is required"
    upstream.get.assert_not_called()


def test_search_success(client, upstream, fake_response):
    upstream.get.return_value = fake_response(json_data=SEARCH_RESULT)

    resp = client.get("/api/search", query_string={"query": "Alfonso"})
    assert resp.status_code == 200
    assert resp.get_json() == SEARCH_RESULT

    args, kwargs = upstream.get.call_args
    assert args[0] == "http://wikibase.test/w/api.php"
    assert kwargs["params"] == {
        "action": "wbsearchentities",
        "search": "Alfonso",
        "language": "en",
        "format": "json",
        "uselang": "en",
        "type": "item",
    }


def test_search_accented_query_forwarded_verbatim(client, upstream, fake_response):
    upstream.get.return_value = fake_response(json_data=SEARCH_RESULT)

    client.get("/api/search", query_string={"query": "León"})
    assert upstream.get.call_args.kwargs["params"]["search"] == "León"


def test_search_is_not_cached(client, upstream, fake_response):
    upstream.get.return_value = fake_response(json_data=SEARCH_RESULT)

    client.get("/api/search", query_string={"query": "Alfonso"})
    client.get("/api/search", query_string={"query": "Alfonso"})
    assert upstream.get.call_count == 2


def test_search_upstream_unreachable(client, upstream):
    upstream.get.side_effect = requests.exceptions.ConnectionError("dns")

    resp = client.get("/api/search", query_string={"query": "Alfonso"})
    assert resp.status_code == 503
    data = resp.get_json()
    assert data["message"] == "No response from Wikibase API"
    assert data["error"] == "Service unavailable"


def test_search_upstream_error_passthrough(client, upstream, fake_response):
    upstream.get.return_value = fake_response(
        status=502,
        json_data={"error": {"code": "internal_api_error"}},
        reason="Bad Gateway",
    )

    resp = client.get("/api/search", query_string={"query": "Alfonso"})
    assert resp.status_code == 502
    data = resp.get_json()
    assert data["message"] == "Error from Wikibase API: Bad Gateway"
    assert data["error"] == {"error": {"code": "internal_api_error"}}
