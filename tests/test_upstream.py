"""Tests for failure classification in the upstream client."""

from __future__ import annotations

import pytest
import requests

from charterskg.errors import (
    ExecutionError,
    LocalSetupError,
    UpstreamRejected,
    UpstreamUnreachable,
)
from charterskg.upstream import UpstreamClient

URL = "http://example.org/sparql"


def _get(client, **kwargs):
    return client.get_json(
        URL, params={"query": "ASK {}"}, source="SPARQL endpoint", **kwargs,
    )


def test_sends_identifying_headers(upstream, fake_response):
    upstream.get.return_value = fake_response(json_data={"boolean": True})

    client = UpstreamClient(timeout=12, user_agent="test-agent/0.1")
    assert _get(client, accept="application/sparql-results+json") == {"boolean": True}

    kwargs = upstream.get.call_args.kwargs
    assert kwargs["headers"] == {
        "Accept": "application/sparql-results+json",
        "User-Agent": "test-agent/0.1",
    }
    assert kwargs["timeout"] == 12


@pytest.mark.parametrize(
    "exc",
    [
        requests.exceptions.ConnectTimeout("connect timeout"),
        requests.exceptions.ReadTimeout("read timeout"),
        requests.exceptions.ConnectionError("name resolution failed"),
    ],
)
def test_no_response_is_unreachable(upstream, exc):
    upstream.get.side_effect = exc

    with pytest.raises(UpstreamUnreachable) as info:
        _get(UpstreamClient())
    assert info.value.status_code == 503
    assert info.value.error == "Service unavailable"


@pytest.mark.parametrize(
    "exc",
    [
        requests.exceptions.MissingSchema("Invalid URL 'None'"),
        requests.exceptions.InvalidURL("bad"),
    ],
)
def test_request_setup_failure(upstream, exc):
    upstream.get.side_effect = exc

    with pytest.raises(LocalSetupError) as info:
        _get(UpstreamClient())
    assert info.value.status_code == 500
    assert info.value.error == str(exc)


def test_rejection_keeps_upstream_status(upstream, fake_response):
    upstream.get.return_value = fake_response(
        status=429, text="Too Many Requests", reason="Too Many Requests",
    )

    with pytest.raises(UpstreamRejected) as info:
        _get(UpstreamClient(), query="ASK {}")
    assert info.value.status_code == 429
    assert info.value.error == "Too Many Requests"
    assert info.value.query_excerpt is None


def test_rejection_without_body_uses_reason(upstream, fake_response):
    upstream.get.return_value = fake_response(
        status=404, text="", reason="Not Found",
    )

    with pytest.raises(UpstreamRejected) as info:
        _get(UpstreamClient())
    assert info.value.message == "Error from SPARQL endpoint: Not Found"


def test_plain_text_syntax_error(upstream, fake_response):
    upstream.get.return_value = fake_response(
        status=400,
        text="MalformedQueryException: SPARQL syntax error at line 1\nstack...",
        reason="Bad Request",
    )

    with pytest.raises(UpstreamRejected) as info:
        _get(UpstreamClient(), query="SELEC * WHERE {}")
    err = info.value
    assert err.status_code == 400
    assert err.message == (
        "SPARQL Syntax Error: MalformedQueryException: SPARQL syntax error at line 1"
    )
    assert err.query_excerpt == "SELEC * WHERE {}..."


def test_syntax_excerpt_needs_a_query(upstream, fake_response):
    upstream.get.return_value = fake_response(
        status=400, json_data={"message": "syntax"}, reason="Bad Request",
    )

    with pytest.raises(UpstreamRejected) as info:
        _get(UpstreamClient())
    assert info.value.query_excerpt is None


def test_non_json_success_body(upstream, fake_response):
    upstream.get.return_value = fake_response(
        status=200, text="<html>maintenance</html>",
    )

    with pytest.raises(UpstreamRejected) as info:
        _get(UpstreamClient())
    assert info.value.status_code == 502
    assert info.value.message == "Invalid JSON from SPARQL endpoint"


def test_all_failures_share_a_base_class():
    for cls in (UpstreamRejected, UpstreamUnreachable, LocalSetupError):
        assert issubclass(cls, ExecutionError)


def test_context_manager_closes_session(upstream):
    with UpstreamClient():
        pass
    upstream.close.assert_called_once()


def test_blazegraph_malformed_query(upstream, fake_response):
    query = "SELEC ?x WHERE { ?x ?y ?z }"
    body = (
        f"SPARQL-QUERY: queryStr={query}\n"
        "java.util.concurrent.ExecutionException: "
        "org.openrdf.query.MalformedQueryException: "
        "Encountered \" <VAR1> \"?x \"\" at line 1, column 7.\n"
        "\tat java.util.concurrent.FutureTask.report(FutureTask.java:122)\n"
    )
    upstream.get.return_value = fake_response(
        status=400, text=body, reason="Bad Request",
    )

    with pytest.raises(UpstreamRejected) as info:
        _get(UpstreamClient(), query=query)
    err = info.value
    assert err.status_code == 400
    assert err.message == (
        "SPARQL Syntax Error: MalformedQueryException: "
        "Encountered \" <VAR1> \"?x \"\" at line 1, column 7."
    )
    assert err.query_excerpt == query + "..."
    assert err.error == body


@pytest.mark.parametrize(
    "line",
    [
        "org.apache.jena.query.QueryParseException: Line 1, column 1",
        "Lexical error at line 1, column 12.  Encountered: \"!\" (33)",
    ],
)
def test_other_parser_failures_are_syntax_errors(upstream, fake_response, line):
    upstream.get.return_value = fake_response(
        status=400, text=f"SPARQL-QUERY: queryStr=ASK {{}}\n{line}\n",
    )

    with pytest.raises(UpstreamRejected) as info:
        _get(UpstreamClient(), query="ASK {}")
    assert info.value.query_excerpt == "ASK {}..."
    assert "queryStr" not in info.value.message
