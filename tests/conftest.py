"""Shared fixtures: a fake upstream behind ``requests.Session``."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest


def _response(status=200, json_data=None, text="", reason="OK"):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 400
    resp.reason = reason
    resp.text = text
    if json_data is None:
        resp.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        resp.json.return_value = json_data
    return resp


@pytest.fixture()
def fake_response():
    """Factory for fake ``requests.Response`` objects."""
    return _response


@pytest.fixture()
def upstream():
    """The session every :class:`UpstreamClient` gets; stub ``.get`` on it."""
    with patch("charterskg.upstream.requests.Session") as session_cls:
        session = MagicMock()
        session_cls.return_value = session
        yield session


@pytest.fixture()
def sparql_results():
    return {
        "head": {"vars": ["item", "itemLabel"]},
        "results": {
            "bindings": [
                {
                    "item": {
                        "type": "uri",
                        "value": "https://medievalcharterskg.wikibase.cloud/entity/Q42",
                    },
                    "itemLabel": {
                        "type": "literal",
                        "value": "Alfonso VI",
                        "xml:lang": "en",
                    },
                },
            ],
        },
    }
