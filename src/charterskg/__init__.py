"""charterskg: a caching SPARQL proxy for the Medieval Charters knowledge graph.

Main modules:
- query: endpoint routing and single SPARQL execution
- upstream: HTTP client with classified failures
- errors: failure taxonomy
- backend: Flask API (search, SPARQL proxy, entity properties)
"""

from .errors import (
    ExecutionError,
    InvalidRequest,
    LocalSetupError,
    UpstreamRejected,
    UpstreamUnreachable,
)
from .query import Endpoint, EndpointUrls, execute_sparql, select_endpoint
from .version import VERSION

__all__ = [
    "VERSION",
    "Endpoint",
    "EndpointUrls",
    "ExecutionError",
    "InvalidRequest",
    "LocalSetupError",
    "UpstreamRejected",
    "UpstreamUnreachable",
    "execute_sparql",
    "select_endpoint",
]
