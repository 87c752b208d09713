"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os


def _split(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Config:
    """Default configuration for the Flask backend."""

    DEBUG = os.getenv("FLASK_DEBUG", "0") == "1"
    PORT = int(os.getenv("PORT", "3000"))

    # Largest accepted request body, in bytes
    MAX_CONTENT_LENGTH = 1024 * 1024

    # Wikibase instance holding the charters graph
    WIKIBASE_API_URL = os.getenv(
        "WIKIBASE_API_URL",
        "https://medievalcharterskg.wikibase.cloud/w/api.php",
    )
    WIKIBASE_ENTITY_URL = os.getenv(
        "WIKIBASE_ENTITY_URL",
        "https://medievalcharterskg.wikibase.cloud/entity/",
    )
    WIKIBASE_PROP_DIRECT_URL = os.getenv(
        "WIKIBASE_PROP_DIRECT_URL",
        "https://medievalcharterskg.wikibase.cloud/prop/direct/",
    )
    WIKIBASE_SPARQL_URL = os.getenv(
        "WIKIBASE_SPARQL_URL",
        "https://medievalcharterskg.wikibase.cloud/query/sparql",
    )
    WIKIDATA_SPARQL_URL = os.getenv(
        "WIKIDATA_SPARQL_URL", "https://query.wikidata.org/sparql",
    )

    # CORS: origins allowed to call this API ("*" for any)
    CORS_ORIGINS = _split(os.getenv(
        "CORS_ORIGINS",
        "http://localhost:5173,https://jbritosm.github.io",
    ))
    CORS_SUPPORTS_CREDENTIALS = os.getenv("CORS_SUPPORTS_CREDENTIALS", "0") == "1"

    # Upstream request defaults
    SPARQL_TIMEOUT = int(os.getenv("SPARQL_TIMEOUT", "60"))
    USER_AGENT = os.getenv("USER_AGENT", "MedievalChartersWebApp/1.0")

    # Query cache: entry lifetime and sweep interval, in seconds
    CACHE_TTL = int(os.getenv("CACHE_TTL", "3600"))
    CACHE_CHECK_PERIOD = int(os.getenv("CACHE_CHECK_PERIOD", "600"))

    REQUIRED = (
        "WIKIBASE_API_URL",
        "WIKIBASE_ENTITY_URL",
        "WIKIBASE_PROP_DIRECT_URL",
        "WIKIBASE_SPARQL_URL",
        "WIKIDATA_SPARQL_URL",
    )

    @classmethod
    def missing(cls) -> list[str]:
        """Names of required settings that are empty."""
        return [name for name in cls.REQUIRED if not getattr(cls, name)]


class TestConfig(Config):
    """Configuration overrides for testing."""

    TESTING = True
    WIKIBASE_API_URL = "http://wikibase.test/w/api.php"
    WIKIBASE_ENTITY_URL = "http://wikibase.test/entity/"
    WIKIBASE_PROP_DIRECT_URL = "http://wikibase.test/prop/direct/"
    WIKIBASE_SPARQL_URL = "http://wikibase.test/query/sparql"
    WIKIDATA_SPARQL_URL = "http://wikidata.test/sparql"
    CORS_ORIGINS = ["http://localhost:5173"]
    CORS_SUPPORTS_CREDENTIALS = False
    SPARQL_TIMEOUT = 60
    CACHE_TTL = 3600
    CACHE_CHECK_PERIOD = 600
