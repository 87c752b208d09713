"""Entity properties lookup: one entity's statements plus coordinates.

The query federates into Wikidata for coordinates: a charters item may
point (``P2``) to a Wikidata id, either directly when it is a place or
through its residence (``P55``).
"""

from __future__ import annotations

import re
from string import Template
from typing import Any

from charterskg.errors import InvalidRequest
from charterskg.query import WIKIDATA_SPARQL_URL, execute_sparql
from charterskg.upstream import UpstreamClient

ENTITY_ID_PATTERN = re.compile(r"^[QPL][0-9]+$")

PROPERTIES_QUERY = Template("""
PREFIX wd: <$entity_prefix>
PREFIX wdt: <$direct_prefix>
PREFIX wikibase: <http://wikiba.se/ontology#>
PREFIX bd: <http://www.bigdata.com/rdf#>
PREFIX rdfs: <http://www.w3.org/2000/01/rdf-schema#>

PREFIX wdref: <http://www.wikidata.org/entity/>
PREFIX wdtref: <http://www.wikidata.org/prop/direct/>

SELECT ?propertyLabel ?valueLabel ?instanceOfLabel ?residenceLabel ?coord ?placeCoord WHERE {
  wd:$entity_id ?p ?value .
  ?property wikibase:directClaim ?p .

  OPTIONAL { wd:$entity_id wdt:P3 ?instanceOf }

  OPTIONAL {
    wd:$entity_id wdt:P55 ?residence .
    ?residence wdt:P2 ?residenceWD .
    BIND(IRI(CONCAT("http://www.wikidata.org/entity/", ?residenceWD)) AS ?wdResidence)

    SERVICE <$wikidata_url> {
      OPTIONAL { ?wdResidence wdtref:P625 ?coord . }
    }
  }

  OPTIONAL {
    wd:$entity_id wdt:P2 ?placeWD .
    BIND(IRI(CONCAT("http://www.wikidata.org/entity/", ?placeWD)) AS ?wdPlace)

    SERVICE <$wikidata_url> {
      OPTIONAL { ?wdPlace wdtref:P625 ?placeCoord . }
    }
  }

  SERVICE wikibase:label {
    bd:serviceParam wikibase:language "[AUTO_LANGUAGE],en" .
  }
}""")


class PropertiesService:
    """Fetch the labelled statements of a single charters entity."""

    def __init__(
        self,
        client: UpstreamClient,
        sparql_url: str,
        entity_prefix: str,
        direct_prefix: str,
        wikidata_url: str = WIKIDATA_SPARQL_URL,
    ) -> None:
        self.client = client
        self.sparql_url = sparql_url
        self.entity_prefix = entity_prefix
        self.direct_prefix = direct_prefix
        self.wikidata_url = wikidata_url

    def build_query(self, entity_id: str) -> str:
        if not ENTITY_ID_PATTERN.match(entity_id):
            raise InvalidRequest(f"Invalid entity id: {entity_id!r}")
        return PROPERTIES_QUERY.substitute(
            entity_id=entity_id,
            entity_prefix=self.entity_prefix,
            direct_prefix=self.direct_prefix,
            wikidata_url=self.wikidata_url,
        )

    def properties(self, entity_id: str) -> Any:
        """Run the properties query for *entity_id* on the charters Wikibase."""
        query = self.build_query(entity_id)
        return execute_sparql(query, self.sparql_url, client=self.client)
