"""
Query Operations

Document counts and ad-hoc searches.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from elasticsearch_doc_lib.base import BaseOperations, response_body
from elasticsearch_doc_lib.models import SearchHit
from elasticsearch_doc_lib.serialization import from_source

logger = logging.getLogger(__name__)

# Top-level keys of a search request body; a mapping with none of them is
# treated as a bare query clause.
SEARCH_BODY_KEYS = frozenset({
    'query', 'size', 'from', 'sort', 'aggs', 'aggregations', '_source',
    'track_total_hits', 'highlight', 'post_filter', 'search_after',
    'min_score', 'fields', 'collapse', 'knn', 'timeout',
})


def build_search_body(query: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Normalize a caller query into a search request body.

    Args:
        query: Full search body, bare query clause, or None

    Returns:
        Search body dictionary, or None when no query was given
    """
    if not query:
        return None

    if SEARCH_BODY_KEYS.intersection(query):
        return dict(query)

    return {'query': dict(query)}


# Body keys the client takes under a different keyword argument name.
BODY_KEY_ALIASES = {
    'from': 'from_',
    '_source': 'source',
}


def build_search_arguments(
    query: Optional[Mapping[str, Any]],
    params: Mapping[str, Any],
) -> Dict[str, Any]:
    """
    Turn a caller query and extra parameters into client.search() keyword arguments.

    Body fields become keyword arguments ('from' -> 'from_'); nothing is
    sent as body=. An explicit parameter wins over the body field of the
    same name, so a builder body can be re-paged with size=...

    Args:
        query: Full search body, bare query clause, or None
        params: Extra search parameters (q, size, from_, sort, ...)

    Returns:
        Keyword arguments for client.search(), without the index
    """
    arguments: Dict[str, Any] = {}
    for key, value in (build_search_body(query) or {}).items():
        arguments[BODY_KEY_ALIASES.get(key, key)] = value

    for key, value in params.items():
        name = BODY_KEY_ALIASES.get(key, key)
        if name in arguments and arguments[name] != value:
            logger.debug(f"Search parameter '{name}' overrides the body value {arguments[name]!r}")
        arguments[name] = value

    return arguments


class QueryOps(BaseOperations):
    """
    Count and search operations.

    Unlike the other components, an index is never required here: with
    no explicit and no default index the call covers all indices.
    """

    def count(self, index: Optional[str] = None) -> int:
        """
        Count documents.

        Args:
            index: Index name (uses default index if None; all indices
                   if there is no default either)

        Returns:
            Number of documents
        """
        name = index or self.default_index
        if name is None:
            return self.count_all()

        response = response_body(self.client.count(index=name))
        return int(response['count'])

    def count_all(self) -> int:
        """Count documents across all indices."""
        response = response_body(self.client.count())
        return int(response['count'])

    def search(
        self,
        query: Optional[Mapping[str, Any]] = None,
        target: Optional[Callable[..., Any]] = None,
        index: Optional[str] = None,
        **params: Any,
    ) -> List[Any]:
        """
        Run a search and return the matched documents.

        Args:
            query: Search body or bare query clause (optional with q=...)
            target: Shape to build from each hit source (dict if None)
            index: Index name (uses default index if None; all indices
                   if there is no default either)
            **params: Extra search parameters (q, size, from_, sort, ...)

        Returns:
            Documents of the current result page, in backend order

        Example:
            >>> people = queries.search({"match": {"city": "Beijing"}}, target=Person, index="people")
        """
        return [hit.data for hit in self.search_hits(query, target=target, index=index, **params)]

    def search_hits(
        self,
        query: Optional[Mapping[str, Any]] = None,
        target: Optional[Callable[..., Any]] = None,
        index: Optional[str] = None,
        **params: Any,
    ) -> List[SearchHit]:
        """
        Run a search and return hits with their ID, index and score.

        Takes the same arguments as search().
        """
        name = index or self.default_index
        kwargs = build_search_arguments(query, params)
        if name is not None:
            kwargs['index'] = name

        response = response_body(self.client.search(**kwargs))
        hits = response.get('hits', {}).get('hits', [])

        results = [
            SearchHit(
                data=from_source(hit.get('_source', {}), target),
                score=hit.get('_score'),
                index=hit.get('_index', name or ''),
                id=hit.get('_id', ''),
            )
            for hit in hits
        ]

        logger.debug(f"Search on '{name or '_all'}' returned {len(results)} hits")
        return results
