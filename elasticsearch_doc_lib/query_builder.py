"""
Query Builder

Builds search request bodies for the common query shapes, ready to
pass to DocumentStore.search().
"""

import logging
from typing import Any, Dict, List, Optional, Union

from elasticsearch_doc_lib.exceptions import ValidationError

logger = logging.getLogger(__name__)


class QueryBuilder:
    """
    Builds Elasticsearch search bodies.

    Every method returns a complete body with "query", "size" and "from".

    Example:
        >>> body = QueryBuilder().match("city", "Beijing", size=5)
        >>> body["query"]
        {'match': {'city': {'query': 'Beijing'}}}
    """

    def __init__(self, default_size: int = 10):
        """
        Initialize query builder.

        Args:
            default_size: Page size used when a method gets no size
        """
        if default_size < 1:
            raise ValidationError(f"default_size must be positive, got {default_size}")
        self.default_size = default_size

    def match_all(self, size: Optional[int] = None, from_offset: int = 0) -> Dict[str, Any]:
        """Match every document."""
        return self._wrap({"match_all": {}}, size, from_offset)

    def match(
        self,
        field: str,
        text: str,
        fuzziness: Optional[Union[int, str]] = None,
        size: Optional[int] = None,
        from_offset: int = 0,
    ) -> Dict[str, Any]:
        """
        Full-text match on one field.

        Args:
            field: Field name
            text: Query text
            fuzziness: Fuzzy matching tolerance (0, 1, 2 or 'AUTO'; optional)
            size: Page size (uses default_size if None)
            from_offset: Offset for pagination

        Returns:
            Search body
        """
        self._require_field(field)
        self._require_text(text)

        options: Dict[str, Any] = {"query": text.strip()}
        if fuzziness is not None:
            options["fuzziness"] = fuzziness

        return self._wrap({"match": {field: options}}, size, from_offset)

    def match_phrase(
        self,
        field: str,
        text: str,
        size: Optional[int] = None,
        from_offset: int = 0,
    ) -> Dict[str, Any]:
        """Exact phrase match on one field."""
        self._require_field(field)
        self._require_text(text)
        return self._wrap({"match_phrase": {field: {"query": text.strip()}}}, size, from_offset)

    def term(
        self,
        field: str,
        value: Any,
        size: Optional[int] = None,
        from_offset: int = 0,
    ) -> Dict[str, Any]:
        """Exact value match on a keyword or numeric field."""
        self._require_field(field)
        if value is None:
            raise ValidationError(f"Term value for field '{field}' cannot be None")
        return self._wrap({"term": {field: {"value": value}}}, size, from_offset)

    def query_string(
        self,
        text: str,
        fields: Optional[List[str]] = None,
        size: Optional[int] = None,
        from_offset: int = 0,
    ) -> Dict[str, Any]:
        """
        Lucene query string search, across all fields unless fields is given.
        """
        self._require_text(text)

        options: Dict[str, Any] = {"query": text.strip()}
        if fields:
            options["fields"] = list(fields)

        return self._wrap({"query_string": options}, size, from_offset)

    def bool_query(
        self,
        must: Optional[List[Dict[str, Any]]] = None,
        should: Optional[List[Dict[str, Any]]] = None,
        must_not: Optional[List[Dict[str, Any]]] = None,
        filter: Optional[List[Dict[str, Any]]] = None,
        size: Optional[int] = None,
        from_offset: int = 0,
    ) -> Dict[str, Any]:
        """
        Combine clauses in a bool query.

        Clauses may be bare query clauses or bodies returned by the other
        builder methods; for the latter only their "query" part is used.
        """
        clauses = {
            "must": must,
            "should": should,
            "must_not": must_not,
            "filter": filter,
        }

        bool_body: Dict[str, Any] = {}
        for occur, items in clauses.items():
            if items:
                bool_body[occur] = [self._unwrap(item) for item in items]

        if not bool_body:
            raise ValidationError("bool query needs at least one clause")

        if "should" in bool_body and not ("must" in bool_body or "filter" in bool_body):
            bool_body["minimum_should_match"] = 1

        logger.debug(
            f"Built bool query with {sum(len(v) for v in bool_body.values() if isinstance(v, list))} clauses"
        )
        return self._wrap({"bool": bool_body}, size, from_offset)

    def _wrap(self, clause: Dict[str, Any], size: Optional[int], from_offset: int) -> Dict[str, Any]:
        if size is None:
            size = self.default_size

        if size < 0:
            raise ValidationError(f"size must be non-negative, got {size}")

        if from_offset < 0:
            raise ValidationError(f"from_offset must be non-negative, got {from_offset}")

        return {
            "query": clause,
            "size": size,
            "from": from_offset,
        }

    @staticmethod
    def _unwrap(item: Dict[str, Any]) -> Dict[str, Any]:
        if "query" in item and isinstance(item["query"], dict):
            return item["query"]
        return item

    @staticmethod
    def _require_field(field: str):
        if not field or not field.strip():
            raise ValidationError("Field name cannot be empty")

    @staticmethod
    def _require_text(text: str):
        if not text or not str(text).strip():
            raise ValidationError("Query text cannot be empty")
