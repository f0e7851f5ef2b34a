"""
Document Operations

Single-document save, update, delete and lookup.
"""

import logging
from typing import Any, Callable, Optional

from elasticsearch import NotFoundError

from elasticsearch_doc_lib.base import BaseOperations, response_body
from elasticsearch_doc_lib.serialization import from_source, to_body

logger = logging.getLogger(__name__)


class DocumentOps(BaseOperations):
    """
    Single-document operations.

    update() and delete() report "nothing changed" and "not found" as
    False; get_by_id() reports "not found" as None.
    """

    def save(
        self,
        document: Any,
        index: Optional[str] = None,
        doc_id: Optional[str] = None,
        refresh: Any = None,
    ) -> str:
        """
        Index or re-index a document.

        Args:
            document: Mapping, dataclass instance or object with to_dict()
            index: Index name (uses default index if None)
            doc_id: Document ID (backend assigns one if None)
            refresh: Refresh policy passed to Elasticsearch (optional)

        Returns:
            ID of the stored document
        """
        name = self.resolve_index(index, "save")
        kwargs = self.with_refresh({'index': name, 'document': to_body(document)}, refresh)
        if doc_id is not None:
            kwargs['id'] = doc_id

        response = response_body(self.client.index(**kwargs))
        saved_id = response['_id']
        logger.debug(f"Saved document '{saved_id}' in '{name}' ({response.get('result')})")
        return saved_id

    def update(
        self,
        doc_id: str,
        document: Any,
        index: Optional[str] = None,
        refresh: Any = None,
    ) -> bool:
        """
        Partially update a document.

        Args:
            doc_id: Document ID
            document: Fields to merge into the stored document
            index: Index name (uses default index if None)
            refresh: Refresh policy passed to Elasticsearch (optional)

        Returns:
            True only if the document was actually modified
        """
        name = self.resolve_index(index, "update")
        kwargs = self.with_refresh({'index': name, 'id': doc_id, 'doc': to_body(document)}, refresh)

        try:
            response = response_body(self.client.update(**kwargs))
        except NotFoundError:
            logger.debug(f"Update skipped, document '{doc_id}' not found in '{name}'")
            return False

        return response.get('result') == 'updated'

    def delete(self, doc_id: str, index: Optional[str] = None, refresh: Any = None) -> bool:
        """
        Delete a document.

        Args:
            doc_id: Document ID
            index: Index name (uses default index if None)
            refresh: Refresh policy passed to Elasticsearch (optional)

        Returns:
            True only if a document was deleted
        """
        name = self.resolve_index(index, "delete")
        kwargs = self.with_refresh({'index': name, 'id': doc_id}, refresh)

        try:
            response = response_body(self.client.delete(**kwargs))
        except NotFoundError:
            logger.debug(f"Delete skipped, document '{doc_id}' not found in '{name}'")
            return False

        return response.get('result') == 'deleted'

    def get_by_id(
        self,
        doc_id: str,
        target: Optional[Callable[..., Any]] = None,
        index: Optional[str] = None,
    ) -> Any:
        """
        Fetch a document by ID.

        Args:
            doc_id: Document ID
            target: Shape to build from the stored source (dict if None)
            index: Index name (uses default index if None)

        Returns:
            The document in the target shape, or None if not found
        """
        name = self.resolve_index(index, "get_by_id")

        try:
            response = response_body(self.client.get(index=name, id=doc_id))
        except NotFoundError:
            return None

        if not response.get('found', True):
            return None
        return from_source(response.get('_source'), target)
