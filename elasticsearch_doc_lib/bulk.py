"""
Bulk Operations

Batched save and delete, dispatched as a single bulk request.
"""

import logging
from typing import Any, List, Optional, Sequence

from elasticsearch_doc_lib.base import BaseOperations, response_body
from elasticsearch_doc_lib.exceptions import ValidationError
from elasticsearch_doc_lib.models import BulkOperation, BulkResult

logger = logging.getLogger(__name__)


class BulkOps(BaseOperations):
    """
    Bulk operations.

    All helpers build a list of BulkOperation and hand it to bulk(),
    which issues exactly one request. Item-level failures are reported
    in the returned BulkResult, not raised.

    Example:
        >>> result = bulk_ops.bulk_save([{"name": "a"}, {"name": "b"}], index="people", ids=["1", "2"])
        >>> if result.errors:
        ...     for item in result.failed_items:
        ...         print(item.id, item.error)
    """

    def bulk_save(
        self,
        documents: Sequence[Any],
        index: Optional[str] = None,
        ids: Optional[Sequence[Optional[str]]] = None,
        refresh: Any = None,
    ) -> BulkResult:
        """
        Index many documents in one request.

        Args:
            documents: Documents to index, in order
            index: Index name (uses default index if None)
            ids: Document IDs matching documents one-to-one (optional)
            refresh: Refresh policy passed to Elasticsearch (optional)

        Returns:
            BulkResult with one item per document

        Raises:
            ValidationError: If ids is given and its length differs from documents
        """
        documents = list(documents or [])
        if ids is not None and len(ids) != len(documents):
            raise ValidationError(
                f"Got {len(ids)} ids for {len(documents)} documents, bulk save aborted"
            )

        if not documents:
            return BulkResult.empty()

        name = self.resolve_index(index, "bulk_save")
        if ids is None:
            ids = [None] * len(documents)

        operations = [
            BulkOperation.index_op(name, document, doc_id)
            for document, doc_id in zip(documents, ids)
        ]
        return self.bulk(operations, refresh=refresh)

    def bulk_delete(
        self,
        ids: Sequence[str],
        index: Optional[str] = None,
        refresh: Any = None,
    ) -> BulkResult:
        """
        Delete many documents in one request.

        Args:
            ids: IDs of documents to delete
            index: Index name (uses default index if None)
            refresh: Refresh policy passed to Elasticsearch (optional)

        Returns:
            BulkResult with one item per ID
        """
        ids = list(ids or [])
        if not ids:
            return BulkResult.empty()

        name = self.resolve_index(index, "bulk_delete")
        operations = [BulkOperation.delete_op(name, doc_id) for doc_id in ids]
        return self.bulk(operations, refresh=refresh)

    def bulk(self, operations: Sequence[BulkOperation], refresh: Any = None) -> BulkResult:
        """
        Send a pre-built list of operations as one bulk request.

        Args:
            operations: Operations to run, in order
            refresh: Refresh policy passed to Elasticsearch (optional)

        Returns:
            BulkResult with per-operation status
        """
        operations = list(operations or [])
        if not operations:
            return BulkResult.empty()

        lines: List[dict] = []
        for operation in operations:
            if not isinstance(operation, BulkOperation):
                raise ValidationError(
                    f"Expected BulkOperation, got {type(operation).__name__}"
                )
            lines.extend(operation.to_actions())

        response = self.client.bulk(**self.with_refresh({'operations': lines}, refresh))
        result = BulkResult.from_response(response_body(response))

        if result.errors:
            logger.warning(
                f"Bulk request finished with errors: "
                f"{len(result.failed_items)} of {len(result)} operations failed"
            )
        else:
            logger.info(f"Bulk request finished: {len(result)} operations in {result.took}ms")

        return result
