"""
Index Administration

Existence checks, creation and deletion of indices.
"""

import json
import logging
from typing import Any, Mapping, Optional, Union

from elasticsearch_doc_lib.base import BaseOperations, response_body
from elasticsearch_doc_lib.exceptions import ValidationError

logger = logging.getLogger(__name__)

Schema = Union[str, bytes, Mapping[str, Any]]


class IndexAdmin(BaseOperations):
    """
    Index-level operations.

    Every method takes an optional index name and falls back to the
    configured default index.
    """

    def ping(self) -> bool:
        """Check whether the cluster answers."""
        return bool(self.client.ping())

    def exists(self, index: Optional[str] = None) -> bool:
        """
        Check whether an index exists.

        Args:
            index: Index name (uses default index if None)

        Returns:
            True if the index exists
        """
        name = self.resolve_index(index, "exists")
        return bool(self.client.indices.exists(index=name))

    def create(self, index: Optional[str] = None, schema: Optional[Schema] = None) -> bool:
        """
        Create an index.

        The schema is sent as the request body as-is; its settings and
        mappings are not inspected.

        Args:
            index: Index name (uses default index if None)
            schema: Raw JSON text or a mapping with settings/mappings (optional)

        Returns:
            True if the backend acknowledged the creation

        Raises:
            ValidationError: If schema text is not valid JSON
        """
        name = self.resolve_index(index, "create")
        body = self._parse_schema(schema)

        if body is None:
            response = self.client.indices.create(index=name)
        else:
            response = self.client.indices.create(index=name, body=body)

        acknowledged = bool(response_body(response).get('acknowledged', False))
        if acknowledged:
            logger.info(f"Index '{name}' created")
        else:
            logger.warning(f"Creation of index '{name}' was not acknowledged")
        return acknowledged

    def delete(self, index: Optional[str] = None) -> bool:
        """
        Delete an index.

        Args:
            index: Index name (uses default index if None)

        Returns:
            True if the backend acknowledged the deletion
        """
        name = self.resolve_index(index, "delete")
        response = self.client.indices.delete(index=name)

        acknowledged = bool(response_body(response).get('acknowledged', False))
        if acknowledged:
            logger.info(f"Index '{name}' deleted")
        else:
            logger.warning(f"Deletion of index '{name}' was not acknowledged")
        return acknowledged

    @staticmethod
    def _parse_schema(schema: Optional[Schema]) -> Optional[Mapping[str, Any]]:
        if schema is None:
            return None

        if isinstance(schema, Mapping):
            return schema

        try:
            body = json.loads(schema)
        except ValueError as e:
            raise ValidationError(f"Index schema is not valid JSON: {e}")

        if not isinstance(body, dict):
            raise ValidationError("Index schema must be a JSON object")
        return body
