"""
Document Store Client

High-level client wrapping index, document, bulk and query operations
behind simplified signatures.
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional, Sequence, Union

from elasticsearch import Elasticsearch

from elasticsearch_doc_lib.bulk import BulkOps
from elasticsearch_doc_lib.config.loader import ConfigLoader
from elasticsearch_doc_lib.connection import ClientFactory
from elasticsearch_doc_lib.documents import DocumentOps
from elasticsearch_doc_lib.exceptions import ConfigurationError
from elasticsearch_doc_lib.index_admin import IndexAdmin, Schema
from elasticsearch_doc_lib.models import BulkOperation, BulkResult, ConnectionConfig, SearchHit
from elasticsearch_doc_lib.queries import QueryOps

logger = logging.getLogger(__name__)


def _connection_key(config: ConnectionConfig) -> tuple:
    return (config.host, config.port, config.scheme, config.username, config.password)


class DocumentStore:
    """
    High-level client for one Elasticsearch cluster.

    Index names are optional everywhere: a call without one uses the
    configured default index.

    Example:
        >>> store = DocumentStore(host="localhost", default_index="people")
        >>> store.save({"name": "Zhang San", "city": "Wuhan"}, doc_id="1")
        '1'
        >>> store.get_by_id("1")
        {'name': 'Zhang San', 'city': 'Wuhan'}
        >>> store.count()
        1
    """

    def __init__(
        self,
        config: Optional[ConnectionConfig] = None,
        client_factory: Optional[ClientFactory] = None,
        **overrides: Any,
    ):
        """
        Initialize document store.

        Args:
            config: Connection settings (defaults to ConnectionConfig())
            client_factory: Factory to share with other stores (optional;
                            its config is used when config is None)
            **overrides: ConnectionConfig fields overriding config
                         (host, port, scheme, username, password, default_index;
                         only default_index with a client_factory)

        Raises:
            ConfigurationError: If the settings are invalid or name a different
                                connection than client_factory
        """
        if client_factory is not None:
            connection_fields = sorted(set(overrides) - {'default_index'})
            if connection_fields:
                raise ConfigurationError(
                    f"Cannot override {', '.join(connection_fields)} on a shared client factory; "
                    f"only default_index may be set"
                )
            if config is not None and _connection_key(config) != _connection_key(client_factory.config):
                raise ConfigurationError(
                    f"config ({config.url}) does not match the shared client factory "
                    f"({client_factory.config.url})"
                )

        if config is None:
            config = client_factory.config if client_factory is not None else ConnectionConfig()
        if overrides:
            config = replace(config, **overrides)

        self.config = config
        self.client_factory = client_factory or ClientFactory(config)

        default_index = config.default_index
        self.indices = IndexAdmin(self.client_factory, default_index)
        self.documents = DocumentOps(self.client_factory, default_index)
        self.bulk_ops = BulkOps(self.client_factory, default_index)
        self.queries = QueryOps(self.client_factory, default_index)

        logger.info(
            f"DocumentStore initialized for {config.url} "
            f"(default index: {default_index or 'none'})"
        )

    @classmethod
    def from_env(cls, env_file: Optional[Union[str, Path]] = None) -> "DocumentStore":
        """
        Create a store from ES_* environment variables.

        Args:
            env_file: Path to a .env file (optional)

        Returns:
            Configured DocumentStore
        """
        return cls(ConfigLoader(env_file).load_connection())

    @property
    def default_index(self) -> Optional[str]:
        """Index used when a call passes none."""
        return self.config.default_index

    def get_client(self) -> Elasticsearch:
        """Get the underlying Elasticsearch client."""
        return self.client_factory.get_client()

    def close(self):
        """Close the underlying Elasticsearch client."""
        self.client_factory.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    # Index administration

    def ping(self) -> bool:
        """Check whether the cluster answers."""
        return self.indices.ping()

    def index_exists(self, index: Optional[str] = None) -> bool:
        """Check whether an index exists."""
        return self.indices.exists(index)

    def create_index(self, index: Optional[str] = None, schema: Optional[Schema] = None) -> bool:
        """
        Create an index, optionally with a raw schema body.

        Returns:
            True if the backend acknowledged the creation
        """
        return self.indices.create(index, schema)

    def delete_index(self, index: Optional[str] = None) -> bool:
        """Delete an index; True if acknowledged."""
        return self.indices.delete(index)

    # Single documents

    def save(
        self,
        document: Any,
        index: Optional[str] = None,
        doc_id: Optional[str] = None,
        refresh: Any = None,
    ) -> str:
        """Index a document and return its ID."""
        return self.documents.save(document, index=index, doc_id=doc_id, refresh=refresh)

    def update(
        self,
        doc_id: str,
        document: Any,
        index: Optional[str] = None,
        refresh: Any = None,
    ) -> bool:
        """Partially update a document; True only if it was modified."""
        return self.documents.update(doc_id, document, index=index, refresh=refresh)

    def delete(self, doc_id: str, index: Optional[str] = None, refresh: Any = None) -> bool:
        """Delete a document; True only if it existed."""
        return self.documents.delete(doc_id, index=index, refresh=refresh)

    def get_by_id(
        self,
        doc_id: str,
        target: Optional[Callable[..., Any]] = None,
        index: Optional[str] = None,
    ) -> Any:
        """Fetch a document by ID; None if not found."""
        return self.documents.get_by_id(doc_id, target=target, index=index)

    # Bulk

    def bulk_save(
        self,
        documents: Sequence[Any],
        index: Optional[str] = None,
        ids: Optional[Sequence[Optional[str]]] = None,
        refresh: Any = None,
    ) -> BulkResult:
        """Index many documents in one request."""
        return self.bulk_ops.bulk_save(documents, index=index, ids=ids, refresh=refresh)

    def bulk_delete(
        self,
        ids: Sequence[str],
        index: Optional[str] = None,
        refresh: Any = None,
    ) -> BulkResult:
        """Delete many documents in one request."""
        return self.bulk_ops.bulk_delete(ids, index=index, refresh=refresh)

    def bulk(self, operations: Sequence[BulkOperation], refresh: Any = None) -> BulkResult:
        """Send pre-built operations as one bulk request."""
        return self.bulk_ops.bulk(operations, refresh=refresh)

    # Queries

    def count(self, index: Optional[str] = None) -> int:
        """Count documents in an index (all indices without index or default)."""
        return self.queries.count(index)

    def count_all(self) -> int:
        """Count documents across all indices."""
        return self.queries.count_all()

    def search(
        self,
        query: Optional[Mapping[str, Any]] = None,
        target: Optional[Callable[..., Any]] = None,
        index: Optional[str] = None,
        **params: Any,
    ) -> List[Any]:
        """Run a search and return the matched documents in target shape."""
        return self.queries.search(query, target=target, index=index, **params)

    def search_hits(
        self,
        query: Optional[Mapping[str, Any]] = None,
        target: Optional[Callable[..., Any]] = None,
        index: Optional[str] = None,
        **params: Any,
    ) -> List[SearchHit]:
        """Run a search and return hits with ID, index and score."""
        return self.queries.search_hits(query, target=target, index=index, **params)
