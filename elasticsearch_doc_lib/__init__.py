"""
Elasticsearch Document Library

A thin convenience layer over the official Elasticsearch client for
everyday index and document work.

Features:
- One lazily built, shared client per connection configuration
- Index existence checks, creation (with a raw schema body) and deletion
- Single-document save, partial update, delete and lookup
- Bulk save/delete with per-operation results
- Counts and searches returning plain documents or typed objects

Quick Start:
    >>> from elasticsearch_doc_lib import DocumentStore
    >>>
    >>> store = DocumentStore(host="localhost", port=9200, default_index="people")
    >>> store.create_index(schema=open("people.json").read())
    True
    >>> store.bulk_save([{"name": "Li Si"}, {"name": "Wang Wu"}], ids=["1", "2"], refresh=True)
    >>> store.count()
    2

Example:
    >>> from elasticsearch_doc_lib import DocumentStore, QueryBuilder
    >>>
    >>> store = DocumentStore.from_env()
    >>> people = store.search(QueryBuilder().match("city", "Beijing"), index="people")
"""

__version__ = "1.0.0"
__all__ = [
    # Main client
    "DocumentStore",
    "ClientFactory",
    # Components
    "IndexAdmin",
    "DocumentOps",
    "BulkOps",
    "QueryOps",
    "QueryBuilder",
    # Models
    "ConnectionConfig",
    "BulkOperation",
    "BulkItemResult",
    "BulkResult",
    "SearchHit",
    # Exceptions
    "DocumentStoreError",
    "ConfigurationError",
    "IndexNameError",
    "ValidationError",
    # Convenience functions
    "create_document_store",
]

# Import main components
from elasticsearch_doc_lib.client import DocumentStore
from elasticsearch_doc_lib.connection import ClientFactory
from elasticsearch_doc_lib.index_admin import IndexAdmin
from elasticsearch_doc_lib.documents import DocumentOps
from elasticsearch_doc_lib.bulk import BulkOps
from elasticsearch_doc_lib.queries import QueryOps
from elasticsearch_doc_lib.query_builder import QueryBuilder
from elasticsearch_doc_lib.models import (
    ConnectionConfig,
    BulkOperation,
    BulkItemResult,
    BulkResult,
    SearchHit,
)
from elasticsearch_doc_lib.exceptions import (
    DocumentStoreError,
    ConfigurationError,
    IndexNameError,
    ValidationError,
)


def create_document_store(**kwargs) -> DocumentStore:
    """
    Create a new DocumentStore instance.

    Convenience function for creating a store from connection fields.

    Args:
        **kwargs: ConnectionConfig fields (host, port, scheme, username,
                  password, default_index)

    Returns:
        Configured DocumentStore instance

    Example:
        >>> store = create_document_store(host="es.local", username="elastic", password="secret")
        >>> store.ping()
    """
    return DocumentStore(ConnectionConfig(**kwargs))
