"""
Base class shared by the operation components.
"""

import logging
from typing import Any, Dict, Optional

from elasticsearch import Elasticsearch

from elasticsearch_doc_lib.connection import ClientFactory
from elasticsearch_doc_lib.exceptions import IndexNameError

logger = logging.getLogger(__name__)


def response_body(response: Any) -> Dict[str, Any]:
    """Unwrap an API response into its JSON body."""
    return getattr(response, 'body', response)


class BaseOperations:
    """
    Common plumbing for components that call through a ClientFactory.

    Holds the factory and the default index, and resolves the index name
    for each call.
    """

    def __init__(self, client_factory: ClientFactory, default_index: Optional[str] = None):
        """
        Args:
            client_factory: Factory providing the shared Elasticsearch client
            default_index: Index used when a call passes none
        """
        self.client_factory = client_factory
        self.default_index = default_index

    @property
    def client(self) -> Elasticsearch:
        """Shared Elasticsearch client."""
        return self.client_factory.get_client()

    def resolve_index(self, index: Optional[str], operation: Optional[str] = None) -> str:
        """
        Return the explicit index, falling back to the default index.

        Raises:
            IndexNameError: If neither is available
        """
        name = index or self.default_index
        if not name:
            raise IndexNameError(operation)
        return name

    @staticmethod
    def with_refresh(kwargs: Dict[str, Any], refresh: Any) -> Dict[str, Any]:
        """Add the refresh parameter only when the caller set one."""
        if refresh is not None:
            kwargs['refresh'] = refresh
        return kwargs
