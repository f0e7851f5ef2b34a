"""
Elasticsearch Client Factory

Builds the Elasticsearch client for a ConnectionConfig on first use and
hands the same instance to every caller afterwards.
"""

import base64
import logging
import threading
from typing import Any, Dict, Optional

from elasticsearch import Elasticsearch

from elasticsearch_doc_lib.models import ConnectionConfig

logger = logging.getLogger(__name__)

CONTENT_TYPE_HEADER = "Content-Type"
PRODUCT_HEADER = "X-Elastic-Product"
PRODUCT_NAME = "Elasticsearch"


def basic_auth_header(username: str, password: str) -> str:
    """Build the value of a Basic Authorization header."""
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


class ClientFactory:
    """
    Lazily constructs and memoizes one Elasticsearch client.

    The client is built on the first get_client() call. Concurrent first
    calls build exactly one client; the rest receive the same instance.
    No health check is done at construction, so an unreachable cluster
    shows up as a transport error on the first real request.

    Example:
        >>> factory = ClientFactory(ConnectionConfig(host="localhost"))
        >>> es = factory.get_client()
        >>> es is factory.get_client()
        True
    """

    def __init__(self, config: Optional[ConnectionConfig] = None, **client_options: Any):
        """
        Initialize client factory.

        Args:
            config: Connection settings (defaults to ConnectionConfig())
            **client_options: Extra keyword arguments for the Elasticsearch
                              constructor (e.g. request_timeout, verify_certs)
        """
        self.config = config or ConnectionConfig()
        self.client_options = client_options

        self._client: Optional[Elasticsearch] = None
        self._lock = threading.Lock()

        logger.info(f"ClientFactory initialized with URL: {self.config.url}")

    def build_headers(self) -> Dict[str, str]:
        """Default headers sent with every request."""
        headers = {
            CONTENT_TYPE_HEADER: "application/json",
            PRODUCT_HEADER: PRODUCT_NAME,
        }

        if self.config.has_credentials:
            headers["Authorization"] = basic_auth_header(self.config.username, self.config.password)

        return headers

    def _create_client(self) -> Elasticsearch:
        """Create Elasticsearch client."""
        client = Elasticsearch(
            hosts=[{
                "host": self.config.host,
                "port": self.config.port,
                "scheme": self.config.scheme,
            }],
            headers=self.build_headers(),
            **self.client_options,
        )
        logger.info(f"Elasticsearch client created for {self.config.url}")
        return client

    def get_client(self) -> Elasticsearch:
        """
        Get Elasticsearch client instance.

        Returns:
            The shared Elasticsearch client
        """
        client = self._client
        if client is not None:
            return client

        with self._lock:
            if self._client is None:
                self._client = self._create_client()
            return self._client

    @property
    def is_initialized(self) -> bool:
        """True once the client has been built."""
        return self._client is not None

    def close(self):
        """Close the Elasticsearch client if one was built."""
        with self._lock:
            client, self._client = self._client, None

        if client is not None:
            client.close()
            logger.info("Elasticsearch connection closed")

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
