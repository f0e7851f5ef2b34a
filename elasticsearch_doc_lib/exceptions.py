"""
Custom Exceptions for Elasticsearch Document Library

Provides a clear exception hierarchy for errors detected before any
request reaches Elasticsearch. Transport and API errors raised by the
elasticsearch client are never wrapped; they propagate unchanged.
"""

from typing import Optional


class DocumentStoreError(Exception):
    """
    Base exception for all library errors.

    All custom exceptions in this library inherit from this base class,
    allowing callers to catch all library-specific errors with a single except clause.
    """
    pass


class ConfigurationError(DocumentStoreError):
    """
    Raised when there's an error in configuration.

    Examples:
        - Empty host or out-of-range port
        - Unsupported scheme
        - Non-numeric ES_PORT environment variable
        - Schema file not found or not valid JSON
    """
    pass


class IndexNameError(ConfigurationError):
    """
    Raised when an operation needs an index name and none is available.

    Happens when the caller passes no index and the store was configured
    without a default index.
    """

    def __init__(self, operation: Optional[str] = None):
        """
        Initialize IndexNameError.

        Args:
            operation: Name of the operation that needed the index (optional)
        """
        self.operation = operation

        if operation:
            message = (
                f"No index name given for '{operation}' and no default index configured"
            )
        else:
            message = "No index name given and no default index configured"

        super().__init__(message)


class ValidationError(DocumentStoreError):
    """
    Raised when input validation fails.

    Examples:
        - Document list and ID list of different lengths
        - Bulk operation of unknown kind
        - Index operation without a document
        - Schema text that is not valid JSON
        - Empty query text
    """
    pass
