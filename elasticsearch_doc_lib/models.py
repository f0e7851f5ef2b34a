"""
Data Models for Elasticsearch Document Library

Type-safe dataclasses for connection settings and bulk results.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from elasticsearch_doc_lib.exceptions import ConfigurationError, ValidationError
from elasticsearch_doc_lib.serialization import to_body

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES = ("http", "https")

INDEX = "index"
DELETE = "delete"
OPERATION_KINDS = (INDEX, DELETE)


@dataclass(frozen=True)
class ConnectionConfig:
    """
    Connection settings for one Elasticsearch cluster.

    Attributes:
        host: Elasticsearch host (default: 'localhost')
        port: Elasticsearch port (default: 9200)
        scheme: 'http' or 'https' (default: 'http')
        username: Basic auth user name (optional)
        password: Basic auth password (optional)
        default_index: Index used when an operation is called without one
    """
    host: str = "localhost"
    port: int = 9200
    scheme: str = "http"
    username: Optional[str] = None
    password: Optional[str] = None
    default_index: Optional[str] = None

    def __post_init__(self):
        """Validate connection configuration."""
        if not self.host or not self.host.strip():
            raise ConfigurationError("host must not be empty")

        if not isinstance(self.port, int) or isinstance(self.port, bool):
            raise ConfigurationError(f"port must be an integer, got {self.port!r}")

        if not 0 < self.port < 65536:
            raise ConfigurationError(f"port must be between 1 and 65535, got {self.port}")

        if self.scheme not in SUPPORTED_SCHEMES:
            raise ConfigurationError(
                f"Unsupported scheme '{self.scheme}', expected one of {', '.join(SUPPORTED_SCHEMES)}"
            )

        if (self.username is None) != (self.password is None):
            logger.warning(
                "Only one of username/password is configured; "
                "requests will be sent without basic authentication"
            )

    @property
    def url(self) -> str:
        """Base URL of the cluster."""
        return f"{self.scheme}://{self.host}:{self.port}"

    @property
    def has_credentials(self) -> bool:
        """True when both username and password are set."""
        return self.username is not None and self.password is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with the password masked."""
        return {
            'host': self.host,
            'port': self.port,
            'scheme': self.scheme,
            'username': self.username,
            'password': '***' if self.password is not None else None,
            'default_index': self.default_index,
        }


@dataclass(frozen=True)
class BulkOperation:
    """
    A single entry of a bulk request.

    Attributes:
        kind: 'index' or 'delete'
        index: Target index name
        id: Document ID (backend assigns one for index operations when None)
        document: Document to store (index operations only)
    """
    kind: str
    index: str
    id: Optional[str] = None
    document: Any = None

    def __post_init__(self):
        """Validate bulk operation."""
        if self.kind not in OPERATION_KINDS:
            raise ValidationError(
                f"Unknown bulk operation '{self.kind}', expected one of {', '.join(OPERATION_KINDS)}"
            )

        if not self.index:
            raise ValidationError(f"Bulk '{self.kind}' operation needs an index name")

        if self.kind == INDEX and self.document is None:
            raise ValidationError("Bulk 'index' operation needs a document")

        if self.kind == DELETE and self.id is None:
            raise ValidationError("Bulk 'delete' operation needs a document ID")

    @classmethod
    def index_op(cls, index: str, document: Any, doc_id: Optional[str] = None) -> "BulkOperation":
        """Create an index operation."""
        return cls(kind=INDEX, index=index, id=doc_id, document=document)

    @classmethod
    def delete_op(cls, index: str, doc_id: str) -> "BulkOperation":
        """Create a delete operation."""
        return cls(kind=DELETE, index=index, id=doc_id)

    def to_actions(self) -> List[Dict[str, Any]]:
        """Render as bulk API lines (action line, then source line for index)."""
        meta: Dict[str, Any] = {'_index': self.index}
        if self.id is not None:
            meta['_id'] = self.id

        actions: List[Dict[str, Any]] = [{self.kind: meta}]
        if self.kind == INDEX:
            actions.append(to_body(self.document))
        return actions


@dataclass(frozen=True)
class BulkItemResult:
    """
    Outcome of one operation inside a bulk request.

    Attributes:
        kind: Operation kind reported by the backend
        index: Index the operation ran against
        id: Document ID
        status: HTTP status code of the item
        result: Backend result ('created', 'updated', 'deleted', 'not_found', ...)
        error: Backend error object when the item failed
    """
    kind: str
    index: str
    id: Optional[str]
    status: int
    result: Optional[str] = None
    error: Optional[Dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        """
        True when the backend reported no error for the item.

        A delete of a missing document (status 404, result 'not_found')
        carries no error and counts as ok, matching the bulk 'errors' flag.
        Check `found` to tell it apart from a real delete.
        """
        return self.error is None

    @property
    def found(self) -> bool:
        """False when the target document did not exist."""
        return self.result != 'not_found'

    @classmethod
    def from_response_item(cls, item: Dict[str, Any]) -> "BulkItemResult":
        """Build from one entry of the bulk response 'items' array."""
        kind, body = next(iter(item.items()))
        return cls(
            kind=kind,
            index=body.get('_index', ''),
            id=body.get('_id'),
            status=int(body.get('status', 0)),
            result=body.get('result'),
            error=body.get('error'),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        result = {
            'kind': self.kind,
            'index': self.index,
            'id': self.id,
            'status': self.status,
            'result': self.result,
        }

        if self.error:
            result['error'] = self.error

        return result


@dataclass(frozen=True)
class SearchHit:
    """
    Single search hit with its metadata.

    Attributes:
        data: Document source, converted to the requested shape
        score: Relevance score
        index: Index name where document was found
        id: Document ID
    """
    data: Any
    score: Optional[float]
    index: str
    id: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'data': self.data,
            'score': self.score,
            'index': self.index,
            'id': self.id,
        }


@dataclass
class BulkResult:
    """
    Result of a bulk request.

    Attributes:
        errors: True if any operation in the batch failed
        items: Per-operation results, in submission order
        took: Time in milliseconds the backend spent on the request
    """
    errors: bool = False
    items: List[BulkItemResult] = field(default_factory=list)
    took: int = 0

    @classmethod
    def empty(cls) -> "BulkResult":
        """Result for a bulk call that had nothing to send."""
        return cls(errors=False, items=[], took=0)

    @classmethod
    def from_response(cls, response: Dict[str, Any]) -> "BulkResult":
        """Build from a raw bulk API response body."""
        items = [BulkItemResult.from_response_item(item) for item in response.get('items', [])]
        return cls(
            errors=bool(response.get('errors', False)),
            items=items,
            took=int(response.get('took', 0)),
        )

    @property
    def failed_items(self) -> List[BulkItemResult]:
        """Items that did not succeed."""
        return [item for item in self.items if not item.ok]

    @property
    def succeeded_items(self) -> List[BulkItemResult]:
        """Items that succeeded."""
        return [item for item in self.items if item.ok]

    @property
    def ids(self) -> List[Optional[str]]:
        """Document IDs in submission order."""
        return [item.id for item in self.items]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'errors': self.errors,
            'took': self.took,
            'items': [item.to_dict() for item in self.items],
        }

    def __len__(self) -> int:
        """Return number of items."""
        return len(self.items)

    def __iter__(self) -> Iterator[BulkItemResult]:
        """Iterate over item results."""
        return iter(self.items)

    def __getitem__(self, index: int) -> BulkItemResult:
        """Get item result by position."""
        return self.items[index]
