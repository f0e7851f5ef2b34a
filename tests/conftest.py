"""
Pytest configuration and fixtures for elasticsearch_doc_lib tests.
"""

import copy
import os
import sys
import uuid
from pathlib import Path
from unittest.mock import patch

import pytest
from elastic_transport import ApiResponseMeta, HttpHeaders, NodeConfig
from elasticsearch import NotFoundError

# Add the parent directory to the Python path so we can import the modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from elasticsearch_doc_lib import ClientFactory, ConnectionConfig, DocumentStore

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def not_found_error(body: dict) -> NotFoundError:
    """Build the NotFoundError the real client raises for a 404."""
    meta = ApiResponseMeta(
        status=404,
        http_version="1.1",
        headers=HttpHeaders(),
        duration=0.0,
        node=NodeConfig("http", "localhost", 9200),
    )
    return NotFoundError(message="not_found", meta=meta, body=body)


class FakeIndices:
    """In-memory stand-in for Elasticsearch.indices."""

    def __init__(self, es: "FakeElasticsearch"):
        self.es = es

    def exists(self, index):
        self.es.calls.append("indices.exists")
        return index in self.es.data

    def create(self, index, body=None):
        self.es.calls.append("indices.create")
        self.es.data.setdefault(index, {})
        self.es.schemas[index] = body
        return {"acknowledged": True, "shards_acknowledged": True, "index": index}

    def delete(self, index):
        self.es.calls.append("indices.delete")
        if index not in self.es.data:
            raise not_found_error({"error": {"type": "index_not_found_exception"}, "status": 404})
        del self.es.data[index]
        self.es.schemas.pop(index, None)
        return {"acknowledged": True}


class FakeElasticsearch:
    """
    In-memory stand-in for the Elasticsearch client.

    Supports the calls the library makes and records every call name in
    `calls`. IDs listed in `fail_ids` fail inside bulk requests.
    """

    def __init__(self):
        self.data = {}
        self.schemas = {}
        self.calls = []
        self.fail_ids = set()
        self.indices = FakeIndices(self)
        self.closed = False

    def _missing(self, index, doc_id, result="not_found"):
        return not_found_error({"_index": index, "_id": doc_id, "result": result, "found": False})

    def ping(self):
        self.calls.append("ping")
        return True

    def close(self):
        self.closed = True

    def index(self, index, document, id=None, refresh=None):
        self.calls.append("index")
        docs = self.data.setdefault(index, {})
        doc_id = id or uuid.uuid4().hex
        result = "updated" if doc_id in docs else "created"
        docs[doc_id] = copy.deepcopy(document)
        return {"_index": index, "_id": doc_id, "result": result}

    def get(self, index, id):
        self.calls.append("get")
        docs = self.data.get(index, {})
        if id not in docs:
            raise self._missing(index, id)
        return {"_index": index, "_id": id, "found": True, "_source": copy.deepcopy(docs[id])}

    def update(self, index, id, doc, refresh=None):
        self.calls.append("update")
        docs = self.data.get(index, {})
        if id not in docs:
            raise self._missing(index, id)
        merged = dict(docs[id], **doc)
        if merged == docs[id]:
            return {"_index": index, "_id": id, "result": "noop"}
        docs[id] = merged
        return {"_index": index, "_id": id, "result": "updated"}

    def delete(self, index, id, refresh=None):
        self.calls.append("delete")
        docs = self.data.get(index, {})
        if id not in docs:
            raise self._missing(index, id)
        del docs[id]
        return {"_index": index, "_id": id, "result": "deleted"}

    def bulk(self, operations, refresh=None):
        self.calls.append("bulk")
        items = []
        lines = list(operations)
        position = 0
        while position < len(lines):
            action, meta = next(iter(lines[position].items()))
            position += 1
            index = meta["_index"]
            doc_id = meta.get("_id")
            docs = self.data.setdefault(index, {})

            if action == "index":
                source = lines[position]
                position += 1
                if doc_id in self.fail_ids:
                    items.append({"index": {
                        "_index": index, "_id": doc_id, "status": 400,
                        "error": {"type": "mapper_parsing_exception", "reason": "failed to parse"},
                    }})
                    continue
                doc_id = doc_id or uuid.uuid4().hex
                result = "updated" if doc_id in docs else "created"
                docs[doc_id] = copy.deepcopy(source)
                items.append({"index": {
                    "_index": index, "_id": doc_id,
                    "status": 200 if result == "updated" else 201, "result": result,
                }})
            else:
                if doc_id in docs:
                    del docs[doc_id]
                    items.append({"delete": {"_index": index, "_id": doc_id, "status": 200, "result": "deleted"}})
                else:
                    items.append({"delete": {"_index": index, "_id": doc_id, "status": 404, "result": "not_found"}})

        errors = any("error" in next(iter(item.values())) for item in items)
        return {"took": 3, "errors": errors, "items": items}

    def count(self, index=None):
        self.calls.append("count")
        if index is None:
            return {"count": sum(len(docs) for docs in self.data.values())}
        if index not in self.data:
            raise not_found_error({"error": {"type": "index_not_found_exception"}, "status": 404})
        return {"count": len(self.data[index])}

    def search(self, index=None, query=None, q=None, size=None, from_=None, **params):
        # Body fields arrive as keyword arguments, never as body=.
        if "body" in params:
            raise TypeError("search() takes body fields as keyword arguments, not body=")
        self.calls.append("search")
        self.last_search = {"index": index, "query": query, "q": q, "size": size, "from_": from_, **params}
        indices = [index] if index is not None else list(self.data)
        query = query or {"match_all": {}}
        start = from_ or 0
        size = 10 if size is None else size

        hits = []
        for name in indices:
            for doc_id, source in self.data.get(name, {}).items():
                if self._matches(query, source) and (q is None or self._contains(source, q)):
                    hits.append({"_index": name, "_id": doc_id, "_score": 1.0, "_source": copy.deepcopy(source)})

        return {"took": 1, "hits": {"total": {"value": len(hits), "relation": "eq"}, "hits": hits[start:start + size]}}

    @staticmethod
    def _contains(source, text):
        return any(text.lower() in str(value).lower() for value in source.values())

    def _matches(self, query, source):
        kind, clause = next(iter(query.items()))
        if kind == "match_all":
            return True
        if kind == "bool":
            must = all(self._matches(c, source) for c in clause.get("must", []) + clause.get("filter", []))
            must_not = any(self._matches(c, source) for c in clause.get("must_not", []))
            should = clause.get("should", [])
            return must and not must_not and (not should or any(self._matches(c, source) for c in should))

        field, value = next(iter(clause.items()))
        if isinstance(value, dict):
            value = value.get("query", value.get("value"))
        if kind == "term":
            return source.get(field) == value
        return str(value).lower() in str(source.get(field, "")).lower()


@pytest.fixture
def fake_es():
    """In-memory Elasticsearch client."""
    return FakeElasticsearch()


@pytest.fixture
def es_class(fake_es):
    """Patch the Elasticsearch class used by ClientFactory."""
    with patch('elasticsearch_doc_lib.connection.Elasticsearch', return_value=fake_es) as mock:
        yield mock


@pytest.fixture
def client_factory(es_class):
    """ClientFactory backed by the fake client."""
    return ClientFactory(ConnectionConfig(host="es.test"))


@pytest.fixture
def store(es_class):
    """DocumentStore with default index 'people' backed by the fake client."""
    return DocumentStore(ConnectionConfig(host="es.test", default_index="people"))


@pytest.fixture
def people_schema():
    """Raw index schema for the 'people' index."""
    return (FIXTURES_DIR / "people.json").read_text(encoding="utf-8")


@pytest.fixture
def sample_people():
    """Four sample people documents."""
    return [
        {"name": "Zhang San", "city": "Wuhan", "description": "java developer, no vue"},
        {"name": "Li Si", "city": "Beijing", "description": "c++ developer, also python"},
        {"name": "Wang Wu", "city": "Beijing", "description": "c++ developer, also go"},
        {"name": "Zhao Liu", "city": "Shanghai", "description": "php developer, no python"},
    ]
