"""
Tests for the DocumentStore facade.

Runs the full people workflow against the in-memory client.
"""

from dataclasses import dataclass
from typing import Optional

import pytest

from elasticsearch_doc_lib import (
    BulkOperation,
    ClientFactory,
    ConfigurationError,
    ConnectionConfig,
    DocumentStore,
    IndexNameError,
    QueryBuilder,
    ValidationError,
    create_document_store,
)


@dataclass
class Person:
    name: str
    city: str
    description: Optional[str] = None


class TestDocumentStoreSetup:
    """Test construction of the store."""

    def test_overrides_replace_config_fields(self):
        """Test keyword overrides on top of a config."""
        base = ConnectionConfig(host="es.test", port=9201)
        store = DocumentStore(base, default_index="people")

        assert store.config.host == "es.test"
        assert store.config.port == 9201
        assert store.default_index == "people"

    def test_invalid_override_rejected(self):
        """Test overrides are validated like any config."""
        with pytest.raises(ConfigurationError):
            DocumentStore(port=-1)

    def test_shared_client_factory(self, es_class):
        """Test two stores can share one client."""
        factory = ClientFactory(ConnectionConfig(host="es.test"))
        first = DocumentStore(client_factory=factory, default_index="people")
        second = DocumentStore(client_factory=factory, default_index="staff")

        assert first.get_client() is second.get_client()
        es_class.assert_called_once()

    def test_shared_client_factory_rejects_connection_overrides(self, es_class):
        """Test a shared factory only allows the default index to change."""
        factory = ClientFactory(ConnectionConfig(host="es.test"))

        with pytest.raises(ConfigurationError, match="host"):
            DocumentStore(client_factory=factory, host="other")
        with pytest.raises(ConfigurationError, match="port, username"):
            DocumentStore(client_factory=factory, port=9201, username="elastic")

        store = DocumentStore(client_factory=factory, default_index="people")
        assert store.config.url == factory.config.url
        es_class.assert_not_called()

    def test_shared_client_factory_rejects_other_config(self, es_class):
        """Test a config for another cluster cannot ride on a shared factory."""
        factory = ClientFactory(ConnectionConfig(host="es.test"))

        with pytest.raises(ConfigurationError, match="does not match"):
            DocumentStore(ConnectionConfig(host="other"), client_factory=factory)

        store = DocumentStore(ConnectionConfig(host="es.test", default_index="staff"), client_factory=factory)
        assert store.default_index == "staff"

    def test_get_client_is_memoized(self, store, es_class):
        """Test repeated get_client calls return one handle."""
        assert store.get_client() is store.get_client()
        es_class.assert_called_once()

    def test_from_env(self, monkeypatch, es_class):
        """Test building a store from environment variables."""
        monkeypatch.setenv("ES_HOST", "es.env")
        monkeypatch.setenv("ES_PORT", "9202")
        monkeypatch.setenv("ES_INDEX", "people")

        store = DocumentStore.from_env()

        assert store.config.url == "http://es.env:9202"
        assert store.default_index == "people"

    def test_create_document_store(self):
        """Test the convenience constructor."""
        store = create_document_store(host="es.test", username="elastic", password="secret")
        assert store.client_factory.build_headers()["Authorization"].startswith("Basic ")

    def test_context_manager_closes_client(self, es_class, fake_es):
        """Test the store closes its client on exit."""
        with DocumentStore(host="es.test") as store:
            store.ping()
        assert fake_es.closed


class TestPeopleWorkflow:
    """End-to-end workflow on the 'people' index."""

    def test_scenario(self, store, fake_es, people_schema, sample_people):
        """Test create, bulk save, count and search."""
        if store.index_exists():
            store.delete_index()

        assert store.create_index(schema=people_schema)

        result = store.bulk_save(sample_people, ids=["1", "2", "3", "4"])
        assert not result.errors
        assert len(result) == 4

        assert store.count("people") == 4

        found = store.search(QueryBuilder().term("city", "Beijing"), target=Person, index="people")
        assert sorted(person.name for person in found) == ["Li Si", "Wang Wu"]
        assert all(person.city == "Beijing" for person in found)

    def test_single_document_lifecycle(self, store):
        """Test save, get, update and delete with the default index."""
        person = Person("Wang Rui", "Wuhan", "java developer, no vue")

        assert store.save(person, doc_id="11") == "11"
        assert store.get_by_id("11", Person) == person

        assert store.update("11", {"city": "Shenzhen"})
        assert store.get_by_id("11", Person).city == "Shenzhen"

        assert store.delete("11")
        assert store.get_by_id("11") is None
        assert not store.delete("11")
        assert not store.update("11", {"city": "Wuhan"})

    def test_bulk_helpers(self, store, sample_people):
        """Test bulk_delete and bulk through the facade."""
        store.bulk_save(sample_people, ids=["1", "2", "3", "4"])

        deleted = store.bulk_delete(["11", "2"])
        assert [item.result for item in deleted] == ["not_found", "deleted"]

        mixed = store.bulk([
            BulkOperation.index_op("people", {"name": "Sun Qi", "city": "Wuhan"}, "5"),
            BulkOperation.delete_op("people", "1"),
        ])
        assert not mixed.errors
        assert store.count() == 3
        assert store.count_all() == 3

    def test_search_hits(self, store, sample_people):
        """Test hits with metadata through the facade."""
        store.bulk_save(sample_people, ids=["1", "2", "3", "4"])

        hits = store.search_hits(q="python")

        assert sorted(hit.id for hit in hits) == ["2", "4"]
        assert all(hit.index == "people" for hit in hits)

    def test_validation_happens_before_network(self, store, fake_es, sample_people):
        """Test caller errors raise with no request issued."""
        with pytest.raises(ValidationError):
            store.bulk_save(sample_people, ids=["1"])
        with pytest.raises(ValidationError):
            store.create_index(schema="{oops")

        assert fake_es.calls == []

    def test_missing_index_without_default(self, es_class, fake_es):
        """Test operations without any index name."""
        store = DocumentStore(host="es.test")

        with pytest.raises(IndexNameError):
            store.save({"name": "x"})
        with pytest.raises(IndexNameError):
            store.get_by_id("1")

        assert fake_es.calls == []
        assert store.count() == 0
