"""
Basic Usage Example

Demonstrates index creation, bulk loading, counting and searching with
the Elasticsearch Document Library.
"""

from dataclasses import dataclass
from typing import Optional

from elasticsearch_doc_lib import DocumentStore, QueryBuilder
from elasticsearch_doc_lib.config import ConfigLoader, setup_logging

SCHEMA = """
{
  "mappings": {
    "properties": {
      "name": {"type": "keyword"},
      "city": {"type": "keyword"},
      "description": {"type": "text"}
    }
  }
}
"""


@dataclass
class Person:
    name: str
    city: str
    description: Optional[str] = None


def main():
    """Run basic usage examples."""
    loader = ConfigLoader()
    setup_logging(loader.log_level())

    store = DocumentStore(loader.load_connection(), default_index="example_people")

    print("Pinging cluster...")
    if not store.ping():
        print("Elasticsearch is not reachable")
        return

    if store.index_exists():
        store.delete_index()
    print(f"Index created: {store.create_index(schema=SCHEMA)}")

    people = [
        Person("Zhang San", "Wuhan", "java developer, no vue"),
        Person("Li Si", "Beijing", "c++ developer, also python"),
        Person("Wang Wu", "Beijing", "c++ developer, also go"),
        Person("Zhao Liu", "Shanghai", "php developer, no python"),
    ]
    result = store.bulk_save(people, ids=["1", "2", "3", "4"], refresh=True)
    if result.errors:
        for item in result.failed_items:
            print(f"  Failed: {item.id} {item.error}")
    else:
        print(f"Bulk save ok: {len(result)} documents in {result.took}ms")

    print(f"\nDocuments in index: {store.count()}")

    print("\n" + "="*60)
    print("People in Beijing")
    print("="*60)
    for person in store.search(QueryBuilder().term("city", "Beijing"), target=Person):
        print(f"  {person.name}: {person.description}")

    print("\n" + "="*60)
    print("Query string 'python'")
    print("="*60)
    for hit in store.search_hits(q="python", target=Person):
        print(f"  [{hit.id}] {hit.data.name} (score {hit.score:.2f})")

    print(f"\nUpdated: {store.update('1', {'city': 'Shenzhen'}, refresh=True)}")
    print(f"Person 1: {store.get_by_id('1', target=Person)}")
    print(f"Deleted: {store.delete('1', refresh=True)}")
    print(f"Deleted again: {store.delete('1')}")

    store.delete_index()
    store.close()


if __name__ == "__main__":
    main()
