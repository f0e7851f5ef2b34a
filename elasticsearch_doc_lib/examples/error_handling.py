"""
Error Handling Example

Demonstrates which failures raise and which come back as return values.
"""

from elasticsearch import ConnectionError as ESConnectionError

from elasticsearch_doc_lib import BulkOperation, DocumentStore
from elasticsearch_doc_lib.exceptions import (
    DocumentStoreError,
    IndexNameError,
    ValidationError,
)


def main():
    """Demonstrate error handling."""

    store = DocumentStore(host="localhost")

    # Example 1: No index given and no default index
    print("="*60)
    print("Example 1: Missing Index Name")
    print("="*60)

    try:
        store.save({"name": "nobody"})
    except IndexNameError as e:
        print(f"✓ Caught IndexNameError: {e}")

    # Example 2: Mismatched bulk input, rejected before any request
    print("\n" + "="*60)
    print("Example 2: Mismatched IDs")
    print("="*60)

    try:
        store.bulk_save([{"name": "a"}, {"name": "b"}], index="people", ids=["1"])
    except ValidationError as e:
        print(f"✓ Caught ValidationError: {e}")

    # Example 3: Backend outcomes are return values
    print("\n" + "="*60)
    print("Example 3: Check Return Values")
    print("="*60)

    try:
        if not store.delete("does-not-exist", index="people"):
            print("✓ Nothing deleted")

        result = store.bulk([
            BulkOperation.index_op("people", {"name": "c"}, "10"),
            BulkOperation.delete_op("people", "missing"),
        ])
        for item in result:
            print(f"  {item.kind} {item.id}: status={item.status} ok={item.ok}")
    except ESConnectionError as e:
        # Transport errors are passed through untouched
        print(f"✗ Elasticsearch unreachable: {e}")

    # Example 4: Catch all library errors
    print("\n" + "="*60)
    print("Example 4: Catch All Library Errors")
    print("="*60)

    try:
        store.create_index("people", schema="{not json")
    except DocumentStoreError as e:
        print(f"✓ Caught {type(e).__name__}: {e}")

    store.close()


if __name__ == "__main__":
    main()
