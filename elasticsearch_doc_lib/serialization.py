"""
Document Serialization

Turns caller documents into request bodies and stored sources back into
the caller's target shape.
"""

import dataclasses
from typing import Any, Callable, Dict, Mapping, Optional


def to_body(document: Any) -> Dict[str, Any]:
    """
    Convert a document into a JSON-serializable request body.

    Accepts mappings, dataclass instances, and objects with a to_dict() method.

    Args:
        document: Document to convert

    Returns:
        Dictionary body

    Raises:
        TypeError: If the document cannot be converted
    """
    if isinstance(document, Mapping):
        return dict(document)

    if dataclasses.is_dataclass(document) and not isinstance(document, type):
        return dataclasses.asdict(document)

    to_dict = getattr(document, 'to_dict', None)
    if callable(to_dict):
        return to_dict()

    raise TypeError(f"Cannot convert {type(document).__name__} to a document body")


def from_source(source: Optional[Dict[str, Any]], target: Optional[Callable[..., Any]] = None) -> Any:
    """
    Convert a stored _source into the caller's target shape.

    Args:
        source: Document source returned by Elasticsearch
        target: None for a plain dict, a dataclass type, a class with a
                from_dict() classmethod, or any callable accepting the
                source fields as keyword arguments

    Returns:
        Converted document, or None when source is None
    """
    if source is None:
        return None

    if target is None or target is dict:
        return dict(source)

    from_dict = getattr(target, 'from_dict', None)
    if callable(from_dict):
        return from_dict(source)

    if dataclasses.is_dataclass(target):
        # Stored documents may carry fields the dataclass does not declare
        names = {f.name for f in dataclasses.fields(target) if f.init}
        return target(**{k: v for k, v in source.items() if k in names})

    return target(**source)
