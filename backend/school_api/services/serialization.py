from typing import Any, Dict, Sequence

from sqlalchemy import inspect
from sqlmodel import SQLModel

from .query import IncludeNode


def relation_label(model: type, relation: str) -> str:
    """Response key for an included relation: the related model's class name."""
    return inspect(model).relationships[relation].mapper.class_.__name__


def serialize(record: SQLModel, includes: Sequence[IncludeNode] = ()) -> Dict[str, Any]:
    """Dump a record's columns plus the relations named in ``includes``."""
    data = record.model_dump()
    for node in includes:
        related = getattr(record, node.relation)
        label = relation_label(type(record), node.relation)
        if related is None:
            data[label] = None
        elif isinstance(related, list):
            data[label] = [serialize(item, node.children) for item in related]
        else:
            data[label] = serialize(related, node.children)
    return data
