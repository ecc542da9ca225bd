from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from .coercion import coerce_children, safe_parse

logger = logging.getLogger(__name__)

PREFERRED_ARRAY_KEYS = ('records', 'data', 'items', 'rows', 'result')


class Shape(Enum):
    ARRAY_OF_ARRAYS = 'array_of_arrays'
    ARRAY_OF_OBJECTS = 'array_of_objects'
    ARRAY_OF_PRIMITIVES = 'array_of_primitives'
    WRAPPED_ARRAY = 'wrapped_array'
    KEY_VALUE_OBJECT = 'key_value_object'
    PRIMITIVE = 'primitive'


@dataclass(frozen=True)
class Classified:
    """A payload tagged with the table-building strategy that applies to it.

    `value` is the coerced payload, shown as-is when no table can be built.
    `items` holds the list to tabulate (or the wrapped array), `columns` the
    sibling column-name map of a wrapper object, and `mapping` the properties
    of a key/value object.
    """

    shape: Shape
    value: Any = None
    items: Optional[List[Any]] = None
    columns: Any = None
    mapping: Optional[Dict[str, Any]] = None


def find_array_key(obj: Dict[str, Any]) -> Optional[str]:
    for key in PREFERRED_ARRAY_KEYS:
        if isinstance(obj.get(key), list):
            return key
    for key, val in obj.items():
        if isinstance(val, list):
            return key
    return None


def _classify_object(obj: Dict[str, Any], source: Any) -> Classified:
    parsed = coerce_children(obj)
    array_key = find_array_key(parsed)
    if array_key is not None:
        logger.debug("Unwrapping array property %r (%d items)", array_key, len(parsed[array_key]))
        return Classified(
            Shape.WRAPPED_ARRAY,
            value=source,
            items=parsed[array_key],
            columns=parsed.get('columns'),
        )
    return Classified(Shape.KEY_VALUE_OBJECT, value=source, mapping=parsed)


def classify(value: Any) -> Classified:
    """Decide which table-building strategy applies to `value`."""
    value = safe_parse(value)

    if isinstance(value, list):
        items = coerce_children(value)
        if not items:
            return Classified(Shape.PRIMITIVE, value=value)

        first = items[0]
        if isinstance(first, list):
            return Classified(Shape.ARRAY_OF_ARRAYS, value=value, items=items)
        if len(items) == 1 and isinstance(first, dict):
            wrapped = _classify_object(first, value)
            if wrapped.shape is Shape.WRAPPED_ARRAY:
                return wrapped
        if isinstance(first, dict):
            return Classified(Shape.ARRAY_OF_OBJECTS, value=value, items=items)
        return Classified(Shape.ARRAY_OF_PRIMITIVES, value=value, items=items)

    if isinstance(value, dict):
        return _classify_object(value, value)

    return Classified(Shape.PRIMITIVE, value=value)
