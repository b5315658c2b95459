"""JSON encoding of the domain dataclasses.

Encoding rules:
- dataclasses become dicts of their fields
- ``Decimal`` becomes a string (``"3375.00"``) so no precision is lost
- ``date`` / ``datetime`` become ISO 8601 strings
- enums become their value
- sets become sorted lists

Decoding is driven by the target type's annotations, so a stored value
round-trips into the same dataclass. Unknown keys in stored dicts are
ignored and missing keys take the field default, which lets older saved
collections load after a field is added.
"""

from __future__ import annotations

import dataclasses
import types
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Union, get_args, get_origin, get_type_hints

from backoffice_core.exceptions import StorageError

_hints_cache: dict[type, dict[str, Any]] = {}


def to_jsonable(obj: Any) -> Any:
    """Convert a value (dataclass, list, enum, Decimal, date, ...) to JSON types."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: to_jsonable(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, Decimal):
        return str(obj)
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, dict):
        return {str(to_jsonable(k)): to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (set, frozenset)):
        return sorted((to_jsonable(v) for v in obj), key=str)
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(v) for v in obj]
    return obj


def _hints(cls: type) -> dict[str, Any]:
    if cls not in _hints_cache:
        _hints_cache[cls] = get_type_hints(cls)
    return _hints_cache[cls]


def _decode_dataclass(cls: type, data: Any) -> Any:
    if not isinstance(data, dict):
        raise StorageError(f"Expected an object for {cls.__name__}, got {type(data).__name__}")
    hints = _hints(cls)
    kwargs = {
        f.name: from_jsonable(hints[f.name], data[f.name])
        for f in dataclasses.fields(cls)
        if f.init and f.name in data
    }
    try:
        return cls(**kwargs)
    except (TypeError, ValueError) as e:
        raise StorageError(f"Cannot build {cls.__name__} from stored data: {e}") from e


def from_jsonable(tp: Any, data: Any) -> Any:
    """Decode ``data`` into type ``tp``.

    Args:
        tp: Target type, e.g. ``list[CashShift]`` or ``Decimal | None``.
        data: JSON-compatible value.

    Raises:
        StorageError: If the data does not fit the type.

    """
    if tp is Any:
        return data

    origin = get_origin(tp)
    if origin in (Union, types.UnionType):
        if data is None:
            return None
        candidates = [a for a in get_args(tp) if a is not type(None)]
        return from_jsonable(candidates[0], data)

    if origin in (list, tuple, set, frozenset):
        args = get_args(tp)
        item_type = args[0] if args else Any
        items = [from_jsonable(item_type, v) for v in data]
        return origin(items)
    if origin is dict:
        key_type, value_type = get_args(tp) or (Any, Any)
        return {from_jsonable(key_type, k): from_jsonable(value_type, v) for k, v in data.items()}

    if isinstance(tp, type):
        if dataclasses.is_dataclass(tp):
            return _decode_dataclass(tp, data)
        try:
            if issubclass(tp, Enum):
                return tp(data)
            if tp is Decimal:
                return Decimal(str(data))
            if tp is datetime:
                return datetime.fromisoformat(data)
            if tp is date:
                return date.fromisoformat(data[:10])
        except (ValueError, TypeError, InvalidOperation) as e:
            raise StorageError(f"Cannot decode {data!r} as {tp.__name__}: {e}") from e
        if tp is bool:
            if not isinstance(data, bool):
                raise StorageError(f"Cannot decode {data!r} as bool")
            return data
        if tp in (int, float, str):
            return tp(data)

    return data
