"""
DetaKit - Item Model

Converts user records into canonical Base items and decodes stored items
back into records.

A record is a dataclass instance or a pydantic model instance. Field names
on the wire come from serialization metadata:
- dataclasses: item_field(name="...", omit_empty=True)
- pydantic: Field(alias="...") or Field(serialization_alias="...")
  and Field(json_schema_extra={"omit_empty": True})

Author: DetaKit Project
"""

import dataclasses
import logging
import types
import typing
from collections.abc import Mapping
from typing import Any, Dict, Optional

from pydantic import BaseModel

from ..exceptions import ErrorKind, DetaValidationError

# Configure logging
logger = logging.getLogger(__name__)


ITEM_NAME = "item_name"
OMIT_EMPTY = "omit_empty"


def item_field(name: Optional[str] = None, omit_empty: bool = False, **kwargs) -> Any:
    """
    Declare a dataclass field with Base serialization metadata.

    Args:
        name: Wire name of the field (defaults to the attribute name)
        omit_empty: Drop the field from the item when it holds a zero value
        **kwargs: Passed through to dataclasses.field (default, default_factory, ...)

    Returns:
        A dataclasses.field
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    if name is not None:
        metadata[ITEM_NAME] = name
    metadata[OMIT_EMPTY] = omit_empty
    return dataclasses.field(metadata=metadata, **kwargs)


def is_record(value: Any) -> bool:
    """Check whether value is a record instance (dataclass or pydantic model)."""
    if isinstance(value, BaseModel):
        return True
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def is_record_type(model: Any) -> bool:
    """Check whether model is a record class usable as a decoding target."""
    if not isinstance(model, type):
        return False
    return dataclasses.is_dataclass(model) or issubclass(model, BaseModel)


def _is_empty(value: Any) -> bool:
    """Zero-value check used by omit-empty fields."""
    if value is None:
        return True
    if isinstance(value, (str, bytes, list, tuple, dict)):
        return len(value) == 0
    if isinstance(value, (bool, int, float)):
        return not value
    return False


def _record_fields(record: Any):
    """
    Yield (attribute, wire name, omit empty) for every field of a record.
    """
    if isinstance(record, BaseModel):
        for attr, info in type(record).model_fields.items():
            wire = info.serialization_alias or info.alias or attr
            extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
            yield attr, wire, bool(extra.get(OMIT_EMPTY, False))
    else:
        for f in dataclasses.fields(record):
            yield f.name, f.metadata.get(ITEM_NAME, f.name), bool(f.metadata.get(OMIT_EMPTY, False))


def normalize_value(value: Any) -> Any:
    """
    Recursively normalize a value found inside an item.

    Records become dicts, lists and tuples become lists, mappings have their
    values normalized. Everything else is returned unchanged.
    """
    if is_record(value):
        return _record_to_item(value)
    if isinstance(value, Mapping):
        return {k: normalize_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [normalize_value(v) for v in value]
    return value


def _record_to_item(record: Any) -> Dict[str, Any]:
    item = {}
    for attr, wire, omit_empty in _record_fields(record):
        value = getattr(record, attr)
        if omit_empty and _is_empty(value):
            continue
        item[wire] = normalize_value(value)
    return item


def normalize_item(record: Any) -> Dict[str, Any]:
    """
    Turn a user record into a canonical Base item.

    Args:
        record: A mapping, a dataclass instance or a pydantic model instance

    Returns:
        The item as a dict. Mappings come back as a shallow copy.

    Raises:
        DetaValidationError: BAD_ITEM if the record is not representable as a mapping
    """
    if isinstance(record, Mapping):
        return dict(record)
    if is_record(record):
        return _record_to_item(record)
    raise DetaValidationError(
        ErrorKind.BAD_ITEM,
        f"item of type {type(record).__name__} is not a mapping or record"
    )


def _pydantic_input(model: type, data: Dict[str, Any]) -> Dict[str, Any]:
    # Items carry serialization names; pydantic validates by alias or attribute name
    translated = dict(data)
    for attr, info in model.model_fields.items():
        wire = info.serialization_alias or info.alias or attr
        target = info.alias or attr
        if wire != target and wire in translated:
            translated[target] = translated.pop(wire)
    return translated


def _decode_value(value: Any, tp: Any) -> Any:
    if value is None:
        return None

    origin = typing.get_origin(tp)
    args = typing.get_args(tp)

    union_type = getattr(types, "UnionType", None)
    if origin is typing.Union or (union_type is not None and origin is union_type):
        candidates = [a for a in args if a is not type(None)]
        if len(candidates) == 1:
            return _decode_value(value, candidates[0])
        return value

    if isinstance(value, dict) and is_record_type(tp):
        return _decode_record(value, tp)

    if origin in (list, tuple) and isinstance(value, list):
        element = args[0] if args else Any
        decoded = [_decode_value(v, element) for v in value]
        return tuple(decoded) if origin is tuple else decoded

    if origin is dict and isinstance(value, dict) and len(args) == 2:
        return {k: _decode_value(v, args[1]) for k, v in value.items()}

    return value


def _decode_record(data: Dict[str, Any], model: type) -> Any:
    if issubclass(model, BaseModel):
        return model.model_validate(_pydantic_input(model, data))

    hints = typing.get_type_hints(model)
    kwargs = {}
    for f in dataclasses.fields(model):
        if not f.init:
            continue
        wire = f.metadata.get(ITEM_NAME, f.name)
        if wire in data:
            kwargs[f.name] = _decode_value(data[wire], hints.get(f.name, Any))
    try:
        return model(**kwargs)
    except TypeError as e:
        raise DetaValidationError(ErrorKind.BAD_DESTINATION, f"cannot build {model.__name__}: {e}")


def decode_item(data: Dict[str, Any], model: Optional[type] = None) -> Any:
    """
    Decode a stored item into the requested shape.

    Args:
        data: Item as decoded from the service
        model: Optional dataclass or pydantic model class

    Returns:
        The item dict when no model is given, otherwise a model instance

    Raises:
        DetaValidationError: BAD_DESTINATION if model is not a record class
    """
    if model is None:
        return data
    if not is_record_type(model):
        raise DetaValidationError(
            ErrorKind.BAD_DESTINATION,
            f"destination {model!r} is not a dataclass or pydantic model"
        )
    return _decode_record(data, model)
