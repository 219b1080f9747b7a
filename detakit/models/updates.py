"""
DetaKit - Update Model

Utility markers and the compiler that turns an update mapping into the
document sent with a Base update request.

    updates = {
        "profile.age": Increment(1),
        "profile.hobbies": AppendOne("chess"),
        "profile.nickname": Trim(),
        "name": "jimmy",
    }

Author: DetaKit Project
"""

import logging
from collections.abc import Mapping
from numbers import Real
from typing import Any, Dict, List, Sequence

from ..exceptions import ErrorKind, DetaValidationError
from .item import normalize_value

# Configure logging
logger = logging.getLogger(__name__)


class Increment:
    """Increment a numeric field; a negative value decrements it."""

    def __init__(self, value: Real = 1):
        if isinstance(value, bool) or not isinstance(value, Real):
            raise DetaValidationError(
                ErrorKind.BAD_UPDATE,
                f"increment value must be a number, got {type(value).__name__}"
            )
        self.value = value

    def __repr__(self):
        return f"Increment({self.value!r})"


class _ListUpdate:
    """Base class for append/prepend markers; always holds a list."""

    def __init__(self, values: List[Any]):
        self.value = values

    def __repr__(self):
        return f"{type(self).__name__}({self.value!r})"


def _as_list(values: Sequence[Any], marker: str) -> List[Any]:
    if not isinstance(values, (list, tuple)):
        raise DetaValidationError(
            ErrorKind.BAD_UPDATE,
            f"{marker} expects a list or tuple, got {type(values).__name__}"
        )
    return list(values)


class AppendOne(_ListUpdate):
    """Append a single value to a list field."""

    def __init__(self, value: Any):
        super().__init__([value])


class AppendMany(_ListUpdate):
    """Append every value of a sequence to a list field."""

    def __init__(self, values: Sequence[Any]):
        super().__init__(_as_list(values, "AppendMany"))


class PrependOne(_ListUpdate):
    """Prepend a single value to a list field."""

    def __init__(self, value: Any):
        super().__init__([value])


class PrependMany(_ListUpdate):
    """Prepend every value of a sequence to a list field."""

    def __init__(self, values: Sequence[Any]):
        super().__init__(_as_list(values, "PrependMany"))


class Trim:
    """Remove a field from the item."""

    def __repr__(self):
        return "Trim()"


def compile_updates(updates: Mapping) -> Dict[str, Any]:
    """
    Compile an update mapping into operation groups.

    Args:
        updates: Mapping of dotted field path to a literal or a utility marker

    Returns:
        Document with "set", "increment", "append", "prepend" and "delete"
        groups; empty groups are omitted

    Raises:
        DetaValidationError: BAD_UPDATE for malformed updates
    """
    if not isinstance(updates, Mapping):
        raise DetaValidationError(
            ErrorKind.BAD_UPDATE,
            f"updates must be a mapping, got {type(updates).__name__}"
        )

    set_group = {}
    increment_group = {}
    append_group = {}
    prepend_group = {}
    delete_group = []

    for path, value in updates.items():
        if not isinstance(path, str) or not path:
            raise DetaValidationError(ErrorKind.BAD_UPDATE, f"invalid field path {path!r}")

        if isinstance(value, Increment):
            increment_group[path] = value.value
        elif isinstance(value, (AppendOne, AppendMany)):
            append_group[path] = normalize_value(value.value)
        elif isinstance(value, (PrependOne, PrependMany)):
            prepend_group[path] = normalize_value(value.value)
        elif isinstance(value, Trim):
            delete_group.append(path)
        else:
            set_group[path] = normalize_value(value)

    document = {}
    if set_group:
        document["set"] = set_group
    if increment_group:
        document["increment"] = increment_group
    if append_group:
        document["append"] = append_group
    if prepend_group:
        document["prepend"] = prepend_group
    if delete_group:
        document["delete"] = delete_group

    logger.debug(f"Compiled update document with groups: {list(document)}")
    return document
