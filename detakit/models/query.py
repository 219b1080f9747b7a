"""
DetaKit - Query Model

Compiles Base fetch queries into wire-ready condition groups.

A query is a list of groups. Conditions inside a group are AND-ed and the
groups are OR-ed. A group is either a mapping of "path?operator" to value or
a list of Condition objects. An empty query matches every item.

Author: DetaKit Project
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from ..exceptions import ErrorKind, DetaValidationError
from .item import normalize_value

# Configure logging
logger = logging.getLogger(__name__)


OPERATOR_SEPARATOR = "?"
PATH_SEPARATOR = "."

# "r" and "pfx" are the spellings the service uses for range and prefix
OPERATORS = frozenset([
    "gt", "gte", "lt", "lte", "ne",
    "contains", "not_contains",
    "range", "r",
    "prefix", "pfx",
])


@dataclass(frozen=True)
class Condition:
    """
    A single (path, operator, value) filter.

    An operator of None means equality.
    """
    path: str
    value: Any
    operator: Optional[str] = None

    def __post_init__(self):
        _check_path(self.path)
        if self.operator is not None and self.operator not in OPERATORS:
            raise DetaValidationError(ErrorKind.BAD_QUERY, f"unknown operator '{self.operator}'")

    def to_wire(self) -> Tuple[str, Any]:
        """Render as the ("path?operator", value) pair the service expects."""
        if self.operator is None:
            return self.path, normalize_value(self.value)
        return f"{self.path}{OPERATOR_SEPARATOR}{self.operator}", normalize_value(self.value)


def _check_path(path: Any):
    if not isinstance(path, str) or not path:
        raise DetaValidationError(ErrorKind.BAD_QUERY, f"invalid field path {path!r}")


def split_operator(expression: str) -> Tuple[str, Optional[str]]:
    """
    Split "path?operator" into its path and operator.

    Returns:
        (path, operator), operator None for plain equality
    """
    path, sep, operator = expression.partition(OPERATOR_SEPARATOR)
    return path, (operator if sep else None)


def _compile_group(group: Any) -> Dict[str, Any]:
    if isinstance(group, Mapping):
        compiled = {}
        for expression, value in group.items():
            _check_path(expression)
            path, operator = split_operator(expression)
            _check_path(path)
            if operator is not None and operator not in OPERATORS:
                # The service is the authority on operators
                logger.debug(f"Forwarding unrecognized operator '{operator}' on path '{path}'")
            compiled[expression] = normalize_value(value)
        return compiled

    if isinstance(group, (list, tuple)) and all(isinstance(c, Condition) for c in group):
        return dict(c.to_wire() for c in group)

    raise DetaValidationError(
        ErrorKind.BAD_QUERY,
        f"query group must be a mapping or a list of conditions, got {type(group).__name__}"
    )


def compile_query(query: Any) -> List[Dict[str, Any]]:
    """
    Validate and compile a query.

    Args:
        query: None, a single mapping group, or a list of groups

    Returns:
        List of compiled groups with empty groups removed

    Raises:
        DetaValidationError: BAD_QUERY for malformed queries
    """
    if query is None:
        return []
    if isinstance(query, Mapping):
        query = [query]
    if not isinstance(query, (list, tuple)):
        raise DetaValidationError(
            ErrorKind.BAD_QUERY,
            f"query must be a list of groups, got {type(query).__name__}"
        )

    compiled = []
    for group in query:
        compiled_group = _compile_group(group)
        if compiled_group:
            compiled.append(compiled_group)
    logger.debug(f"Compiled query with {len(compiled)} group(s)")
    return compiled
