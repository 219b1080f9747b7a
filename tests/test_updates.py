"""
Tests for update compilation in DetaKit

Tests utility markers and the operation groups of the update document.
"""

from dataclasses import dataclass

import pytest

from detakit.exceptions import ErrorKind, DetaValidationError
from detakit.models import (
    Increment,
    AppendOne,
    AppendMany,
    PrependOne,
    PrependMany,
    Trim,
    compile_updates
)


@dataclass
class Address:
    city: str
    zip_code: str


def test_all_groups():
    """Test every marker lands in its own group"""
    document = compile_updates({
        "test_value": "changed value",
        "nested.test_int": Increment(1),
        "nested.test_string": Trim(),
        "nested.test_list": PrependOne("c"),
        "tags": AppendMany(["x", "y"]),
    })

    assert document == {
        "set": {"test_value": "changed value"},
        "increment": {"nested.test_int": 1},
        "append": {"tags": ["x", "y"]},
        "prepend": {"nested.test_list": ["c"]},
        "delete": ["nested.test_string"],
    }


def test_empty_groups_omitted():
    """Test only non-empty groups appear"""
    assert compile_updates({"a.b": Increment(2)}) == {"increment": {"a.b": 2}}
    assert compile_updates({"a": Trim(), "b": Trim()}) == {"delete": ["a", "b"]}
    assert compile_updates({}) == {}


def test_negative_increment():
    """Test a negative increment is kept as a decrement"""
    assert compile_updates({"count": Increment(-1)}) == {"increment": {"count": -1}}
    assert compile_updates({"ratio": Increment(-0.5)}) == {"increment": {"ratio": -0.5}}


def test_append_one_wraps_scalar():
    """Test single values are wrapped in a one-element list"""
    assert compile_updates({"likes": AppendOne("chess")}) == {"append": {"likes": ["chess"]}}
    # A list passed to AppendOne is itself the single element
    assert compile_updates({"pairs": AppendOne([1, 2])}) == {"append": {"pairs": [[1, 2]]}}


def test_append_many_forwards_sequence():
    """Test sequences are forwarded unchanged"""
    assert compile_updates({"likes": AppendMany(["a", "b"])}) == {"append": {"likes": ["a", "b"]}}
    assert compile_updates({"likes": PrependMany(("a", "b"))}) == {"prepend": {"likes": ["a", "b"]}}


def test_literal_records_are_normalized():
    """Test record literals become nested items"""
    document = compile_updates({
        "address": Address("Berlin", "10115"),
        "history": AppendOne(Address("Paris", "75001")),
    })

    assert document == {
        "set": {"address": {"city": "Berlin", "zip_code": "10115"}},
        "append": {"history": [{"city": "Paris", "zip_code": "75001"}]},
    }


@pytest.mark.parametrize("value", ["1", None, True, [1]])
def test_increment_requires_number(value):
    """Test Increment fails at construction for non-numeric values"""
    with pytest.raises(DetaValidationError) as exc_info:
        Increment(value)

    assert exc_info.value.kind is ErrorKind.BAD_UPDATE


@pytest.mark.parametrize("marker", [AppendMany, PrependMany])
@pytest.mark.parametrize("value", ["abc", 1, {"a": 1}, None])
def test_many_markers_require_sequence(marker, value):
    """Test AppendMany/PrependMany fail at construction for non-sequences"""
    with pytest.raises(DetaValidationError) as exc_info:
        marker(value)

    assert exc_info.value.kind is ErrorKind.BAD_UPDATE


@pytest.mark.parametrize("updates", [{"": 1}, {1: "a"}, ["a", 1], "a=1"])
def test_malformed_updates(updates):
    """Test bad paths and non-mapping updates are rejected"""
    with pytest.raises(DetaValidationError) as exc_info:
        compile_updates(updates)

    assert exc_info.value.kind is ErrorKind.BAD_UPDATE
