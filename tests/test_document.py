"""
Tests for Document — Closed value model

Every value is one of six kinds; anything else is a ParseError.
"""

import datetime

import pytest

from stitcher.core.document import ValueKind, is_mapping, is_sequence, kind_of, validate
from stitcher.errors import ParseError


class TestKindOf:
    """Classification of single values."""

    @pytest.mark.parametrize("value, kind", [
        (None, ValueKind.NULL),
        (True, ValueKind.BOOL),
        (False, ValueKind.BOOL),
        (0, ValueKind.NUMBER),
        (3.25, ValueKind.NUMBER),
        ("", ValueKind.STRING),
        ([], ValueKind.SEQUENCE),
        ({}, ValueKind.MAPPING),
    ])
    def test_document_kinds(self, value, kind):
        assert kind_of(value) is kind

    def test_bool_is_not_number(self):
        """bool subclasses int but is its own kind."""
        assert kind_of(True) is ValueKind.BOOL

    @pytest.mark.parametrize("value", [
        (1, 2),
        {1, 2},
        b"bytes",
        datetime.date(2024, 1, 1),
        object(),
    ])
    def test_unsupported_values_raise(self, value):
        with pytest.raises(ParseError):
            kind_of(value)

    def test_scalar_flag(self):
        assert ValueKind.STRING.is_scalar
        assert ValueKind.NULL.is_scalar
        assert not ValueKind.SEQUENCE.is_scalar
        assert not ValueKind.MAPPING.is_scalar

    def test_helpers(self):
        assert is_mapping({"a": 1})
        assert not is_mapping([1])
        assert is_sequence([1])
        assert not is_sequence("abc")


class TestValidate:
    """Whole-tree validation."""

    def test_valid_tree_returned_unchanged(self):
        tree = {"a": [1, 2.5, None, {"b": True}], "c": "d"}
        assert validate(tree) is tree

    def test_nested_unsupported_value(self):
        """A bad value deep in the tree is found."""
        with pytest.raises(ParseError):
            validate({"a": [{"b": {1, 2}}]})

    def test_non_string_key(self):
        """Mapping keys must be strings."""
        with pytest.raises(ParseError) as exc_info:
            validate({"responses": {200: {"description": "ok"}}})
        assert "string" in str(exc_info.value)
