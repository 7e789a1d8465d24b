"""Unit tests for template filters."""

from jinja2 import Undefined

from scaffolder_core.template import FILTERS, filter_serialize


class TestSerializeFilter:
    def test_serializes_structures(self):
        assert filter_serialize({"a": [1, True, None]}) == '{"a": [1, true, null]}'

    def test_serializes_strings_with_quotes(self):
        assert filter_serialize("web") == '"web"'

    def test_undefined_serializes_to_empty_string(self):
        assert filter_serialize(Undefined(name="missing")) == ""

    def test_registered(self):
        assert FILTERS["serialize"] is filter_serialize
