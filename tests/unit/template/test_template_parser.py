"""Unit tests for template classification and parsing helpers."""

import pytest
from jinja2 import TemplateSyntaxError

from scaffolder_core.template import TemplateKind, classify, create_environment, has_templates
from scaffolder_core.template.parser import wrap_serialized


@pytest.fixture(scope="module")
def environment():
    return create_environment()


class TestHasTemplates:
    @pytest.mark.parametrize(
        "text",
        ["${{ parameters.x }}", "a {% if x %}b{% endif %}", "{# note #}"],
    )
    def test_detects_markers(self, text):
        assert has_templates(text) is True

    @pytest.mark.parametrize("text", ["plain", "{{ not ours }}", "$ {{ x }}", ""])
    def test_plain_text(self, text):
        assert has_templates(text) is False


class TestClassify:
    def test_single_expression(self, environment):
        classification = classify(environment, "${{ parameters.name }}")
        assert classification.kind == TemplateKind.WHOLE_EXPRESSION
        assert classification.expression == "parameters.name"
        assert classification.is_whole_expression

    def test_expression_with_filter(self, environment):
        classification = classify(environment, "${{ parameters.items | length }}")
        assert classification.expression == "parameters.items | length"

    def test_text_around_expression(self, environment):
        classification = classify(environment, "prefix-${{ parameters.name }}")
        assert classification.kind == TemplateKind.MIXED_TEXT
        assert classification.expression is None

    def test_two_expressions(self, environment):
        classification = classify(environment, "${{ parameters.a }}${{ parameters.b }}")
        assert classification.kind == TemplateKind.MIXED_TEXT

    def test_block_tag(self, environment):
        classification = classify(environment, "{% if true %}x{% endif %}")
        assert classification.kind == TemplateKind.MIXED_TEXT

    def test_plain_text(self, environment):
        assert classify(environment, "hello").kind == TemplateKind.MIXED_TEXT

    def test_syntax_error_raises(self, environment):
        with pytest.raises(TemplateSyntaxError):
            classify(environment, "${{ parameters.name | }}")


class TestWrapSerialized:
    def test_wraps_expression(self):
        assert wrap_serialized("parameters.count") == "${{ (parameters.count) | serialize }}"
