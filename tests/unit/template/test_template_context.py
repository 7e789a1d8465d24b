"""Unit tests for TemplateContext and ContextBuilder."""

import pytest

from scaffolder_core.errors import ScaffolderError
from scaffolder_core.template import ContextBuilder, TemplateContext


class TestTemplateContext:
    def test_variables_omit_absent_secrets_and_user(self):
        context = TemplateContext(parameters={"a": 1})
        assert context.to_variables() == {"parameters": {"a": 1}, "steps": {}}

    def test_with_secrets_returns_copy(self):
        context = TemplateContext(parameters={})
        with_secrets = context.with_secrets({"token": "x"})
        assert with_secrets.secrets == {"token": "x"}
        assert context.secrets is None

    def test_with_none_secrets_exposes_empty_mapping(self):
        context = TemplateContext(parameters={}).with_secrets(None)
        assert context.to_variables()["secrets"] == {}


class TestContextBuilder:
    def test_initial_context(self):
        builder = ContextBuilder({"name": "web"}, user={"ref": "user:default/alice"})
        context = builder.get_context()
        assert context.parameters == {"name": "web"}
        assert context.steps == {}
        assert context.user == {"ref": "user:default/alice"}
        assert context.secrets is None

    def test_add_step_output(self):
        builder = ContextBuilder({})
        builder.add_step_output("fetch", {"url": "https://x.test"})
        assert builder.has_step("fetch")
        assert builder.get_context().steps == {"fetch": {"output": {"url": "https://x.test"}}}

    def test_steps_keep_insertion_order(self):
        builder = ContextBuilder({})
        for step_id in ("c", "a", "b"):
            builder.add_step_output(step_id, {})
        assert list(builder.get_context().steps) == ["c", "a", "b"]

    def test_second_write_raises(self):
        builder = ContextBuilder({})
        builder.add_step_output("fetch", {})
        with pytest.raises(ScaffolderError) as exc_info:
            builder.add_step_output("fetch", {"x": 1})
        assert exc_info.value.code == "STEP_OUTPUT_EXISTS"
        assert builder.get_context().steps["fetch"] == {"output": {}}

    def test_input_context_carries_secrets(self):
        builder = ContextBuilder({})
        builder.add_step_output("fetch", {"a": 1})
        input_context = builder.get_input_context({"token": "x"})
        assert input_context.secrets == {"token": "x"}
        assert input_context.steps == {"fetch": {"output": {"a": 1}}}
        assert builder.get_context().secrets is None
