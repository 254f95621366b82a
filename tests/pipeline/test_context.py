"""Tests for the invocation Context."""

import pytest

from actioncontracts.pipeline import Context, ContextFailure

pytestmark = [pytest.mark.unit, pytest.mark.pipeline]


class TestContextAccess:
    """Attribute and item access to context values."""

    def test_values_from_mapping_and_keywords(self):
        """Mapping values and keywords are merged, keywords last."""
        context = Context({"name": "Billy", "age": 3}, age=4)
        assert context.name == "Billy"
        assert context["age"] == 4

    def test_attribute_assignment_is_visible_as_item(self):
        """Setting an attribute stores a value."""
        context = Context()
        context.person = None
        assert "person" in context
        assert context["person"] is None

    def test_missing_attribute_raises(self):
        """Missing values raise AttributeError; get() defaults to None."""
        context = Context()
        with pytest.raises(AttributeError, match="name"):
            context.name
        assert context.get("name") is None
        assert context.get("name", "anon") == "anon"

    def test_to_dict_is_a_copy(self):
        """Mutating the snapshot does not change the context."""
        context = Context(name="Billy")
        snapshot = context.to_dict()
        snapshot["name"] = "Bob"
        assert context.name == "Billy"

    def test_build_reuses_existing_context(self):
        """Context.build() returns the same context with values merged."""
        context = Context(name="Billy")
        built = Context.build(context, age=3)
        assert built is context
        assert context.age == 3

    def test_delete_attribute(self):
        """Deleting an attribute removes the value."""
        context = Context(name="Billy")
        del context.name
        assert "name" not in context


class TestContextFailure:
    """Failure signalling."""

    def test_new_context_is_successful(self):
        """A fresh context reports success."""
        context = Context()
        assert context.success is True
        assert context.failure is False

    def test_fail_raises_and_marks_failure(self):
        """fail() raises ContextFailure and flips the status."""
        context = Context()
        with pytest.raises(ContextFailure) as exc_info:
            context.fail()
        assert exc_info.value.context is context
        assert context.failure is True
        assert context.message is None

    def test_fail_merges_payload(self):
        """fail(**payload) stores the payload on the context."""
        context = Context(name="Billy")
        with pytest.raises(ContextFailure, match="invalid_name"):
            context.fail(message="invalid_name")
        assert context.message == "invalid_name"
        assert context.name == "Billy"
