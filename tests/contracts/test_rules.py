"""Tests for the rule builder and layer compilation."""

import pytest
from pydantic import BaseModel

from actioncontracts.contracts import (
    ContractConfigurationError,
    ContractSchema,
    FieldRule,
    optional,
    required,
)
from actioncontracts.contracts.rules import build_layer

pytestmark = pytest.mark.unit


def check(rules, data):
    """Validate data against a one-layer schema and return the messages."""
    return ContractSchema().extend(rules).validate(data).messages


class TestFieldRuleBuilder:
    """Chaining produces new, immutable rules."""

    def test_chaining_returns_new_rule(self):
        """filled() does not modify the original rule."""
        base = required("name")
        filled = base.filled()
        assert filled is not base
        assert base.must_be_filled is False
        assert filled.must_be_filled is True

    def test_required_and_optional(self):
        """required()/optional() set presence."""
        assert required("name").is_required is True
        assert optional("name").is_required is False

    def test_empty_key_rejected(self):
        """Rule keys must be non-empty strings."""
        with pytest.raises(ContractConfigurationError):
            FieldRule("")

    def test_non_callable_predicate_rejected(self):
        """satisfies() needs a callable."""
        with pytest.raises(ContractConfigurationError, match="not callable"):
            required("age").satisfies(42, "must be positive")

    def test_nested_rules_must_be_field_rules(self):
        """schema() only takes FieldRule objects."""
        with pytest.raises(ContractConfigurationError):
            required("address").schema("city")


class TestPresence:
    """required/optional keys."""

    def test_required_key_missing(self):
        """A missing required key is reported under its own name."""
        messages = check(required("name"), {"first_name": "Billy"})
        assert list(messages) == ["name"]
        assert messages["name"]

    def test_required_key_accepts_none_without_filled(self):
        """Presence alone does not reject None."""
        assert check(required("name"), {"name": None}) == {}

    def test_optional_key_may_be_missing(self):
        """Optional keys are only checked when present."""
        rule = optional("age").value(int)
        assert check(rule, {}) == {}
        assert "age" in check(rule, {"age": "not a number"})


class TestFilled:
    """filled() rejects None and empty values."""

    @pytest.mark.parametrize("value", [None, "", [], {}])
    def test_empty_values_fail(self, value):
        """Empty values are not filled."""
        assert check(required("name").filled(), {"name": value}) == {"name": ["must be filled"]}

    def test_non_empty_value_passes(self):
        """A non-empty string is filled."""
        assert check(required("name").filled(), {"name": "Billy"}) == {}

    def test_filled_with_type(self):
        """filled(type_) also checks the type."""
        rule = required("age").filled(int)
        assert check(rule, {"age": 3}) == {}
        assert "age" in check(rule, {"age": "three"})


class TestTypesAndPredicates:
    """value(), maybe() and satisfies()."""

    def test_maybe_allows_none(self):
        """maybe(type_) accepts None or the type."""
        rule = required("age").maybe(int)
        assert check(rule, {"age": None}) == {}
        assert check(rule, {"age": 3}) == {}
        assert "age" in check(rule, {"age": "three"})

    def test_untyped_maybe_skips_predicates_for_none(self):
        """maybe() without a type accepts None before any predicate runs."""
        rule = required("age").maybe().satisfies(lambda v: v > 0, "must be positive")
        assert check(rule, {"age": None}) == {}
        assert check(rule, {"age": 3}) == {}
        assert check(rule, {"age": -1}) == {"age": ["must be positive"]}

    def test_predicate_message(self):
        """A failing predicate reports its message."""
        rule = required("age").value(int).satisfies(lambda v: v >= 0, "must be positive")
        assert check(rule, {"age": -1}) == {"age": ["must be positive"]}
        assert check(rule, {"age": 1}) == {}

    def test_predicate_type_error_is_a_failure(self):
        """A predicate that cannot evaluate the value counts as unsatisfied."""
        rule = required("age").satisfies(lambda v: v > 0, "must be positive")
        assert check(rule, {"age": None}) == {"age": ["must be positive"]}

    def test_predicate_attribute_error_is_a_failure(self):
        """A predicate calling a missing method counts as unsatisfied."""
        rule = required("code").satisfies(lambda v: v.startswith("A"), "must start with A")
        assert check(rule, {"code": 5}) == {"code": ["must start with A"]}
        assert check(rule, {"code": "AB"}) == {}

    def test_predicate_index_error_is_a_failure(self):
        """A predicate indexing past the end counts as unsatisfied."""
        rule = required("code").satisfies(lambda v: v[0] == "A", "must start with A")
        assert check(rule, {"code": ""}) == {"code": ["must start with A"]}

    def test_strict_mode_disables_coercion(self, configure):
        """With validation.strict on, '3' is not an int."""
        rule = required("age").value(int)
        assert check(rule, {"age": "3"}) == {}
        configure(strict=True)
        assert "age" in check(rule, {"age": "3"})


class TestNestedRules:
    """schema() for mapping values."""

    def test_nested_failure_uses_dotted_path(self):
        """Nested failures are reported as parent.child."""
        rule = required("address").schema(required("city").filled())
        messages = check(rule, {"address": {"city": ""}})
        assert messages == {"address.city": ["must be filled"]}

    def test_nested_success(self):
        """A nested mapping meeting its rules passes."""
        rule = required("address").schema(required("city").filled())
        assert check(rule, {"address": {"city": "Oslo", "zip": "0150"}}) == {}


class TestBuildLayer:
    """Compiling rule blocks into pydantic models."""

    def test_model_class_used_as_is(self):
        """A pydantic model is its own layer."""
        class Person(BaseModel):
            name: str

        assert build_layer(Person) is Person

    def test_keys_that_are_not_identifiers(self):
        """Keys are aliased, so any string works."""
        messages = check(required("first-name").filled(), {"first-name": ""})
        assert messages == {"first-name": ["must be filled"]}

    def test_unknown_block_rejected(self):
        """Only FieldRule, sequences of FieldRule and models are rule blocks."""
        with pytest.raises(ContractConfigurationError):
            build_layer({"name": str})
        with pytest.raises(ContractConfigurationError):
            build_layer([required("name"), "age"])

    def test_extra_keys_ignored(self):
        """Unrelated context keys do not fail validation."""
        assert check(required("name"), {"name": "Billy", "other": 1}) == {}
