"""Tests for the Breach value type."""

import pytest
from pydantic import ValidationError

from actioncontracts.contracts import Breach, breaches_to_dict
from actioncontracts.contracts.breach import breaches_from_messages

pytestmark = pytest.mark.unit


class TestBreach:
    """Breach is an immutable (property, messages) pair."""

    def test_messages_stored_as_tuple(self):
        """Messages are kept in order as a tuple."""
        breach = Breach(property="name", messages=["is missing", "must be filled"])
        assert breach.property == "name"
        assert breach.messages == ("is missing", "must be filled")

    def test_breach_is_frozen(self):
        """Breaches cannot be modified."""
        breach = Breach(property="name", messages=["is missing"])
        with pytest.raises(ValidationError):
            breach.property = "age"

    def test_equality_by_value(self):
        """Two breaches with the same content are equal."""
        assert Breach(property="a", messages=["x"]) == Breach(property="a", messages=("x",))

    def test_to_dict(self):
        """to_dict() gives {property: messages}."""
        assert Breach(property="a", messages=["x"]).to_dict() == {"a": ["x"]}


class TestBreachHelpers:
    """Building and collapsing breach lists."""

    def test_from_messages_preserves_order(self):
        """One breach per property, in mapping order."""
        breaches = breaches_from_messages({"b": ["x"], "a": ["y", "z"]})
        assert [b.property for b in breaches] == ["b", "a"]
        assert breaches[1].messages == ("y", "z")

    def test_from_empty_messages(self):
        """No messages, no breaches."""
        assert breaches_from_messages({}) == []

    def test_breaches_to_dict(self):
        """Breaches collapse into a payload-friendly dict."""
        breaches = [Breach(property="a", messages=["x"]), Breach(property="b", messages=["y"])]
        assert breaches_to_dict(breaches) == {"a": ["x"], "b": ["y"]}
