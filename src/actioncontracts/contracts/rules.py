"""Typed rule builder for contract schemas.

Rules describe what a single key of the context must look like. They are
built with :func:`required` / :func:`optional` and refined by chaining:

    required("name").filled(str)
    optional("age").value(int).satisfies(lambda v: v >= 0, "must be positive")
    required("address").schema(required("city").filled())

A block of rules is compiled into a pydantic model (one "layer" of a
:class:`~actioncontracts.contracts.schema.ContractSchema`). Every field is
aliased to its declared key, so keys that are not valid Python identifiers
or that clash with pydantic's own attributes are still usable.
"""

from typing import Annotated, Any, Callable, List, Optional, Sequence, Tuple, Type, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, create_model
from pydantic_core import PydanticCustomError

from actioncontracts.contracts.failure import ContractConfigurationError

__all__ = ['FieldRule', 'required', 'optional', 'build_layer', 'RuleBlock']


Predicate = Callable[[Any], bool]


class FieldRule:
    """Rules for one key of the data snapshot.

    Instances are immutable: every refinement returns a new FieldRule.
    """

    __slots__ = ("name", "is_required", "type_", "nullable", "must_be_filled", "checks", "nested")

    def __init__(self, name: str, is_required: bool = True, type_: Any = Any,
                 nullable: bool = False, must_be_filled: bool = False,
                 checks: Tuple[Tuple[Predicate, str], ...] = (),
                 nested: Tuple["FieldRule", ...] = ()):
        if not isinstance(name, str) or not name:
            raise ContractConfigurationError(f"Rule key must be a non-empty string, got {name!r}")
        self.name = name
        self.is_required = is_required
        self.type_ = type_
        self.nullable = nullable
        self.must_be_filled = must_be_filled
        self.checks = tuple(checks)
        self.nested = tuple(nested)

    def _replace(self, **changes) -> "FieldRule":
        values = {attr: getattr(self, attr) for attr in self.__slots__}
        values.update(changes)
        return FieldRule(**values)

    def filled(self, type_: Any = None) -> "FieldRule":
        """Value must be present and non-empty (not None, not an empty string or collection)."""
        changes = {"must_be_filled": True, "nullable": False}
        if type_ is not None:
            changes["type_"] = type_
        return self._replace(**changes)

    def maybe(self, type_: Any = None) -> "FieldRule":
        """Value may be None; otherwise it must match ``type_`` when given."""
        changes = {"nullable": True, "must_be_filled": False}
        if type_ is not None:
            changes["type_"] = type_
        return self._replace(**changes)

    def value(self, type_: Any) -> "FieldRule":
        """Value must be of (or coercible to) ``type_``."""
        return self._replace(type_=type_)

    def satisfies(self, predicate: Predicate, message: str) -> "FieldRule":
        """Value must satisfy ``predicate``; ``message`` describes the failure."""
        if not callable(predicate):
            raise ContractConfigurationError(f"Predicate for {self.name!r} is not callable")
        return self._replace(checks=self.checks + ((predicate, message),))

    def schema(self, *rules: "FieldRule") -> "FieldRule":
        """Value must be a mapping meeting the nested ``rules``."""
        for rule in rules:
            if not isinstance(rule, FieldRule):
                raise ContractConfigurationError(
                    f"Nested rules for {self.name!r} must be FieldRule objects, got {rule!r}"
                )
        return self._replace(nested=self.nested + tuple(rules))

    def annotation(self, strict: bool = False) -> Any:
        """Build the pydantic annotation enforcing this rule."""
        base = self.type_
        if self.nested:
            base = build_layer(list(self.nested), f"{_model_name(self.name)}Rules", strict)

        checks = []
        if self.must_be_filled:
            checks.append(_check_filled)
        for predicate, message in self.checks:
            checks.append(_predicate_check(predicate, message))
        if self.nullable:
            checks = [_skip_none(check) for check in checks]
        validators = [AfterValidator(check) for check in checks]

        annotation = Annotated[(base, *validators)] if validators else base
        if self.nullable and base is not Any:
            annotation = Optional[annotation]
        return annotation

    def field_definition(self, strict: bool = False) -> Tuple[Any, Any]:
        """``(annotation, FieldInfo)`` pair suitable for ``create_model``."""
        if self.is_required:
            info = Field(alias=self.name)
        else:
            info = Field(None, alias=self.name)
        return self.annotation(strict), info

    def __repr__(self):
        kind = "required" if self.is_required else "optional"
        return f"<FieldRule {kind}({self.name!r})>"


def required(name: str) -> FieldRule:
    """Rule for a key that must be present in the data."""
    return FieldRule(name, is_required=True)


def optional(name: str) -> FieldRule:
    """Rule for a key that may be absent; if present its refinements apply."""
    return FieldRule(name, is_required=False)


RuleBlock = Union[FieldRule, Sequence[FieldRule], Type[BaseModel]]


def build_layer(block: RuleBlock, name: str = "ContractRules", strict: bool = False) -> Type[BaseModel]:
    """Compile a rule block into a pydantic model class.

    Parameters
    ----------
    block : FieldRule, sequence of FieldRule, or BaseModel subclass
        The rules to compile. A model class is returned unchanged.
    name : str
        Name of the generated model (shows up in pydantic error messages).
    strict : bool
        Use pydantic strict mode (no type coercion).

    Raises
    ------
    ContractConfigurationError
        If the block is not a recognized rule block.
    """
    if isinstance(block, type) and issubclass(block, BaseModel):
        return block

    rules = _as_rules(block)
    fields = {
        f"field_{index}": rule.field_definition(strict)
        for index, rule in enumerate(rules)
    }
    config = ConfigDict(extra="ignore", arbitrary_types_allowed=True, strict=strict)
    return create_model(name, __config__=config, **fields)


def _as_rules(block) -> List[FieldRule]:
    if isinstance(block, FieldRule):
        return [block]
    if isinstance(block, (list, tuple)):
        for rule in block:
            if not isinstance(rule, FieldRule):
                raise ContractConfigurationError(
                    f"Rule blocks may only contain FieldRule objects, got {rule!r}"
                )
        return list(block)
    raise ContractConfigurationError(
        f"Expected a FieldRule, a sequence of FieldRule or a pydantic model, got {block!r}"
    )


def _model_name(key: str) -> str:
    return "".join(part.capitalize() for part in key.replace("-", "_").split("_") if part) or "Nested"


def _check_filled(value):
    if value is None:
        raise PydanticCustomError("filled", "must be filled")
    if hasattr(value, "__len__") and len(value) == 0:
        raise PydanticCustomError("filled", "must be filled")
    return value


def _skip_none(check):
    def skip(value):
        if value is None:
            return value
        return check(value)
    return skip


def _predicate_check(predicate: Predicate, message: str):
    """Wrap ``predicate`` as a validator; a predicate that raises counts as unsatisfied."""
    def check(value):
        try:
            ok = predicate(value)
        except Exception:
            ok = False
        if not ok:
            raise PydanticCustomError("predicate", message)
        return value
    return check
