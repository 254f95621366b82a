"""Rule Schema Builder.

A ContractSchema is an immutable, ordered stack of rule layers. Extending a
schema never touches the original: it returns a new schema holding the old
layers plus one new layer compiled from the given rule block. Validation runs
every layer against the same data, so data must satisfy all of them.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Type

from pydantic import BaseModel, ConfigDict, ValidationError

from actioncontracts import settings
from actioncontracts.contracts.rules import RuleBlock, build_layer

__all__ = ['ContractSchema', 'ValidationOutcome', 'EMPTY_SCHEMA', 'extend_schema']

logger = logging.getLogger(__name__)

# Property name used for errors that are not tied to a single key
BASE_PROPERTY = "base"


class ValidationOutcome(BaseModel):
    """Result of validating a data snapshot against a schema.

    ``messages`` maps each failed property to its ordered failure messages.
    It is empty on success.
    """

    model_config = ConfigDict(frozen=True)

    messages: Dict[str, List[str]] = {}

    @property
    def success(self) -> bool:
        return not self.messages

    @property
    def failure(self) -> bool:
        return bool(self.messages)


class ContractSchema:
    """Composable, immutable set of rule layers."""

    __slots__ = ("_layers",)

    def __init__(self, layers: Iterable[Type[BaseModel]] = ()):
        self._layers = tuple(layers)

    @property
    def layers(self) -> Tuple[Type[BaseModel], ...]:
        return self._layers

    @property
    def is_empty(self) -> bool:
        return not self._layers

    def extend(self, *blocks: RuleBlock, name: str = "ContractRules") -> "ContractSchema":
        """Return a new schema with one extra layer per rule block."""
        strict = settings.get_config().validation.strict
        layers = list(self._layers)
        for block in blocks:
            layers.append(build_layer(block, f"{name}{len(layers) + 1}", strict))
        logger.debug("Extended %s: %d -> %d layers", name, len(self._layers), len(layers))
        return ContractSchema(layers)

    def validate(self, data: Mapping[str, Any]) -> ValidationOutcome:
        """Validate ``data`` against every layer.

        Properties appear in the order their first failure was reported
        (layer order, then pydantic's order within a layer). Repeated
        messages for the same property are reported once.
        """
        if not self._layers:
            return ValidationOutcome()

        payload = dict(data)
        messages = {}
        for layer in self._layers:
            try:
                layer.model_validate(payload)
            except ValidationError as exc:
                for error in exc.errors(include_url=False):
                    bucket = messages.setdefault(_property_name(error["loc"]), [])
                    if error["msg"] not in bucket:
                        bucket.append(error["msg"])

        return ValidationOutcome(messages=messages)

    def __repr__(self):
        names = ", ".join(layer.__name__ for layer in self._layers)
        return f"<ContractSchema [{names}]>"


EMPTY_SCHEMA = ContractSchema()


def extend_schema(base: ContractSchema, *blocks: RuleBlock, name: str = "ContractRules") -> ContractSchema:
    """Functional form of :meth:`ContractSchema.extend`.

    ``base`` may be None, in which case an empty schema is extended.
    """
    if base is None:
        base = EMPTY_SCHEMA
    return base.extend(*blocks, name=name)


def _property_name(loc) -> str:
    return ".".join(str(part) for part in loc) or BASE_PROPERTY
