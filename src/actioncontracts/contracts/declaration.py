"""Contract Declaration API.

Contracts are kept in a registry keyed by action class rather than on the
class itself. Registering a class checks that it is an Action and creates its
entry: empty expectations and assurances schemas and an empty list of
consequence handlers.

    class CreatePerson(Action):
        def execute(self):
            self.context.person = {"name": self.context.name}

    contracts = register(CreatePerson)
    contracts.expects(required("name").filled())
    contracts.assures(required("person").filled())

    @contracts.on_breach
    def invalid(context, breaches):
        context.fail(message=f"invalid_{breaches[0].property}")

    CreatePerson.run(first_name="Billy").message  # 'invalid_name'

The same declarations are available as a class decorator:

    @contract(expects=required("name").filled(), on_breach=invalid)
    class CreatePerson(Action):
        ...
"""

import logging
import threading
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from actioncontracts.contracts.enforcement import Consequence, default_consequence
from actioncontracts.contracts.failure import ContractConfigurationError, NotAnActionError
from actioncontracts.contracts.hooks import ensure_assurances_hook, ensure_expectations_hook
from actioncontracts.contracts.rules import RuleBlock
from actioncontracts.contracts.schema import EMPTY_SCHEMA, ContractSchema, extend_schema
from actioncontracts.pipeline.action import Action

__all__ = [
    'ActionContracts',
    'register',
    'contracts_for',
    'is_registered',
    'expects',
    'assures',
    'on_breach',
    'expectations',
    'assurances',
    'consequences',
    'contract',
]

logger = logging.getLogger(__name__)

_registry: Dict[type, "ActionContracts"] = {}
_lock = threading.RLock()


class ActionContracts:
    """Contracts declared for one action class.

    Attributes
    ----------
    action : type
        The Action subclass these contracts belong to.
    expectations_hooked, assurances_hooked : bool
        Whether the before/after enforcement hooks are installed.
    """

    default_consequence = staticmethod(default_consequence)

    def __init__(self, action: type, parent: Optional["ActionContracts"] = None):
        self.action = action
        self._expectations = parent.expectations if parent else EMPTY_SCHEMA
        self._assurances = parent.assurances if parent else EMPTY_SCHEMA
        self._consequences: List[Consequence] = list(parent.defined_consequences) if parent else []
        self.expectations_hooked = False
        self.assurances_hooked = False

    @property
    def expectations(self) -> ContractSchema:
        """Schema checked against the context before the body runs."""
        return self._expectations

    @property
    def assurances(self) -> ContractSchema:
        """Schema checked against the context after the body runs."""
        return self._assurances

    @property
    def defined_consequences(self) -> Tuple[Consequence, ...]:
        """Handlers registered with on_breach(), in registration order."""
        return tuple(self._consequences)

    @property
    def consequences(self) -> Tuple[Consequence, ...]:
        return tuple(self.effective_consequences())

    def effective_consequences(self) -> List[Consequence]:
        """Registered handlers, or only the default consequence when none are."""
        if self._consequences:
            return list(self._consequences)
        return [self.default_consequence]

    def expects(self, *blocks: RuleBlock) -> "ActionContracts":
        """Add rules the context must meet before the body runs."""
        with _lock:
            self._expectations = extend_schema(
                self._expectations, *blocks, name=f"{self.action.__name__}Expectations"
            )
            ensure_expectations_hook(self)
        return self

    def assures(self, *blocks: RuleBlock) -> "ActionContracts":
        """Add rules the context must meet after the body has run."""
        with _lock:
            self._assurances = extend_schema(
                self._assurances, *blocks, name=f"{self.action.__name__}Assurances"
            )
            ensure_assurances_hook(self)
        return self

    def on_breach(self, handler: Consequence) -> Consequence:
        """Register ``handler(context, breaches)``. Usable as a decorator.

        Once any handler is registered the default consequence no longer runs.
        """
        if not callable(handler):
            raise ContractConfigurationError(f"on_breach handler must be callable, got {handler!r}")
        with _lock:
            self._consequences.append(handler)
        return handler

    def __repr__(self):
        return (
            f"<ActionContracts {self.action.__qualname__} "
            f"expectations={len(self._expectations.layers)} "
            f"assurances={len(self._assurances.layers)} "
            f"consequences={len(self._consequences)}>"
        )


def register(action) -> ActionContracts:
    """Return the contracts entry for ``action``, creating it on first call.

    A new entry for a subclass of a registered action starts from its
    nearest registered ancestor's schemas and handlers, and gets its own
    hooks for every contract kind the ancestor enforces. The copy is taken
    once, when the subclass is registered: rules and handlers added to the
    ancestor afterwards do not reach the subclass. A subclass that is never
    registered has no hooks of its own and runs without contracts, since
    Action hooks are not inherited.

    Raises
    ------
    NotAnActionError
        If ``action`` is not a subclass of Action.
    """
    if not (isinstance(action, type) and issubclass(action, Action)):
        raise NotAnActionError(action)

    with _lock:
        entry = _registry.get(action)
        if entry is not None:
            return entry

        parent = _nearest_registered(action)
        entry = ActionContracts(action, parent)
        _registry[action] = entry
        if parent is not None:
            if parent.expectations_hooked:
                ensure_expectations_hook(entry)
            if parent.assurances_hooked:
                ensure_assurances_hook(entry)
            logger.debug("Registered %s (inherits from %s)", action.__qualname__, parent.action.__qualname__)
        else:
            logger.debug("Registered %s", action.__qualname__)
        return entry


contracts_for = register


def is_registered(action) -> bool:
    return action in _registry


def _nearest_registered(action: type) -> Optional[ActionContracts]:
    for base in action.__mro__[1:]:
        if base in _registry:
            return _registry[base]
    return None


def expects(action, *blocks: RuleBlock) -> ActionContracts:
    """Declare expectations for ``action``. See :meth:`ActionContracts.expects`."""
    return register(action).expects(*blocks)


def assures(action, *blocks: RuleBlock) -> ActionContracts:
    """Declare assurances for ``action``. See :meth:`ActionContracts.assures`."""
    return register(action).assures(*blocks)


def on_breach(action, handler: Optional[Consequence] = None):
    """Register a consequence for ``action``.

    Called without ``handler`` it returns a decorator:

        @on_breach(CreatePerson)
        def invalid(context, breaches):
            ...
    """
    entry = register(action)
    if handler is None:
        return entry.on_breach
    return entry.on_breach(handler)


def expectations(action) -> ContractSchema:
    return register(action).expectations


def assurances(action) -> ContractSchema:
    return register(action).assurances


def consequences(action) -> Tuple[Consequence, ...]:
    return register(action).consequences


def contract(
    expects: Optional[RuleBlock] = None,
    assures: Optional[RuleBlock] = None,
    on_breach: Union[Consequence, Sequence[Consequence], None] = None,
) -> Callable[[type], type]:
    """Class decorator declaring contracts in one place.

    ``expects`` and ``assures`` are each one rule block; ``on_breach`` is a
    handler or a sequence of handlers, registered in order.
    """
    def decorate(action: type) -> type:
        entry = register(action)
        if expects is not None:
            entry.expects(expects)
        if assures is not None:
            entry.assures(assures)
        if on_breach is not None:
            handlers = [on_breach] if callable(on_breach) else list(on_breach)
            for handler in handlers:
                entry.on_breach(handler)
        return action
    return decorate
