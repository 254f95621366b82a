"""Single-responsibility pipeline step.

Subclasses implement :meth:`Action.execute` and read/write their data through
``self.context``. Hooks registered with :meth:`Action.before` and
:meth:`Action.after` run around the body, in registration order.

    class CreatePerson(Action):
        def execute(self):
            self.context.person = {"name": self.context.name}

    ctx = CreatePerson.run(name="Billy")
    ctx.success  # True
"""

import logging
from typing import Callable, Tuple

from actioncontracts.pipeline.context import Context, ContextFailure

__all__ = ['Action', 'Hook']

logger = logging.getLogger(__name__)

Hook = Callable[["Action"], None]


class Action:
    """Base class for pipeline steps.

    Hooks belong to the class they are registered on; subclasses do not
    inherit them.
    """

    def __init__(self, context=None, **values):
        self.context = Context.build(context, **values)

    # ------------------------------------------------------------------
    # Hook registration
    # ------------------------------------------------------------------

    @classmethod
    def _hooks(cls, kind: str) -> list:
        attr = f"_{kind}_hooks"
        if attr not in cls.__dict__:
            setattr(cls, attr, [])
        return cls.__dict__[attr]

    @classmethod
    def before(cls, hook: Hook) -> Hook:
        """Register ``hook(action)`` to run before the body. Usable as a decorator."""
        cls._hooks("before").append(hook)
        return hook

    @classmethod
    def after(cls, hook: Hook) -> Hook:
        """Register ``hook(action)`` to run after the body. Usable as a decorator."""
        cls._hooks("after").append(hook)
        return hook

    @classmethod
    def before_hooks(cls) -> Tuple[Hook, ...]:
        return tuple(cls.__dict__.get("_before_hooks", ()))

    @classmethod
    def after_hooks(cls) -> Tuple[Hook, ...]:
        return tuple(cls.__dict__.get("_after_hooks", ()))

    # ------------------------------------------------------------------
    # Invocation
    # ------------------------------------------------------------------

    @classmethod
    def run(cls, context=None, **values) -> Context:
        """Run the action and return its context.

        A failure signalled through ``context.fail()`` is caught; check
        ``context.success`` / ``context.failure`` for the outcome.
        """
        action = cls(context, **values)
        try:
            action.invoke()
        except ContextFailure as exc:
            logger.debug("%s failed: %s", cls.__name__, exc)
        return action.context

    @classmethod
    def run_strict(cls, context=None, **values) -> Context:
        """Run the action, letting ContextFailure propagate."""
        action = cls(context, **values)
        action.invoke()
        return action.context

    def invoke(self) -> None:
        """Run before hooks, the body, then after hooks."""
        logger.debug("Running %s", type(self).__name__)
        for hook in self.before_hooks():
            hook(self)
        self.execute()
        for hook in self.after_hooks():
            hook(self)

    def execute(self) -> None:
        """Action body. Subclasses must override."""
        raise NotImplementedError(f"{type(self).__name__} must implement execute()")
