"""Centralized failure types for contract enforcement.

Two kinds of problems exist:
- Configuration errors: contracts declared on something that is not an
  action, or rule blocks the schema builder cannot compile. Raised at
  declaration time and never recovered.
- Breaches: data that does not meet a contract at run time. These are routed
  through consequence handlers; ContractViolation is only raised when the
  configured default policy asks for it.
"""

from enum import Enum


class FailurePolicy(str, Enum):
    """What the implicit default consequence does with a breach.

    FAIL (default): Mark the running context failed, with no message
    RAISE: Raise ContractViolation carrying the breaches
    WARN: Log a warning and let the step continue
    """
    FAIL = "fail"
    RAISE = "raise"
    WARN = "warn"


class ContractConfigurationError(TypeError):
    """Raised when contracts are declared incorrectly.

    This is a load-time programming error, not a data problem.
    """
    pass


class NotAnActionError(ContractConfigurationError):
    """Raised when contracts are declared on a class that is not an Action."""

    def __init__(self, target):
        self.target = target
        name = getattr(target, "__qualname__", repr(target))
        super().__init__(f"{name} is not a subclass of `Action'")


class ContractViolation(RuntimeError):
    """Raised by the default consequence under the ``raise`` policy.

    Carries the breaches that triggered it. The message names the breached
    contract, taken from ``kind`` or else from the first breach.
    """

    def __init__(self, breaches, kind: str = None):
        self.breaches = list(breaches)
        if kind is None:
            kind = self.breaches[0].kind if self.breaches else "contract"
        self.kind = kind
        terms = ", ".join(
            f"{b.property} {'; '.join(b.messages)}" for b in self.breaches
        )
        super().__init__(f"{kind.capitalize()} violated: {terms}")
