"""Contract Enforcer.

Runs a schema against a data snapshot and hands any breaches to the
consequence handlers. The enforcer itself never raises for bad data: what a
breach means is decided entirely by the handlers.
"""

import logging
from typing import Any, Callable, List, Mapping, Sequence

from actioncontracts import settings
from actioncontracts.contracts.breach import Breach, breaches_from_messages
from actioncontracts.contracts.failure import ContractViolation, FailurePolicy
from actioncontracts.contracts.schema import ContractSchema
from actioncontracts.pipeline.context import Context

__all__ = ['Consequence', 'enforce', 'default_consequence']

logger = logging.getLogger(__name__)

Consequence = Callable[[Context, List[Breach]], None]


def enforce(
    schema: ContractSchema,
    snapshot: Mapping[str, Any],
    consequences: Sequence[Consequence],
    context: Context,
    kind: str = "contract",
) -> List[Breach]:
    """Validate ``snapshot`` and dispatch breaches to ``consequences``.

    Parameters
    ----------
    schema : ContractSchema
        Rules to check. An empty schema always passes.
    snapshot : Mapping
        Data to check, typically ``context.to_dict()``. Never mutated.
    consequences : sequence of callables
        Each is called as ``handler(context, breaches)`` in order. If a
        handler raises (e.g. ContextFailure from ``context.fail()``), the
        remaining handlers do not run.
    context : Context
        The running invocation's context, passed to every handler.
    kind : str
        Names the breached contract ("expectations" / "assurances") in log
        messages and on each Breach.

    Returns
    -------
    list of Breach
        Empty when the snapshot meets the schema.
    """
    outcome = schema.validate(snapshot)
    if outcome.success:
        return []

    breaches = breaches_from_messages(outcome.messages, kind)

    config = settings.get_config().contracts
    if config.log_breaches:
        logger.log(
            getattr(logging, config.breach_log_level, logging.INFO),
            "%s breached on %s",
            kind.capitalize(),
            ", ".join(breach.property for breach in breaches),
        )

    for handler in consequences:
        handler(context, breaches)

    return breaches


def default_consequence(context: Context, breaches: List[Breach]) -> None:
    """Consequence used when an action registers no ``on_breach`` handler.

    Behavior follows ``contracts.default_policy``:

    - ``fail``: ``context.fail()`` with no message
    - ``raise``: raise ContractViolation
    - ``warn``: log a warning and carry on
    """
    policy = FailurePolicy(settings.get_config().contracts.default_policy)

    if policy is FailurePolicy.RAISE:
        raise ContractViolation(breaches)
    if policy is FailurePolicy.WARN:
        logger.warning(
            "Contract breached, continuing: %s",
            "; ".join(f"{b.property}: {', '.join(b.messages)}" for b in breaches),
        )
        return

    context.fail()
