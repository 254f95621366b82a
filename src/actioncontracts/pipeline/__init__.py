"""Action runtime: the steps contracts are enforced around.

Exports
-------
Action : class
    Base class for pipeline steps with before/after hooks
Context : class
    Mutable data carrier shared by one invocation
ContextFailure : exception
    Failure signal raised by ``Context.fail()``
"""

from actioncontracts.pipeline.context import Context, ContextFailure
from actioncontracts.pipeline.action import Action

__all__ = ['Action', 'Context', 'ContextFailure']
