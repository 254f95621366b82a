"""`action-contracts` - declared input and output contracts for pipeline actions.

Subpackages:
- pipeline: Action runtime (context, hooks, run/run_strict)
- contracts: Rules, schemas, breaches, enforcement and the declaration API
- schemas: Pydantic configuration layers
"""

__version__ = "0.1.0"
