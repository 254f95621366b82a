"""Action contracts: declared expectations and assurances for pipeline steps.

An action declares the data it expects in its context before it runs and
the data it assures after it runs. Both are checked by hooks around the
action body; failures become Breach records handed to consequence handlers.

Key principle:
- Rules describe data (pydantic does the checking)
- Hooks decide when rules are checked
- Consequences decide what a breach means for the step
"""

from actioncontracts.contracts.failure import (
    ContractConfigurationError,
    ContractViolation,
    FailurePolicy,
    NotAnActionError,
)
from actioncontracts.contracts.breach import Breach, breaches_to_dict
from actioncontracts.contracts.rules import FieldRule, optional, required
from actioncontracts.contracts.schema import (
    EMPTY_SCHEMA,
    ContractSchema,
    ValidationOutcome,
    extend_schema,
)
from actioncontracts.contracts.enforcement import default_consequence, enforce
from actioncontracts.contracts.declaration import (
    ActionContracts,
    assurances,
    assures,
    consequences,
    contract,
    contracts_for,
    expectations,
    expects,
    is_registered,
    on_breach,
    register,
)

__all__ = [
    "ActionContracts",
    "Breach",
    "ContractConfigurationError",
    "ContractSchema",
    "ContractViolation",
    "EMPTY_SCHEMA",
    "FailurePolicy",
    "FieldRule",
    "NotAnActionError",
    "ValidationOutcome",
    "assurances",
    "assures",
    "breaches_to_dict",
    "consequences",
    "contract",
    "contracts_for",
    "default_consequence",
    "enforce",
    "expectations",
    "expects",
    "extend_schema",
    "is_registered",
    "on_breach",
    "optional",
    "register",
    "required",
]
