"""Pydantic configuration schemas for action-contracts.

Exports
-------
resolve_config : function
    Single entrypoint for configuration resolution
InternalConfig : class
    Fully validated, authoritative runtime configuration
ParamConfig : class
    Expert defaults (complete)
UserConfig : class
    User-facing configuration (forgiving, minimal)
"""

from actioncontracts.schemas.resolve import resolve_config
from actioncontracts.schemas.internal import InternalConfig
from actioncontracts.schemas.param import ParamConfig
from actioncontracts.schemas.user import UserConfig

__all__ = [
    'resolve_config',
    'InternalConfig',
    'ParamConfig',
    'UserConfig',
]
