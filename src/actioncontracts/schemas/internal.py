"""InternalConfig: Authoritative runtime configuration.

This is the ONLY config schema that runtime code sees. It is fully validated,
normalized, and contains NO optional fields that enforcement code depends on.
"""

from typing import Literal
from pydantic import ConfigDict
from actioncontracts.schemas.base import ContractsBaseModel


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class InternalContractsConfig(ContractsBaseModel):
    """Runtime breach handling configuration."""
    default_policy: Literal["fail", "raise", "warn"]
    log_breaches: bool
    breach_log_level: LogLevel


class InternalValidationConfig(ContractsBaseModel):
    """Runtime rule compilation configuration."""
    strict: bool


class InternalLoggingConfig(ContractsBaseModel):
    """Runtime logging configuration."""
    level: LogLevel
    fmt: str
    datefmt: str


class InternalConfig(ContractsBaseModel):
    """Authoritative runtime configuration.

    Runtime modules access fields directly:

        policy = get_config().contracts.default_policy  # NOT .get()
    """

    contracts: InternalContractsConfig
    validation: InternalValidationConfig
    logging: InternalLoggingConfig

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        frozen=True,  # Immutable after construction
    )
