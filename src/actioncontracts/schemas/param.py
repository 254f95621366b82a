"""ParamConfig: Expert defaults for contract enforcement.

This module defines the complete default configuration. ALL settings must
have defaults here. No runtime code should define fallback values - this is
the single source of truth for defaults.

Runtime code NEVER reads from ParamConfig directly - it only receives InternalConfig.
"""

from typing import Literal
from pydantic import Field, field_validator
from actioncontracts.schemas.base import ContractsBaseModel


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ContractsConfig(ContractsBaseModel):
    """Breach handling configuration."""
    default_policy: Literal["fail", "raise", "warn"] = Field(
        "fail",
        description="What the implicit consequence does when no on_breach handler is registered",
    )
    log_breaches: bool = Field(True, description="Log every breach before dispatching consequences")
    breach_log_level: LogLevel = "INFO"

    @field_validator("breach_log_level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        """Accept lowercase level names."""
        if isinstance(v, str):
            return v.upper().strip()
        return v


class ValidationConfig(ContractsBaseModel):
    """Rule compilation configuration."""
    strict: bool = Field(False, description="Disable type coercion in compiled rule layers")


class LoggingConfig(ContractsBaseModel):
    """Package logging configuration."""
    level: LogLevel = "WARNING"
    fmt: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    datefmt: str = '%Y-%m-%d %H:%M:%S'

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        """Accept lowercase level names."""
        if isinstance(v, str):
            return v.upper().strip()
        return v


class ParamConfig(ContractsBaseModel):
    """Complete default configuration.

    Usage
    -----
        param = ParamConfig()
        param.contracts.default_policy  # 'fail'
    """
    contracts: ContractsConfig = Field(default_factory=ContractsConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
