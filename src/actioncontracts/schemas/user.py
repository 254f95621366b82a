"""UserConfig: Forgiving, minimal user-facing configuration.

Users only specify what they want to override from the expert defaults.
Flat shortcuts (``default_policy``, ``strict``, ``log_level``) are accepted
alongside explicit nested sections, and values are case-insensitive.
"""

from typing import Literal, Optional
from pydantic import AliasChoices, Field, field_validator
from actioncontracts.schemas.base import ContractsBaseModel


class UserContractsConfig(ContractsBaseModel):
    """User-facing breach handling config."""
    default_policy: Optional[Literal["fail", "raise", "warn"]] = None
    log_breaches: Optional[bool] = None
    breach_log_level: Optional[str] = None

    @field_validator("default_policy", mode="before")
    @classmethod
    def normalize_policy(cls, v):
        """Normalize policy names to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v

    @field_validator("breach_log_level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        """Normalize level names to uppercase."""
        if isinstance(v, str):
            return v.upper().strip()
        return v


class UserValidationConfig(ContractsBaseModel):
    """User-facing rule compilation config."""
    strict: Optional[bool] = None


class UserLoggingConfig(ContractsBaseModel):
    """User-facing logging config."""
    level: Optional[str] = None

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        """Normalize level names to uppercase."""
        if isinstance(v, str):
            return v.upper().strip()
        return v


class UserConfig(ContractsBaseModel):
    """User overrides for the default configuration.

    Usage
    -----
        user = UserConfig(default_policy="RAISE", log_level="debug")
        internal = resolve_config(ParamConfig(), user)
    """

    # Flat shortcuts
    default_policy: Optional[Literal["fail", "raise", "warn"]] = Field(
        None, validation_alias=AliasChoices("default_policy", "DEFAULT_POLICY", "policy")
    )
    strict: Optional[bool] = Field(None, validation_alias=AliasChoices("strict", "STRICT"))
    log_level: Optional[str] = Field(None, validation_alias=AliasChoices("log_level", "LOG_LEVEL"))

    # Explicit sections
    contracts: Optional[UserContractsConfig] = None
    validation: Optional[UserValidationConfig] = None
    logging: Optional[UserLoggingConfig] = None

    @field_validator("default_policy", mode="before")
    @classmethod
    def normalize_policy(cls, v):
        """Normalize policy names to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Normalize level names to uppercase."""
        if isinstance(v, str):
            return v.upper().strip()
        return v

    def to_internal_overrides(self) -> dict:
        """Convert to the nested override dict consumed by resolve_config().

        Explicit sections win over the flat shortcuts.
        """
        overrides = {}

        contracts = {}
        if self.default_policy is not None:
            contracts["default_policy"] = self.default_policy
        if self.contracts is not None:
            contracts.update(self.contracts.model_dump(exclude_none=True))
        if contracts:
            overrides["contracts"] = contracts

        validation = {}
        if self.strict is not None:
            validation["strict"] = self.strict
        if self.validation is not None:
            validation.update(self.validation.model_dump(exclude_none=True))
        if validation:
            overrides["validation"] = validation

        logging_cfg = {}
        if self.log_level is not None:
            logging_cfg["level"] = self.log_level
        if self.logging is not None:
            logging_cfg.update(self.logging.model_dump(exclude_none=True))
        if logging_cfg:
            overrides["logging"] = logging_cfg

        return overrides
