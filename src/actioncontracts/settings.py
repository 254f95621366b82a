"""Process-wide active configuration.

Enforcement code reads the active InternalConfig through :func:`get_config`
at the moment it needs it, so reconfiguring takes effect for hooks that are
already installed.

    from actioncontracts import settings

    settings.configure({"default_policy": "raise", "log_level": "info"})
"""

import logging
import threading
from typing import Optional, Union

from actioncontracts.schemas import InternalConfig, ParamConfig, UserConfig, resolve_config

__all__ = ['configure', 'get_config', 'reset', 'configure_logging']

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "actioncontracts"

_lock = threading.Lock()
_active: Optional[InternalConfig] = None
_handler: Optional[logging.Handler] = None


def get_config() -> InternalConfig:
    """Return the active configuration, resolving defaults on first use."""
    global _active
    if _active is None:
        with _lock:
            if _active is None:
                _active = resolve_config(ParamConfig(), None)
    return _active


def configure(
    user_cfg: Optional[Union[dict, UserConfig]] = None,
    param_cfg: Optional[Union[dict, ParamConfig]] = None,
    setup_logging: bool = True,
) -> InternalConfig:
    """Resolve and activate a new configuration.

    Parameters
    ----------
    user_cfg : dict or UserConfig, optional
        User overrides (highest priority).
    param_cfg : dict or ParamConfig, optional
        Expert defaults. ``ParamConfig()`` when omitted.
    setup_logging : bool
        Apply the logging section via :func:`configure_logging`.

    Returns
    -------
    InternalConfig
        The configuration now in effect.
    """
    global _active
    config = resolve_config(param_cfg, user_cfg)
    with _lock:
        _active = config
    if setup_logging:
        configure_logging(config)
    logger.debug("Configuration activated: %s", config.model_dump())
    return config


def reset() -> None:
    """Drop the active configuration and any handler installed by configure_logging()."""
    global _active, _handler
    with _lock:
        _active = None
        if _handler is not None:
            logging.getLogger(PACKAGE_LOGGER).removeHandler(_handler)
            _handler = None


def configure_logging(config: InternalConfig) -> None:
    """Configure the package logger from the logging section.

    Sets the level on the ``actioncontracts`` logger and attaches one
    console handler. Calling it again replaces the handler rather than
    adding a second one. The root logger is left alone.
    """
    global _handler
    log_level = getattr(logging, config.logging.level.upper(), logging.WARNING)

    formatter = logging.Formatter(
        fmt=config.logging.fmt,
        datefmt=config.logging.datefmt,
    )

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(log_level)

    with _lock:
        if _handler is not None:
            package_logger.removeHandler(_handler)
        ch = logging.StreamHandler()
        ch.setLevel(log_level)
        ch.setFormatter(formatter)
        package_logger.addHandler(ch)
        _handler = ch

    logger.info("Logging: level=%s", config.logging.level)
