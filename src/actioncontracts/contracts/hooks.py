"""Hook Installer.

Each registered action class gets at most one expectations hook (before the
body) and one assurances hook (after the body), however many times rules are
declared. The hooks look up the class's schemas and consequences when they
fire, so rules declared after a hook was installed still apply.
"""

import logging

from actioncontracts.contracts.enforcement import enforce

__all__ = ['ensure_expectations_hook', 'ensure_assurances_hook']

logger = logging.getLogger(__name__)


def ensure_expectations_hook(entry) -> bool:
    """Install the before hook for ``entry.action`` unless already installed.

    Returns True when a hook was installed by this call.
    """
    if entry.expectations_hooked:
        return False

    def enforce_expectations(action):
        enforce(
            entry.expectations,
            action.context.to_dict(),
            entry.effective_consequences(),
            action.context,
            kind="expectations",
        )

    entry.action.before(enforce_expectations)
    entry.expectations_hooked = True
    logger.debug("Installed expectations hook on %s", entry.action.__qualname__)
    return True


def ensure_assurances_hook(entry) -> bool:
    """Install the after hook for ``entry.action`` unless already installed.

    Returns True when a hook was installed by this call.
    """
    if entry.assurances_hooked:
        return False

    def enforce_assurances(action):
        enforce(
            entry.assurances,
            action.context.to_dict(),
            entry.effective_consequences(),
            action.context,
            kind="assurances",
        )

    entry.action.after(enforce_assurances)
    entry.assurances_hooked = True
    logger.debug("Installed assurances hook on %s", entry.action.__qualname__)
    return True
