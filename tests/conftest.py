"""Root-level pytest fixtures for the action-contracts test suite.

Every test gets a fresh default configuration, and action classes are built
per test so contracts never leak between tests.
"""

import pytest

from actioncontracts import settings
from actioncontracts.pipeline import Action


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def default_settings():
    """Reset the active configuration around each test."""
    settings.reset()
    yield settings.get_config()
    settings.reset()


@pytest.fixture
def configure():
    """Factory fixture activating user overrides for one test.

    Examples
    --------
    >>> def test_raise_policy(configure):
    ...     configure(default_policy="raise")
    """
    def _configure(**user_overrides):
        return settings.configure(user_overrides, setup_logging=False)

    return _configure


# =============================================================================
# Action Fixtures
# =============================================================================

@pytest.fixture
def make_action():
    """Factory fixture for fresh Action subclasses.

    The returned class records each body execution in ``calls`` and runs
    ``body(self)`` when one is given.

    Examples
    --------
    >>> def test_body_runs(make_action):
    ...     CreatePerson = make_action("CreatePerson")
    ...     CreatePerson.run(name="Billy")
    ...     assert CreatePerson.calls == 1
    """
    def _make(name="SampleAction", body=None, base=Action):
        def execute(self):
            type(self).calls += 1
            if body is not None:
                body(self)

        return type(name, (base,), {"calls": 0, "execute": execute})

    return _make
