"""Tests for the error taxonomy."""

import pytest

from ripscanner.core.errors import (
    ConfigurationError,
    FatalIOError,
    RecoverableNetworkError,
    RecoverablePatternError,
    ABORT,
    SKIP,
    policy_for,
)


class TestErrorPolicy:
    """Test the error policy table."""

    @pytest.mark.parametrize("exc, action", [
        (ConfigurationError("x"), ABORT),
        (FatalIOError("x"), ABORT),
        (RecoverablePatternError("x"), SKIP),
        (RecoverableNetworkError("x"), SKIP),
        (RuntimeError("x"), ABORT),
    ])
    def test_policy(self, exc, action):
        """Test each error kind maps to its action."""
        assert policy_for(exc) == action
