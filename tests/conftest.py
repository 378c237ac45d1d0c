"""Shared fixtures for the monolith test suites."""

from datetime import datetime, timezone

import pytest

from monolith.calculator import Calculator

WHEN = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def when():
    return WHEN


@pytest.fixture
def calc():
    """A fresh calculator with a=b=c=0 and no trace console."""
    return Calculator()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove any MONOLITH_* overrides inherited from the shell."""
    for key in ("MONOLITH_SEED", "MONOLITH_FLAG", "MONOLITH_NAME", "MONOLITH_ITEMS"):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch
