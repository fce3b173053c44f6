from datetime import datetime, timedelta, timezone

import pytest

from library import Library

FIXED_NOW = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def lib():
    # Fresh store per test with the default two-title catalog and a frozen clock
    return Library(
        {"Go Programming": 3, "Clean Code": 2},
        loan_period_days=28,
        extension_days=21,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def due_in():
    """Return the due date ``days`` after the frozen clock."""
    return lambda days: FIXED_NOW + timedelta(days=days)
