"""Pytest configuration and shared fixtures."""

from zoneinfo import ZoneInfo

import pytest

from app.domain.value_objects.business_hours import BusinessHours

BERLIN = ZoneInfo("Europe/Berlin")


@pytest.fixture
def berlin():
    return BERLIN


@pytest.fixture
def calendar():
    """Mon–Fri 08:00–18:00 Europe/Berlin."""
    return BusinessHours(tz=BERLIN)
