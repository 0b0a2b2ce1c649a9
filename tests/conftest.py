"""Pytest configuration and fixtures."""

import os
from datetime import datetime, timezone

import pytest

# Set test environment variables before any imports that might use them
os.environ.setdefault("LANGFUSE_TRACING_ENABLED", "false")

# Disable OpenTelemetry during tests to prevent connection errors to localhost:3000
os.environ.setdefault("OTEL_SDK_DISABLED", "true")

from util.timeshift.gazetteer import DATA_DIR, Gazetteer  # noqa: E402
from util.timeshift.models import Country, Place  # noqa: E402

# unix 1639067620
REFERENCE_NOW = datetime(2021, 12, 9, 16, 33, 40, tzinfo=timezone.utc)


@pytest.fixture
def reference_now():
    """A fixed reference instant: Thursday 2021-12-09 16:33:40 UTC."""
    return REFERENCE_NOW


@pytest.fixture(scope="session")
def gazetteer():
    """The bundled gazetteer."""
    return Gazetteer.from_directory(DATA_DIR)


@pytest.fixture
def small_gazetteer():
    """A handful of places with shared names, built in memory."""
    places = [
        Place(name="Vienna", country_code="AT", timezone_id="Europe/Vienna", population=1691468),
        Place(
            name="Vienna",
            admin_code="VA",
            country_code="US",
            timezone_id="America/New_York",
            population=16489,
        ),
        Place(name="Toronto", country_code="CA", timezone_id="America/Toronto", population=2600000),
        Place(
            name="Springfield",
            admin_code="IL",
            country_code="US",
            timezone_id="America/Chicago",
            population=100000,
        ),
        Place(
            name="Springfield",
            admin_code="MA",
            country_code="US",
            timezone_id="America/New_York",
            population=100000,
        ),
    ]
    countries = [
        Country(code="AT", name="Austria"),
        Country(code="CA", name="Canada"),
        Country(code="US", name="United States"),
    ]
    return Gazetteer(places, countries)
