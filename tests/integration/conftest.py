"""Configuration for integration tests."""

import pytest
import requests

from aws_regions import AwsIpRanges, RefreshPolicy


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests (require internet)")


@pytest.fixture(scope="session")
def skip_if_no_internet():
    """Skip test if the registry cannot be reached."""
    try:
        response = requests.head("https://ip-ranges.amazonaws.com/ip-ranges.json", timeout=5)
        response.raise_for_status()
    except requests.RequestException:
        pytest.skip("No internet connectivity for integration tests")


@pytest.fixture(scope="session")
def live_ranges(skip_if_no_internet):
    """AwsIpRanges instance loaded once from the live registry."""
    ranges = AwsIpRanges(refresh_policy=RefreshPolicy.ONCE_AT_STARTUP)
    with ranges:
        yield ranges
