"""Pytest configuration and fixtures."""

import threading

import pytest

from skyfinder.services.geocoding_service import Location


class FakeGeocodingService:
    """Geocoding double that answers from a query -> results table.

    A value that is an exception instance is raised instead of returned.
    Unknown queries return an empty list.
    """

    def __init__(self, responses=None, api_key="test-key"):
        self.api_key = api_key
        self.responses = dict(responses or {})
        self.calls = []
        self._lock = threading.Lock()

    def search(self, query, limit):
        with self._lock:
            self.calls.append((query, limit))
        response = self.responses.get(query, [])
        if isinstance(response, Exception):
            raise response
        return list(response)

    @property
    def queries(self):
        return [query for query, _ in self.calls]


def _make_location(name, country="IN", lat=1.0, lon=1.0, state=None):
    return Location(name=name, latitude=lat, longitude=lon, country_code=country, state=state)


@pytest.fixture
def make_location():
    return _make_location


@pytest.fixture
def fake_geocoder_factory():
    return FakeGeocodingService


@pytest.fixture
def fake_geocoder():
    return FakeGeocodingService()
