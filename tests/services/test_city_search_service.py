"""City search orchestration tests"""

import asyncio

import pytest

from skyfinder.services.city_search_service import (
    CitySearchResult,
    CitySearchService,
    SearchSession,
    SearchSessionRegistry,
)
from skyfinder.services.geocoding_service import CredentialMissingError, GeocodingServiceError


class TestCitySearchService:
    """End-to-end search over a scripted geocoder."""

    @pytest.mark.parametrize("text", ["", "   ", "\t\n"])
    def test_blank_query_makes_no_calls(self, fake_geocoder, text):
        service = CitySearchService(fake_geocoder)

        assert service.search(text) == []
        assert fake_geocoder.calls == []

    def test_blank_query_skips_credential_check(self, fake_geocoder_factory):
        geocoder = fake_geocoder_factory(api_key="")

        assert CitySearchService(geocoder).run("  ").status == "empty"

    def test_missing_credential_raises_before_network(self, fake_geocoder_factory):
        geocoder = fake_geocoder_factory(api_key="YOUR_API_KEY")

        with pytest.raises(CredentialMissingError):
            CitySearchService(geocoder).search("Mumbai")
        assert geocoder.calls == []

    def test_run_reports_config_error(self, fake_geocoder_factory):
        geocoder = fake_geocoder_factory(api_key=None)

        result = CitySearchService(geocoder).run("Mumbai")

        assert result.status == "config_error"
        assert result.locations == []
        assert "OPENWEATHER_API_KEY" in result.error

    def test_exact_match_ranks_first_without_duplicates(self, fake_geocoder_factory, make_location):
        geocoder = fake_geocoder_factory(
            {
                "Mumbai": [make_location("Navi Mumbai", "IN"), make_location("Mumbai", "IN", lat=19.07, lon=72.88)],
                "Mumbai, India": [make_location("Mumbai", "IN", lat=9.0, lon=9.0), make_location("Mumbai Suburban", "IN")],
                "Mum": [make_location("Mumbra", "IN"), make_location("Navi Mumbai", "IN")],
            }
        )

        results = CitySearchService(geocoder).search("  Mumbai ")

        assert [loc.name for loc in results] == ["Mumbai", "Mumbai Suburban", "Navi Mumbai", "Mumbra"]
        assert (results[0].latitude, results[0].longitude) == (19.07, 72.88)
        identities = [loc.identity for loc in results]
        assert len(identities) == len(set(identities))

    def test_strategy_call_counts(self, fake_geocoder_factory, make_location):
        geocoder = fake_geocoder_factory({"Goa": [make_location("Goa", "IN")]})
        CitySearchService(geocoder).search("Goa")
        assert len(geocoder.calls) == 2

        geocoder = fake_geocoder_factory({"Pune": [make_location("Pune", "IN")]})
        CitySearchService(geocoder).search("Pune")
        assert len(geocoder.calls) == 3

    def test_fallback_city_is_backfilled(self, fake_geocoder_factory, make_location):
        geocoder = fake_geocoder_factory(
            {"Ludhiana, IN": [make_location("Ludhiana", "IN", lat=30.9, lon=75.85, state="Punjab")]}
        )

        result = CitySearchService(geocoder).run("ludh")

        assert result.status == "ok"
        assert len(result.locations) == 1
        ludhiana = result.locations[0]
        assert (ludhiana.name, ludhiana.country_code, ludhiana.state) == ("Ludhiana", "IN", None)
        assert (ludhiana.latitude, ludhiana.longitude) == (30.9, 75.85)
        assert ("Ludhiana, IN", 1) in geocoder.calls

    def test_fallback_city_keeps_zero_when_backfill_fails(self, fake_geocoder_factory):
        geocoder = fake_geocoder_factory({"Vadodara, IN": GeocodingServiceError("offline")})

        results = CitySearchService(geocoder).search("vadodara")

        assert len(results) == 1
        assert (results[0].latitude, results[0].longitude) == (0.0, 0.0)

    def test_no_results_status_is_empty(self, fake_geocoder):
        result = CitySearchService(fake_geocoder).run("Atlantis")

        assert result == CitySearchResult(query="Atlantis", status="empty")

    def test_same_query_is_deterministic(self, fake_geocoder_factory, make_location):
        responses = {
            "Kolkata": [make_location("Kolkata", "IN"), make_location("Kolkata Port", "IN")],
            "Kolkata, India": [make_location("Kol", "IN"), make_location("Kolkata", "IN")],
            "Kol": [make_location("Kolar", "IN"), make_location("Kollam", "IN")],
        }
        service = CitySearchService(fake_geocoder_factory(responses))

        assert service.search("Kolkata") == service.search("Kolkata")

    def test_run_async(self, fake_geocoder_factory, make_location):
        geocoder = fake_geocoder_factory({"Patna": [make_location("Patna", "IN")]})

        result = asyncio.run(CitySearchService(geocoder).run_async("Patna"))

        assert result.status == "ok"
        assert [loc.name for loc in result.locations] == ["Patna"]


class _ScriptedSearchService:
    """Search service whose run_async waits on a per-query event."""

    def __init__(self):
        self.gates = {}

    def gate(self, text):
        return self.gates.setdefault(text, asyncio.Event())

    async def run_async(self, text):
        await self.gate(text).wait()
        return CitySearchResult(query=text, status="ok", locations=[text])


class TestSearchSession:
    """Stale results from superseded searches are dropped."""

    def test_late_result_is_discarded(self):
        async def scenario():
            service = _ScriptedSearchService()
            session = SearchSession(service)

            slow = asyncio.create_task(session.submit("Mum"))
            await asyncio.sleep(0)
            fast = asyncio.create_task(session.submit("Mumbai"))
            await asyncio.sleep(0)

            service.gate("Mumbai").set()
            fast_result = await fast
            service.gate("Mum").set()
            slow_result = await slow
            return session, fast_result, slow_result

        session, fast_result, slow_result = asyncio.run(scenario())

        assert slow_result is None
        assert fast_result.query == "Mumbai"
        assert session.results == ["Mumbai"]

    def test_clear_drops_in_flight_result(self):
        async def scenario():
            service = _ScriptedSearchService()
            session = SearchSession(service)

            task = asyncio.create_task(session.submit("Delhi"))
            await asyncio.sleep(0)
            session.clear()
            service.gate("Delhi").set()
            return session, await task

        session, result = asyncio.run(scenario())

        assert result is None
        assert session.results == []
        assert session.generation == 2

    def test_config_error_is_recorded(self, fake_geocoder_factory):
        session = SearchSession(CitySearchService(fake_geocoder_factory(api_key="")))

        result = asyncio.run(session.submit("Delhi"))

        assert result.status == "config_error"
        assert session.last_error == result.error
        assert session.results == []

    def test_pick_returns_numbered_result_from_last_search(self, fake_geocoder_factory, make_location):
        geocoder = fake_geocoder_factory(
            {
                "Delhi": [
                    make_location("Delhi", "IN", lat=28.65, lon=77.23),
                    make_location("Delhi", "CA", lat=42.85, lon=-80.5),
                    make_location("Delhi", "US", lat=42.28, lon=-74.92),
                ]
            }
        )
        session = SearchSession(CitySearchService(geocoder))

        asyncio.run(session.submit("Delhi"))

        picked = session.pick(3)
        assert picked.identity == ("Delhi", "US")
        assert (picked.latitude, picked.longitude) == (42.28, -74.92)
        assert session.pick(1).identity == ("Delhi", "IN")

    @pytest.mark.parametrize("number", [0, 3, 99])
    def test_pick_out_of_range(self, fake_geocoder_factory, make_location, number):
        geocoder = fake_geocoder_factory({"Delhi": [make_location("Delhi", "IN"), make_location("Delhi", "US")]})
        session = SearchSession(CitySearchService(geocoder))

        asyncio.run(session.submit("Delhi"))

        assert session.pick(number) is None

    def test_pick_after_clear(self, fake_geocoder_factory, make_location):
        geocoder = fake_geocoder_factory({"Delhi": [make_location("Delhi", "IN")]})
        session = SearchSession(CitySearchService(geocoder))
        asyncio.run(session.submit("Delhi"))

        session.clear()

        assert session.pick(1) is None


class TestSearchSessionRegistry:
    """Per-user sessions are reused and bounded."""

    def test_same_user_gets_same_session(self, fake_geocoder):
        registry = SearchSessionRegistry(CitySearchService(fake_geocoder))

        assert registry.get("42") is registry.get("42")
        assert registry.get("42") is not registry.get("7")

    def test_evicts_least_recently_used(self, fake_geocoder):
        registry = SearchSessionRegistry(CitySearchService(fake_geocoder), max_sessions=2)
        alice = registry.get("alice")
        bob = registry.get("bob")
        registry.get("alice")

        registry.get("carol")

        assert len(registry) == 2
        assert registry.get("alice") is alice
        assert registry.get("bob") is not bob
