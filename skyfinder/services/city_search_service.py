from __future__ import annotations

import asyncio
import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Literal

from skyfinder.services.coordinate_backfiller import CoordinateBackfiller
from skyfinder.services.geocoding_service import (
    CredentialMissingError,
    GeocodingService,
    Location,
    ensure_api_key,
)
from skyfinder.services.query_planner import plan_strategies
from skyfinder.services.relevance_ranker import rank_locations
from skyfinder.services.result_aggregator import ResultAggregator
from skyfinder.utils.validators import normalize_query

logger = logging.getLogger(__name__)

SearchStatus = Literal["ok", "empty", "config_error"]


@dataclass(slots=True)
class CitySearchResult:
    query: str
    status: SearchStatus = "empty"
    locations: list[Location] = field(default_factory=list)
    error: str | None = None


class CitySearchService:
    def __init__(
        self,
        geocoding_service: GeocodingService,
        *,
        aggregator: ResultAggregator | None = None,
        backfiller: CoordinateBackfiller | None = None,
    ):
        self.geocoding_service = geocoding_service
        self.aggregator = aggregator or ResultAggregator(geocoding_service)
        self.backfiller = backfiller or CoordinateBackfiller(geocoding_service)

    def search(self, text: str) -> list[Location]:
        query = normalize_query(text)
        if query is None:
            return []

        ensure_api_key(self.geocoding_service.api_key)

        strategies = plan_strategies(query)
        merged = self.aggregator.aggregate(query, strategies)
        ranked = rank_locations(merged, query)
        results = self.backfiller.backfill(ranked)

        for index, location in enumerate(results[:5], start=1):
            logger.info("Result %d: %s", index, location.display_name)
        return results

    def run(self, text: str) -> CitySearchResult:
        result = CitySearchResult(query=text.strip())
        try:
            result.locations = self.search(text)
        except CredentialMissingError as exc:
            logger.error("City search aborted: %s", exc)
            result.status = "config_error"
            result.error = str(exc)
            return result

        result.status = "ok" if result.locations else "empty"
        return result

    async def run_async(self, text: str) -> CitySearchResult:
        return await asyncio.to_thread(self.run, text)


class SearchSession:
    """Holds the latest search results for one user.

    Every submit is tagged with a generation number. A search that finishes
    after a newer one was submitted (or after ``clear``) is dropped, so late
    responses never overwrite fresher results.
    """

    def __init__(self, search_service: CitySearchService):
        self.search_service = search_service
        self.results: list[Location] = []
        self.last_error: str | None = None
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    async def submit(self, text: str) -> CitySearchResult | None:
        self._generation += 1
        generation = self._generation
        self.results = []

        result = await self.search_service.run_async(text)
        if generation != self._generation:
            logger.debug("Discarding superseded search %r (generation %d)", text, generation)
            return None

        self.results = result.locations
        self.last_error = result.error
        return result

    def clear(self) -> None:
        self._generation += 1
        self.results = []
        self.last_error = None

    def pick(self, number: int) -> Location | None:
        """Return the 1-based ``number``-th result of the last accepted search."""
        if 1 <= number <= len(self.results):
            return self.results[number - 1]
        return None


class SearchSessionRegistry:
    """Per-user search sessions, evicting the least recently used past ``max_sessions``."""

    def __init__(self, search_service: CitySearchService, *, max_sessions: int = 1000):
        self.search_service = search_service
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, SearchSession] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, user_id: str) -> SearchSession:
        session = self._sessions.get(user_id)
        if session is None:
            session = SearchSession(self.search_service)
            self._sessions[user_id] = session
        self._sessions.move_to_end(user_id)
        while len(self._sessions) > self.max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            logger.debug("Evicted search session for user=%s", evicted)
        return session
