from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from skyfinder.services.geocoding_service import GeocodingService, GeocodingServiceError, Location
from skyfinder.services.query_planner import SearchStrategy
from skyfinder.utils.fallback_cities import match_fallback_cities

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100


@dataclass(slots=True)
class StrategyOutcome:
    strategy: SearchStrategy
    ok: bool
    locations: list[Location] = field(default_factory=list)


class ResultAggregator:
    def __init__(
        self,
        geocoding_service: GeocodingService,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        max_workers: int = 3,
    ):
        self.geocoding_service = geocoding_service
        self.page_size = page_size
        self.max_workers = max_workers

    def aggregate(self, query: str, strategies: list[SearchStrategy]) -> list[Location]:
        outcomes = self._run_strategies(strategies)

        merged: list[Location] = []
        seen: set[tuple[str, str]] = set()
        # Outcomes arrive in strategy order, so earlier strategies win on identity clashes.
        for outcome in outcomes:
            if not outcome.ok:
                continue
            for location in outcome.locations:
                if location.identity in seen:
                    continue
                seen.add(location.identity)
                merged.append(location)

        if not merged:
            merged = match_fallback_cities(query)
            if merged:
                logger.info("No network results for %r, using %d fallback cities", query, len(merged))

        logger.info("Found %d cities in total after all search strategies", len(merged))
        return merged

    def _run_strategies(self, strategies: list[SearchStrategy]) -> list[StrategyOutcome]:
        if self.max_workers <= 1 or len(strategies) <= 1:
            return [self._run_strategy(strategy) for strategy in strategies]
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(strategies))) as executor:
            # map() yields in submission order regardless of completion order.
            return list(executor.map(self._run_strategy, strategies))

    def _run_strategy(self, strategy: SearchStrategy) -> StrategyOutcome:
        logger.debug("Running %s strategy query=%r", strategy.kind, strategy.query)
        try:
            locations = self.geocoding_service.search(strategy.query, limit=self.page_size)
        except GeocodingServiceError as exc:
            logger.warning("Search strategy %s failed for query=%r: %s", strategy.kind, strategy.query, exc)
            return StrategyOutcome(strategy=strategy, ok=False)
        return StrategyOutcome(strategy=strategy, ok=True, locations=locations)
