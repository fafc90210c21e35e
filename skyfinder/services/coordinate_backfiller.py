from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from skyfinder.services.geocoding_service import GeocodingService, GeocodingServiceError, Location

logger = logging.getLogger(__name__)


class CoordinateBackfiller:
    def __init__(self, geocoding_service: GeocodingService, *, max_workers: int = 4):
        self.geocoding_service = geocoding_service
        self.max_workers = max_workers

    def backfill(self, locations: list[Location]) -> list[Location]:
        filled = list(locations)
        pending = [index for index, location in enumerate(filled) if not location.has_coordinates]
        if not pending:
            return filled

        targets = [filled[index] for index in pending]
        if self.max_workers <= 1 or len(targets) == 1:
            resolved = [self._lookup(location) for location in targets]
        else:
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(targets))) as executor:
                resolved = list(executor.map(self._lookup, targets))

        for index, location in zip(pending, resolved):
            filled[index] = location
        return filled

    def _lookup(self, location: Location) -> Location:
        query = f"{location.name}, {location.country_code}"
        try:
            matches = self.geocoding_service.search(query, limit=1)
        except GeocodingServiceError as exc:
            logger.warning("Error fetching coordinates for %s: %s", location.name, exc)
            return location

        if not matches:
            logger.warning("No coordinates found for %s", query)
            return location

        first = matches[0]
        return location.with_coordinates(first.latitude, first.longitude)
