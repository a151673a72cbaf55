"""
Driving distance between two free-text addresses.

Backed by the Google Distance Matrix API:

  GET https://maps.googleapis.com/maps/api/distancematrix/json
      ?origins=...&destinations=...&key=...

  {
    "status": "OK",
    "rows": [{"elements": [{
        "status": "OK",
        "distance": {"text": "504 km", "value": 504123},
        "duration": {"text": "5 hours 2 mins", "value": 18120}
    }]}]
  }

An element status other than OK (ZERO_RESULTS, NOT_FOUND) is a real answer,
"no drivable route", and comes back with ``route_found=False``. Everything
that prevents getting an answer at all (no key configured, network errors,
non-2xx responses, a request-level status other than OK) falls back to a
deterministic mock so the itinerary timeline still renders.
"""

import hashlib
from typing import Optional

import httpx
from pydantic import ValidationError

from app.core.logger import logger
from app.schemas.distance.distance import DistanceResult

DISTANCE_MATRIX_URL = "https://maps.googleapis.com/maps/api/distancematrix/json"

# Mock distances span 15..600 km driven at an average of 80 km/h
_MOCK_MIN_KM = 15
_MOCK_KM_SPREAD = 586
_MOCK_AVERAGE_SPEED_KMH = 80


def format_duration(seconds: int) -> str:
    """Render seconds the way the Distance Matrix API does, e.g. ``2 hours 5 mins``."""
    minutes = max(1, round(seconds / 60))
    hours, minutes = divmod(minutes, 60)
    days, hours = divmod(hours, 24)

    parts = []
    if days:
        parts.append(f"{days} day{'s' if days != 1 else ''}")
    if hours:
        parts.append(f"{hours} hour{'s' if hours != 1 else ''}")
    if minutes and not days:
        parts.append(f"{minutes} min{'s' if minutes != 1 else ''}")
    return " ".join(parts)


def mock_distance(origin: str, destination: str) -> DistanceResult:
    key = f"{origin.strip().lower()}|{destination.strip().lower()}"
    seed = int(hashlib.sha256(key.encode("utf-8")).hexdigest()[:8], 16)

    km = _MOCK_MIN_KM + seed % _MOCK_KM_SPREAD
    seconds = int(km / _MOCK_AVERAGE_SPEED_KMH * 3600)
    return DistanceResult(
        distance=f"{km} km",
        duration=format_duration(seconds),
        duration_in_seconds=seconds,
        route_found=True,
    )


def _no_route(element_status: str) -> DistanceResult:
    return DistanceResult(
        distance="Unknown distance",
        duration="Unable to calculate",
        duration_in_seconds=0,
        route_found=False,
        error=f"No direct route available ({element_status})",
    )


class DistanceService:

    def __init__(
        self,
        api_key: Optional[str],
        timeout: float = 8.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    @property
    def uses_mock(self) -> bool:
        return not self._api_key

    async def get_distance(self, origin: str, destination: str) -> DistanceResult:
        if self.uses_mock:
            logger.info("GOOGLE_MAPS_API_KEY not set; serving mock distance")
            return mock_distance(origin, destination)

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.get(
                    DISTANCE_MATRIX_URL,
                    params={
                        "origins": origin,
                        "destinations": destination,
                        "key": self._api_key,
                    },
                )
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as e:
            logger.warning(f"Distance Matrix API returned {e.response.status_code}; serving mock distance")
            return mock_distance(origin, destination)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Distance Matrix API request failed ({e!r}); serving mock distance")
            return mock_distance(origin, destination)

        if data.get("status") != "OK":
            logger.warning(f"Distance Matrix API responded with status {data.get('status')}; serving mock distance")
            return mock_distance(origin, destination)

        try:
            element = data["rows"][0]["elements"][0]
        except (KeyError, IndexError, TypeError):
            logger.warning("Distance Matrix API response had no elements; serving mock distance")
            return mock_distance(origin, destination)

        element_status = element.get("status")
        if element_status != "OK":
            logger.info(f"No route found between locations: {element_status}")
            return _no_route(element_status)

        try:
            return DistanceResult(
                distance=element["distance"]["text"],
                duration=element["duration"]["text"],
                duration_in_seconds=element["duration"]["value"],
                route_found=True,
            )
        except (KeyError, TypeError, ValidationError):
            logger.warning("Distance Matrix API element was incomplete; serving mock distance")
            return mock_distance(origin, destination)
