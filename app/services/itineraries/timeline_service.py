from datetime import datetime
from operator import attrgetter
from typing import Awaitable, Callable, List, Optional, Sequence
from urllib.parse import urlencode
from app.core.logger import logger
from app.models.stays.stay_model import Stay
from app.schemas.distance.distance import DistanceResult
from app.schemas.itineraries.timeline import TimelineSegment

DistanceLookup = Callable[[str, str], Awaitable[DistanceResult]]

DEFAULT_GAP_THRESHOLD_DAYS = 2


def sort_stays(stays: Sequence[Stay]) -> List[Stay]:
    # sorted() is stable, stays arriving the same day keep their input order
    return sorted(stays, key=attrgetter("arrival_date"))


def gap_in_days(origin: Stay, destination: Stay) -> int:
    return (destination.arrival_date - origin.departure_date).days


def available_travel_seconds(origin: Stay, destination: Stay) -> Optional[int]:
    """Wall-clock seconds between leaving ``origin`` and arriving at ``destination``.

    None unless both the departure and the arrival time are known.
    """
    if origin.departure_time is None or destination.arrival_time is None:
        return None
    leave = datetime.combine(origin.departure_date, origin.departure_time)
    arrive = datetime.combine(destination.arrival_date, destination.arrival_time)
    return int((arrive - leave).total_seconds())


def is_time_constraint_violated(duration_in_seconds: int, available_seconds: Optional[int]) -> bool:
    if available_seconds is None:
        return False
    return duration_in_seconds > available_seconds


def directions_url(origin_address: str, destination_address: str) -> str:
    query = urlencode({
        "api": 1,
        "origin": origin_address,
        "destination": destination_address,
        "travelmode": "driving",
    })
    return f"https://www.google.com/maps/dir/?{query}"


async def build_segment(
        origin: Stay,
        destination: Stay,
        lookup: DistanceLookup,
        gap_threshold_days: int = DEFAULT_GAP_THRESHOLD_DAYS
) -> TimelineSegment:
    gap_days = gap_in_days(origin, destination)

    if gap_days > gap_threshold_days:
        return TimelineSegment(
            kind="gap",
            origin_stay_id=origin.id,
            destination_stay_id=destination.id,
            gap_days=gap_days,
        )

    distance = await lookup(origin.address, destination.address)
    available = available_travel_seconds(origin, destination)
    return TimelineSegment(
        kind="travel",
        origin_stay_id=origin.id,
        destination_stay_id=destination.id,
        gap_days=gap_days,
        distance=distance,
        directions_url=directions_url(origin.address, destination.address),
        available_seconds=available,
        time_constraint_violated=is_time_constraint_violated(distance.duration_in_seconds, available),
    )


async def compose_timeline(
        stays: Sequence[Stay],
        lookup: DistanceLookup,
        gap_threshold_days: int = DEFAULT_GAP_THRESHOLD_DAYS
) -> tuple[List[Stay], List[TimelineSegment]]:
    """Order a trip's stays and describe what lies between each consecutive pair.

    Pairs more than ``gap_threshold_days`` apart become gap segments and are
    never looked up. Every other pair becomes a travel segment carrying the
    driving distance from ``lookup``.
    """
    ordered = sort_stays(stays)
    segments = []
    for origin, destination in zip(ordered, ordered[1:]):
        segments.append(await build_segment(origin, destination, lookup, gap_threshold_days))

    violations = sum(1 for s in segments if s.time_constraint_violated)
    if violations:
        logger.info(f"Timeline has {violations} legs exceeding their time window")
    return ordered, segments
