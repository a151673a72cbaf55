from pydantic import BaseModel
from typing import List, Literal, Optional
from app.schemas.stay.stay import StayResponse
from app.schemas.distance.distance import DistanceResult

class TimelineSegment(BaseModel):
    kind: Literal["gap", "travel"]
    origin_stay_id: int
    destination_stay_id: int
    gap_days: int
    distance: Optional[DistanceResult] = None
    directions_url: Optional[str] = None
    available_seconds: Optional[int] = None
    time_constraint_violated: bool = False

class TimelineResponse(BaseModel):
    trip_id: int
    stays: List[StayResponse]
    segments: List[TimelineSegment]
