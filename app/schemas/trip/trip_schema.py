from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from app.models.trips.trip_user import TripRole
from app.schemas.user.user import UserOut
from app.schemas.trip.trip_user import TripUserOut
from app.schemas.stay.stay import StayResponse

class TripBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None

class TripCreate(TripBase):
    pass

class TripUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None

class TripResponse(TripBase):
    id: int
    owner_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

# One row of the caller's trip list
class TripSummary(TripResponse):
    role: TripRole
    is_owner: bool

class TripDetail(TripResponse):
    owner: UserOut
    members: List[TripUserOut] = []
    stays: List[StayResponse] = []
