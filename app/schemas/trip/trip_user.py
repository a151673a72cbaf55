from pydantic import BaseModel
from datetime import datetime
from typing import List
from app.models.trips.trip_user import TripRole
from app.schemas.user.user import UserOut

class TripUserOut(BaseModel):
    trip_id: int
    user_id: int
    role: TripRole
    joined_at: datetime
    user: UserOut

    model_config = {
        "from_attributes": True
    }

class TripUserResponse(BaseModel):
    members: List[TripUserOut]

class TripUserRoleUpdate(BaseModel):
    role: TripRole
