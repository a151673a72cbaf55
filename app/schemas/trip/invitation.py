from pydantic import BaseModel, EmailStr
from typing import Literal, Optional
from datetime import datetime
from app.models.trips.trip_invitation import InvitationStatus
from app.models.trips.trip_user import TripRole
from app.schemas.trip.trip_schema import TripResponse

# When the trip owner sends an invitation
class TripInvitationCreate(BaseModel):
    email: EmailStr
    role: TripRole = TripRole.MEMBER

class TripInvitationResponse(BaseModel):
    id: int
    email: EmailStr
    status: InvitationStatus
    role: TripRole
    trip_id: int
    sender_id: int
    invitee_id: Optional[int] = None
    created_at: datetime
    responded_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class InvitationSender(BaseModel):
    name: Optional[str] = None
    email: EmailStr
    image: Optional[str] = None

    class Config:
        from_attributes = True

class PendingInvitationOut(TripInvitationResponse):
    trip: TripResponse
    sender: InvitationSender

class InvitationRespond(BaseModel):
    status: Literal["accepted", "declined"]

class InvitationAcceptResponse(BaseModel):
    invitation: TripInvitationResponse
    trip: TripResponse
