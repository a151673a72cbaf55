from pydantic import BaseModel, Field, model_validator
from typing import List, Optional
from datetime import date, datetime, time

class ContactIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    phone: str = Field(..., min_length=1, max_length=50)

class ContactOut(BaseModel):
    id: int
    name: str
    phone: str

    class Config:
        from_attributes = True

class StayBase(BaseModel):
    location: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    arrival_date: date
    departure_date: date
    arrival_time: Optional[time] = None
    departure_time: Optional[time] = None
    arrival_confirmed: bool = False
    departure_confirmed: bool = False
    notes: Optional[str] = None
    arrival_notes: Optional[str] = None
    departure_notes: Optional[str] = None

class StayCreate(StayBase):
    """Payload for creating a stay, and for replacing one on update.

    ``contacts`` is the complete contact list; on update it replaces whatever
    the stay had before.
    """
    contacts: List[ContactIn] = []

    @model_validator(mode="after")
    def check_dates(self):
        if self.departure_date <= self.arrival_date:
            raise ValueError("departure_date must be after arrival_date")
        return self

class StayUpdate(StayCreate):
    pass

class StayResponse(StayBase):
    id: int
    trip_id: int
    contacts: List[ContactOut] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
