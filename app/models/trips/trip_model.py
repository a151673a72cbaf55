from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime
from app.core.database import Base
from sqlalchemy.orm import relationship
from datetime import datetime

class Trip(Base):
    __tablename__ = "trips"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)

    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    owner = relationship("User", back_populates="owned_trips")

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    stays = relationship(
        "Stay",
        back_populates="trip",
        cascade="all, delete-orphan",
        order_by="Stay.arrival_date",
    )
    members = relationship("TripUser", back_populates="trip", cascade="all, delete-orphan")
    invitations = relationship("TripInvitation", back_populates="trip", cascade="all, delete-orphan")
