from sqlalchemy import Column, String, Integer, DateTime
from app.core.database import Base
from sqlalchemy.orm import relationship
from datetime import datetime

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=True)
    email = Column(String, unique=True, index=True, nullable=False)
    image = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    owned_trips = relationship("Trip", back_populates="owner")

    trips = relationship("TripUser", back_populates="user", cascade="all, delete")

    sent_invitations = relationship(
        "TripInvitation",
        back_populates="sender",
        foreign_keys="TripInvitation.sender_id",
    )
