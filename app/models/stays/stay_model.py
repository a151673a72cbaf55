from sqlalchemy import Column, Integer, String, Text, Boolean, Date, Time, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from app.core.database import Base
from datetime import datetime

class Stay(Base):
    __tablename__ = "stays"

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)

    location = Column(String, nullable=False)
    address = Column(String, nullable=False)

    arrival_date = Column(Date, nullable=False)
    departure_date = Column(Date, nullable=False)
    arrival_time = Column(Time, nullable=True)
    departure_time = Column(Time, nullable=True)

    arrival_confirmed = Column(Boolean, default=False, nullable=False)
    departure_confirmed = Column(Boolean, default=False, nullable=False)

    notes = Column(Text, nullable=True)
    arrival_notes = Column(Text, nullable=True)
    departure_notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    trip = relationship("Trip", back_populates="stays")
    contacts = relationship(
        "Contact",
        back_populates="stay",
        cascade="all, delete-orphan",
        order_by="Contact.id",
    )

    __table_args__ = (
        Index("ix_stays_trip_id_arrival_date", "trip_id", "arrival_date"),
    )
