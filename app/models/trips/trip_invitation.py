from sqlalchemy import Integer, Column, String, ForeignKey, Enum, DateTime
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.models.trips.trip_user import TripRole, triprole_enum
from datetime import datetime
import enum

class InvitationStatus(enum.Enum):
    pending = "pending"
    accepted = "accepted"
    declined = "declined"

class TripInvitation(Base):
    __tablename__ = "trip_invitations"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, index=True, nullable=False)
    status = Column(Enum(InvitationStatus), default=InvitationStatus.pending, nullable=False)
    role = Column(triprole_enum, nullable=False, default=TripRole.MEMBER)

    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    sender_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    invitee_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    responded_at = Column(DateTime, nullable=True)

    trip = relationship("Trip", back_populates="invitations")
    sender = relationship("User", back_populates="sent_invitations", foreign_keys=[sender_id])
    invitee = relationship("User", foreign_keys=[invitee_id])
