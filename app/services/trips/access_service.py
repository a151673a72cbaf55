from dataclasses import dataclass
import enum
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from app.core.logger import logger
from app.models.trips.trip_model import Trip
from app.models.trips.trip_user import TripRole, TripUser
from app.models.user.user import User


class TripAccess(enum.Enum):
    READ = "read"
    EDIT = "edit"    # stay changes, guests excluded
    OWNER = "owner"  # rename, delete, invitations, member roles


@dataclass
class TripContext:
    trip: Trip
    membership: TripUser
    user: User

    @property
    def is_owner(self) -> bool:
        return self.trip.owner_id == self.user.id


async def get_membership(db: AsyncSession, trip_id: int, user_id: int):
    result = await db.execute(
        select(TripUser).where(
            TripUser.trip_id == trip_id,
            TripUser.user_id == user_id
        )
    )
    return result.scalar_one_or_none()


async def authorize_trip_access(
        db: AsyncSession,
        trip_id: int,
        user: User,
        access: TripAccess
) -> TripContext:
    """Resolve the trip and the caller's membership, or raise.

    404 when the trip does not exist, 403 when the caller is not a member,
    is not the owner for owner-only operations, or is a guest attempting an
    edit.
    """
    trip = await db.get(Trip, trip_id)
    if trip is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trip not found")

    membership = await get_membership(db, trip_id, user.id)
    if membership is None:
        logger.warning(f"Access denied: user {user.id} is not a member of trip {trip_id}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You do not have access to this trip")

    if access == TripAccess.OWNER and trip.owner_id != user.id:
        logger.warning(f"Access denied: user {user.id} attempted an owner action on trip {trip_id}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the trip owner can perform this action"
        )

    if access == TripAccess.EDIT and membership.role == TripRole.GUEST:
        logger.warning(f"Access denied: guest {user.id} attempted to modify trip {trip_id}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Guests cannot modify this trip")

    return TripContext(trip=trip, membership=membership, user=user)
