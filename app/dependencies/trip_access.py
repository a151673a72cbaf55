from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.dependencies.auth import get_current_user
from app.models.user.user import User
from app.services.trips.access_service import TripAccess, TripContext, authorize_trip_access

def require_trip_access(access: TripAccess):
    """Dependency factory guarding routes that carry a ``trip_id`` path parameter."""
    async def access_checker(
        trip_id: int,
        db: AsyncSession = Depends(get_db),
        current_user: User = Depends(get_current_user)
    ) -> TripContext:
        return await authorize_trip_access(db, trip_id, current_user, access)
    return access_checker
