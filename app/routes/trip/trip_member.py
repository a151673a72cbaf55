from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.dependencies.trip_access import require_trip_access
from app.schemas.trip.trip_user import TripUserOut, TripUserResponse, TripUserRoleUpdate
from app.services.trips.access_service import TripAccess, TripContext
from app.services.trips.trip_user_service import get_trip_members, change_member_role, remove_member

router = APIRouter(prefix="/trips/{trip_id}/members", tags=["Trip Members"])

@router.get("", response_model=TripUserResponse)
async def list_trip_members(
    ctx: TripContext = Depends(require_trip_access(TripAccess.READ)),
    db: AsyncSession = Depends(get_db)
):
    return await get_trip_members(db, ctx.trip.id)

@router.put("/{user_id}", response_model=TripUserOut)
async def update_trip_member_role(
    user_id: int,
    payload: TripUserRoleUpdate,
    ctx: TripContext = Depends(require_trip_access(TripAccess.OWNER)),
    db: AsyncSession = Depends(get_db)
):
    return await change_member_role(db, ctx, user_id, payload.role)

@router.delete("/{user_id}")
async def delete_trip_member(
    user_id: int,
    ctx: TripContext = Depends(require_trip_access(TripAccess.READ)),
    db: AsyncSession = Depends(get_db)
):
    # owner removes anyone, members may only remove themselves
    return await remove_member(db, ctx, user_id)
