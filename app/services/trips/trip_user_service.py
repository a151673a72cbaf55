from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload
from fastapi import HTTPException, status
from app.core.logger import logger
from app.models.trips.trip_user import TripRole, TripUser
from app.schemas.trip.trip_user import TripUserOut, TripUserResponse
from app.services.trips.access_service import TripContext, get_membership


async def add_member(db: AsyncSession, trip_id: int, user_id: int, role: TripRole = TripRole.MEMBER) -> TripUser:
    """Stage a membership row unless one exists. The caller commits."""
    existing = await get_membership(db, trip_id, user_id)
    if existing is not None:
        return existing

    new_member = TripUser(trip_id=trip_id, user_id=user_id, role=role)
    db.add(new_member)
    await db.flush()
    return new_member


async def get_trip_members(db: AsyncSession, trip_id: int) -> TripUserResponse:
    result = await db.execute(
        select(TripUser)
        .options(selectinload(TripUser.user))
        .where(TripUser.trip_id == trip_id)
        .order_by(TripUser.joined_at, TripUser.id)
    )
    members = result.scalars().all()
    return TripUserResponse(
        members=[TripUserOut.model_validate(member) for member in members]
    )


async def _get_member_or_404(db: AsyncSession, trip_id: int, user_id: int) -> TripUser:
    result = await db.execute(
        select(TripUser)
        .options(selectinload(TripUser.user))
        .where(TripUser.trip_id == trip_id, TripUser.user_id == user_id)
    )
    member = result.scalar_one_or_none()
    if not member:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Member not found")
    return member


async def change_member_role(db: AsyncSession, ctx: TripContext, user_id: int, role: TripRole) -> TripUser:
    if user_id == ctx.trip.owner_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="The trip owner's role cannot be changed")

    member = await _get_member_or_404(db, ctx.trip.id, user_id)
    member.role = role
    await db.commit()

    logger.info(f"User {user_id} is now {role.value} on trip {ctx.trip.id}")
    return member


async def remove_member(db: AsyncSession, ctx: TripContext, user_id: int) -> dict:
    trip = ctx.trip

    # owners remove anyone, everyone else can only leave
    if not ctx.is_owner and user_id != ctx.user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to remove this member")

    if user_id == trip.owner_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="The trip owner cannot leave the trip")

    member = await _get_member_or_404(db, trip.id, user_id)
    await db.delete(member)
    await db.commit()

    logger.info(f"User {user_id} removed from trip {trip.id} by user {ctx.user.id}")
    return {"success": True}
