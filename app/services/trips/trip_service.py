from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload
from fastapi import HTTPException, status
from app.core.logger import logger
from app.models.stays.stay_model import Stay
from app.models.trips.trip_model import Trip
from app.models.trips.trip_user import TripRole, TripUser
from app.models.user.user import User
from app.schemas.trip.trip_schema import TripCreate, TripSummary, TripUpdate
from typing import List


class TripService:

    async def create_trip(self, db: AsyncSession, trip_data: TripCreate, user: User) -> Trip:
        new_trip = Trip(**trip_data.model_dump(), owner_id=user.id)
        db.add(new_trip)
        try:
            await db.flush()

            # the owner always holds a membership row
            db.add(TripUser(user_id=user.id, trip_id=new_trip.id, role=TripRole.MEMBER))
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Failed to create trip for user {user.id}: {e}")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create trip")

        logger.info(f"Trip {new_trip.id} created by user {user.id}")
        return new_trip

    async def get_user_trips(self, db: AsyncSession, user_id: int) -> List[TripSummary]:
        result = await db.execute(
            select(Trip, TripUser.role)
            .join(TripUser, TripUser.trip_id == Trip.id)
            .where(TripUser.user_id == user_id)
            .order_by(Trip.created_at.desc(), Trip.id.desc())
        )
        rows = result.all()

        logger.info(f"Retrieved {len(rows)} trips for user {user_id}")
        return [
            TripSummary(
                id=row.Trip.id,
                name=row.Trip.name,
                description=row.Trip.description,
                owner_id=row.Trip.owner_id,
                created_at=row.Trip.created_at,
                updated_at=row.Trip.updated_at,
                role=row.role,
                is_owner=row.Trip.owner_id == user_id
            )
            for row in rows
        ]

    async def get_trip_detail(self, db: AsyncSession, trip_id: int) -> Trip:
        result = await db.execute(
            select(Trip)
            .options(
                selectinload(Trip.owner),
                selectinload(Trip.stays).selectinload(Stay.contacts),
                selectinload(Trip.members).selectinload(TripUser.user),
            )
            .where(Trip.id == trip_id)
            .execution_options(populate_existing=True)
        )
        trip = result.scalar_one_or_none()

        if not trip:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trip not found")
        return trip

    async def update_trip(self, db: AsyncSession, trip: Trip, trip_data: TripUpdate) -> Trip:
        update_data = trip_data.model_dump(exclude_unset=True)
        if update_data.get("name", "") is None:
            del update_data["name"]

        for key, value in update_data.items():
            setattr(trip, key, value)

        try:
            await db.commit()
            await db.refresh(trip)
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Failed to update trip {trip.id}: {e}")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update trip")

        logger.info(f"Trip {trip.id} updated")
        return trip

    async def delete_trip(self, db: AsyncSession, trip: Trip) -> dict:
        trip_id = trip.id
        try:
            # stays, contacts, memberships and invitations go with it
            await db.delete(trip)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Failed to delete trip {trip_id}: {e}")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete trip")

        logger.info(f"Trip {trip_id} deleted")
        return {"success": True}
