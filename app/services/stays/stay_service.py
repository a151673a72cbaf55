from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload
from fastapi import HTTPException, status
from app.core.logger import logger
from app.models.stays.contact import Contact
from app.models.stays.stay_model import Stay
from app.schemas.stay.stay import StayCreate, StayUpdate
from typing import List


def _stay_fields(stay_data: StayCreate) -> dict:
    return stay_data.model_dump(exclude={"contacts"})


async def list_stays(db: AsyncSession, trip_id: int) -> List[Stay]:
    result = await db.execute(
        select(Stay)
        .options(selectinload(Stay.contacts))
        .where(Stay.trip_id == trip_id)
        .order_by(Stay.arrival_date, Stay.id)
    )
    return list(result.scalars().all())


async def get_stay(db: AsyncSession, trip_id: int, stay_id: int) -> Stay:
    result = await db.execute(
        select(Stay)
        .options(selectinload(Stay.contacts))
        .where(Stay.id == stay_id, Stay.trip_id == trip_id)
        .execution_options(populate_existing=True)
    )
    stay = result.scalar_one_or_none()

    if not stay:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Stay not found")
    return stay


async def create_stay(db: AsyncSession, trip_id: int, stay_data: StayCreate) -> Stay:
    new_stay = Stay(
        **_stay_fields(stay_data),
        trip_id=trip_id,
        contacts=[Contact(name=c.name, phone=c.phone) for c in stay_data.contacts]
    )
    db.add(new_stay)
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to create stay in trip {trip_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create stay")

    logger.info(f"Stay {new_stay.id} created in trip {trip_id}")
    return await get_stay(db, trip_id, new_stay.id)


async def update_stay(db: AsyncSession, trip_id: int, stay_id: int, stay_data: StayUpdate) -> Stay:
    stay = await get_stay(db, trip_id, stay_id)

    for key, value in _stay_fields(stay_data).items():
        setattr(stay, key, value)

    # old contacts are orphaned and deleted in the same commit
    stay.contacts = [Contact(name=c.name, phone=c.phone) for c in stay_data.contacts]

    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to update stay {stay_id} in trip {trip_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update stay")

    logger.info(f"Stay {stay_id} updated in trip {trip_id}")
    return await get_stay(db, trip_id, stay_id)


async def delete_stay(db: AsyncSession, trip_id: int, stay_id: int) -> dict:
    stay = await get_stay(db, trip_id, stay_id)

    try:
        await db.delete(stay)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to delete stay {stay_id} in trip {trip_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete stay")

    logger.info(f"Stay {stay_id} deleted from trip {trip_id}")
    return {"success": True}
