from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from app.core.database import get_db
from app.dependencies.trip_access import require_trip_access
from app.schemas.stay.stay import StayCreate, StayUpdate, StayResponse
from app.services.trips.access_service import TripAccess, TripContext
from app.services.stays import stay_service

router = APIRouter(prefix="/trips/{trip_id}/stays", tags=["Stays"])

@router.get("", response_model=List[StayResponse])
async def list_stays_route(
    ctx: TripContext = Depends(require_trip_access(TripAccess.READ)),
    db: AsyncSession = Depends(get_db)
):
    return await stay_service.list_stays(db, ctx.trip.id)

@router.post("", response_model=StayResponse, status_code=status.HTTP_201_CREATED)
async def create_stay_route(
    stay: StayCreate,
    ctx: TripContext = Depends(require_trip_access(TripAccess.EDIT)),
    db: AsyncSession = Depends(get_db)
):
    return await stay_service.create_stay(db, ctx.trip.id, stay)

@router.get("/{stay_id}", response_model=StayResponse)
async def get_stay_route(
    stay_id: int,
    ctx: TripContext = Depends(require_trip_access(TripAccess.READ)),
    db: AsyncSession = Depends(get_db)
):
    return await stay_service.get_stay(db, ctx.trip.id, stay_id)

@router.put("/{stay_id}", response_model=StayResponse)
async def update_stay_route(
    stay_id: int,
    stay: StayUpdate,
    ctx: TripContext = Depends(require_trip_access(TripAccess.EDIT)),
    db: AsyncSession = Depends(get_db)
):
    return await stay_service.update_stay(db, ctx.trip.id, stay_id, stay)

@router.delete("/{stay_id}")
async def delete_stay_route(
    stay_id: int,
    ctx: TripContext = Depends(require_trip_access(TripAccess.EDIT)),
    db: AsyncSession = Depends(get_db)
):
    return await stay_service.delete_stay(db, ctx.trip.id, stay_id)
