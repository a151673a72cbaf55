from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.schemas.trip.trip_schema import TripCreate, TripUpdate, TripResponse, TripSummary, TripDetail
from app.models.user.user import User
from app.core.database import get_db
from app.dependencies.auth import get_current_user
from app.dependencies.trip_access import require_trip_access
from app.services.trips.access_service import TripAccess, TripContext
from app.services.trips.trip_service import TripService

router = APIRouter(prefix="/trips", tags=['Trips'])

def get_trip_service() -> TripService:
    return TripService()

@router.get("", response_model=list[TripSummary])
async def get_my_trips(
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    trip_service: TripService = Depends(get_trip_service)
):
    return await trip_service.get_user_trips(session, current_user.id)

@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip_route(
    trip: TripCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    trip_service: TripService = Depends(get_trip_service)
):
    return await trip_service.create_trip(db, trip, current_user)

@router.get("/{trip_id}", response_model=TripDetail)
async def get_trip(
    ctx: TripContext = Depends(require_trip_access(TripAccess.READ)),
    session: AsyncSession = Depends(get_db),
    trip_service: TripService = Depends(get_trip_service)
):
    return await trip_service.get_trip_detail(session, ctx.trip.id)

@router.put("/{trip_id}", response_model=TripResponse)
async def update_trip_route(
    trip_update: TripUpdate,
    ctx: TripContext = Depends(require_trip_access(TripAccess.OWNER)),
    session: AsyncSession = Depends(get_db),
    trip_service: TripService = Depends(get_trip_service)
):
    return await trip_service.update_trip(session, ctx.trip, trip_update)

@router.delete("/{trip_id}")
async def delete_trip_route(
    ctx: TripContext = Depends(require_trip_access(TripAccess.OWNER)),
    session: AsyncSession = Depends(get_db),
    trip_service: TripService = Depends(get_trip_service)
):
    return await trip_service.delete_trip(session, ctx.trip)
