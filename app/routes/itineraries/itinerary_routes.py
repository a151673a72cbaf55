from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.config import settings
from app.core.database import get_db
from app.dependencies.distance import get_distance_service
from app.dependencies.trip_access import require_trip_access
from app.schemas.itineraries.timeline import TimelineResponse
from app.schemas.stay.stay import StayResponse
from app.services.distance.distance_service import DistanceService
from app.services.itineraries.timeline_service import compose_timeline
from app.services.stays.stay_service import list_stays
from app.services.trips.access_service import TripAccess, TripContext

router = APIRouter(prefix="/trips/{trip_id}/timeline", tags=["Itinerary"])

@router.get("", response_model=TimelineResponse)
async def get_trip_timeline(
    ctx: TripContext = Depends(require_trip_access(TripAccess.READ)),
    db: AsyncSession = Depends(get_db),
    distance_service: DistanceService = Depends(get_distance_service)
):
    stays = await list_stays(db, ctx.trip.id)
    ordered, segments = await compose_timeline(
        stays,
        distance_service.get_distance,
        gap_threshold_days=settings.GAP_THRESHOLD_DAYS
    )
    return TimelineResponse(
        trip_id=ctx.trip.id,
        stays=[StayResponse.model_validate(stay) for stay in ordered],
        segments=segments
    )
