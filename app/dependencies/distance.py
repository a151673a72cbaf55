from app.core.config import settings
from app.services.distance.distance_service import DistanceService

def get_distance_service() -> DistanceService:
    return DistanceService(
        api_key=settings.GOOGLE_MAPS_API_KEY,
        timeout=settings.DISTANCE_API_TIMEOUT_SECONDS
    )
