from fastapi import APIRouter, Depends, HTTPException, status
from typing import Optional
from app.dependencies.auth import get_current_user
from app.dependencies.distance import get_distance_service
from app.models.user.user import User
from app.schemas.distance.distance import DistanceResult
from app.services.distance.distance_service import DistanceService

router = APIRouter(prefix="/distance", tags=["Distance"])

@router.get("", response_model=DistanceResult, response_model_exclude_none=True)
async def get_distance(
    origin: Optional[str] = None,
    destination: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    distance_service: DistanceService = Depends(get_distance_service)
):
    if not origin or not destination:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Origin and destination parameters are required"
        )
    return await distance_service.get_distance(origin, destination)
