from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies.auth import get_current_user
from app.core.database import get_db
from app.models.user.user import User
from app.schemas.user.user import UserUpdate, UserOut
from app.services.auth.profile_service import ProfileService

router = APIRouter(prefix="/users", tags=["Profile"])


@router.get("/me", response_model=UserOut)
async def get_my_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.patch("/me", response_model=UserOut)
async def update_my_profile(
    data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await ProfileService.update_user_profile(current_user, data, db)
