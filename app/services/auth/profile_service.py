from sqlalchemy.ext.asyncio import AsyncSession
from app.models.user.user import User
from app.schemas.user.user import UserUpdate
from fastapi import HTTPException, status

class ProfileService:

    @staticmethod
    async def update_user_profile(user: User, update_data: UserUpdate, db: AsyncSession) -> User:
        update_fields = update_data.model_dump(exclude_unset=True, exclude_none=True)

        if not update_fields:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update.")

        for key, value in update_fields.items():
            setattr(user, key, value)

        await db.commit()
        await db.refresh(user)
        return user
