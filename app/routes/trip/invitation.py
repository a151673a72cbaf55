from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Union
from app.schemas.trip.invitation import (
    InvitationAcceptResponse,
    InvitationRespond,
    PendingInvitationOut,
    TripInvitationCreate,
    TripInvitationResponse,
)
from app.services.trips.invitation_service import (
    create_trip_invitation,
    get_pending_invitations,
    respond_to_invitation,
)
from app.dependencies.auth import get_current_user
from app.dependencies.trip_access import require_trip_access
from app.services.trips.access_service import TripAccess, TripContext
from app.models.user.user import User
from app.core.database import get_db

router = APIRouter(tags=["Trip Invitations"])

@router.post(
    "/trips/{trip_id}/invite",
    response_model=TripInvitationResponse,
    status_code=status.HTTP_201_CREATED
)
async def send_trip_invitation(
    invite_data: TripInvitationCreate,
    ctx: TripContext = Depends(require_trip_access(TripAccess.OWNER)),
    db: AsyncSession = Depends(get_db)
):
    return await create_trip_invitation(db, ctx.trip, ctx.user, invite_data)

@router.get("/invitations", response_model=list[PendingInvitationOut])
async def view_my_invitations(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await get_pending_invitations(db, current_user)

@router.put("/invitations/{invitation_id}", response_model=Union[InvitationAcceptResponse, TripInvitationResponse])
async def respond_invitation(
    invitation_id: int,
    payload: InvitationRespond,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await respond_to_invitation(db, invitation_id, current_user, payload.status)
