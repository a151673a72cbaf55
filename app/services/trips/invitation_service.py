from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy import and_, func, update
from fastapi import HTTPException, status
from datetime import datetime
from app.core.logger import logger
from app.models.trips.trip_invitation import TripInvitation, InvitationStatus
from app.models.trips.trip_model import Trip
from app.models.trips.trip_user import TripUser
from app.models.user.user import User
from app.schemas.trip.invitation import InvitationAcceptResponse, TripInvitationCreate
from app.schemas.trip.invitation import TripInvitationResponse
from app.schemas.trip.trip_schema import TripResponse
from app.services.trips.trip_user_service import add_member


async def _find_user_by_email(db: AsyncSession, email: str):
    result = await db.execute(select(User).where(func.lower(User.email) == email))
    return result.scalar_one_or_none()


async def create_trip_invitation(
        db: AsyncSession,
        trip: Trip,
        sender: User,
        invite_data: TripInvitationCreate
) -> TripInvitation:
    email = invite_data.email.lower()

    # only one pending invitation per email and trip
    existing_invite = await db.execute(
        select(TripInvitation).where(
            and_(
                TripInvitation.trip_id == trip.id,
                TripInvitation.email == email,
                TripInvitation.status == InvitationStatus.pending
            )
        )
    )
    if existing_invite.scalar_one_or_none():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invitation already sent")

    target_user = await _find_user_by_email(db, email)
    if target_user is not None:
        already_member = await db.execute(
            select(TripUser).where(TripUser.trip_id == trip.id, TripUser.user_id == target_user.id)
        )
        if already_member.scalar_one_or_none():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User is already a member of this trip")

    invitation = TripInvitation(
        email=email,
        role=invite_data.role,
        status=InvitationStatus.pending,
        trip_id=trip.id,
        sender_id=sender.id,
        invitee_id=target_user.id if target_user else None
    )
    db.add(invitation)
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to create invitation on trip {trip.id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to send invitation")

    logger.info(f"Invitation {invitation.id} sent for trip {trip.id} by user {sender.id}")
    return invitation


async def get_pending_invitations(db: AsyncSession, current_user: User) -> list[TripInvitation]:
    result = await db.execute(
        select(TripInvitation)
        .options(selectinload(TripInvitation.trip), selectinload(TripInvitation.sender))
        .where(
            TripInvitation.email == current_user.email.lower(),
            TripInvitation.status == InvitationStatus.pending
        )
        .order_by(TripInvitation.created_at.desc(), TripInvitation.id.desc())
    )
    return list(result.scalars().all())


async def respond_to_invitation(
        db: AsyncSession,
        invitation_id: int,
        current_user: User,
        new_status: str
):
    """Accept or decline a pending invitation.

    Accepting returns the invitation together with the trip and stages a
    membership row if the user does not have one yet; both are written in a
    single commit. Declining returns the invitation alone.
    """
    result = await db.execute(
        select(TripInvitation)
        .options(selectinload(TripInvitation.trip))
        .where(TripInvitation.id == invitation_id)
    )
    invitation = result.scalar_one_or_none()

    if not invitation:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invitation not found")

    if invitation.email != current_user.email.lower():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="This invitation is not for your email")

    if invitation.status != InvitationStatus.pending:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invitation has already been {invitation.status.value}"
        )

    invitation.status = InvitationStatus(new_status)
    invitation.invitee_id = current_user.id
    invitation.responded_at = datetime.utcnow()

    try:
        if invitation.status == InvitationStatus.accepted:
            await add_member(db, invitation.trip_id, current_user.id, invitation.role)
        await db.commit()
    except IntegrityError:
        # a concurrent response already created the membership
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invitation has already been processed")
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to process invitation {invitation_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to process invitation")

    logger.info(f"Invitation {invitation_id} {invitation.status.value} by user {current_user.id}")

    invitation_out = TripInvitationResponse.model_validate(invitation)
    if invitation.status == InvitationStatus.declined:
        return invitation_out
    return InvitationAcceptResponse(
        invitation=invitation_out,
        trip=TripResponse.model_validate(invitation.trip)
    )


async def link_pending_invitations(db: AsyncSession, user: User) -> None:
    """Attach invitations sent to ``user.email`` before the user existed. The caller commits."""
    await db.execute(
        update(TripInvitation)
        .where(
            TripInvitation.email == user.email.lower(),
            TripInvitation.invitee_id.is_(None)
        )
        .values(invitee_id=user.id)
    )
