from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError
from fastapi import HTTPException, status, Request, Response
from authlib.integrations.starlette_client import OAuthError
from app.core.config import settings
from app.core.logger import logger
from app.core.security import create_session_token
from app.models.user.user import User
from app.services.trips.invitation_service import link_pending_invitations
from app.utils.Oauth.googleauth import oauth


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_TOKEN_EXPIRE_DAYS * 24 * 3600,
        domain=settings.COOKIE_DOMAIN,
        path="/",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax"
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        domain=settings.COOKIE_DOMAIN,  # must match set_session_cookie
        path="/",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax"
    )


async def upsert_oauth_user(db: AsyncSession, email: str, name: str = None, image: str = None) -> User:
    email = email.lower()
    result = await db.execute(select(User).where(User.email == email))
    user = result.scalar_one_or_none()

    if user is None:
        user = User(email=email, name=name, image=image)
        db.add(user)
        await db.flush()
        await link_pending_invitations(db, user)
        logger.info(f"New user {user.id} signed up")
    else:
        user.name = name or user.name
        user.image = image or user.image

    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to store user {email}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to sign in")
    return user


async def handle_google_callback(request: Request, db: AsyncSession) -> str:
    """Finish the Google OAuth dance and return a fresh session token."""
    try:
        token = await oauth.google.authorize_access_token(request)
    except OAuthError as e:
        logger.warning(f"Google sign-in failed: {e.error}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Google sign-in failed")

    claims = token.get("userinfo") or await oauth.google.userinfo(token=token)
    email = claims.get("email")
    if not email:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email not found in Google user info")

    user = await upsert_oauth_user(db, email, claims.get("name"), claims.get("picture"))
    return create_session_token(user.id, user.email)
