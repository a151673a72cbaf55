from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.config import settings
from app.core.database import get_db
from app.dependencies.auth import get_current_user
from app.models.user.user import User
from app.schemas.user.user import UserOut
from app.services.auth import auth as auth_service
from app.utils.Oauth.googleauth import oauth

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.get("/google/login")
async def google_login(request: Request):
    redirect_uri = request.url_for("google_callback")
    return await oauth.google.authorize_redirect(request, redirect_uri)


@router.get("/google/callback", name="google_callback")
async def google_callback(
    request: Request,
    db: AsyncSession = Depends(get_db)
):
    session_token = await auth_service.handle_google_callback(request, db)

    redirect_response = RedirectResponse(f"{settings.FRONTEND_BASE_URL}/trips")
    auth_service.set_session_cookie(redirect_response, session_token)
    return redirect_response


@router.post("/signout")
async def signout(response: Response):
    auth_service.clear_session_cookie(response)
    return {"ok": True, "message": "Signed out"}


@router.get("/session", response_model=UserOut)
async def get_session_user(current_user: User = Depends(get_current_user)):
    return current_user
