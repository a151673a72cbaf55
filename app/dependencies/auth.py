from typing import Optional
from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from app.models.user.user import User
from app.core.database import get_db
from app.core.config import settings
from app.core.logger import logger
from app.core.security import SessionToken, verify_session_token

# Bearer header is optional, the session cookie is the browser path
security = HTTPBearer(auto_error=False)

credentials_exception = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Not authenticated",
    headers={"WWW-Authenticate": "Bearer"},
)

def get_session_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> SessionToken:
    # the header wins when it verifies, otherwise the cookie gets a chance
    candidates = [
        credentials.credentials if credentials else None,
        request.cookies.get(settings.SESSION_COOKIE_NAME),
    ]
    for raw_token in candidates:
        if not raw_token:
            continue
        result = verify_session_token(raw_token)
        if isinstance(result, SessionToken):
            return result
        logger.info(f"Rejected session token: {result.reason}")
    raise credentials_exception

async def get_current_user(
    session: SessionToken = Depends(get_session_token),
    db: AsyncSession = Depends(get_db)
) -> User:
    user = await db.get(User, session.user_id)
    if user is None:
        raise credentials_exception
    return user
