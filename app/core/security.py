from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Union
from jose import ExpiredSignatureError, JWTError, jwt
from app.core.config import settings
import uuid

SESSION_TOKEN_TYPE = "session"


@dataclass(frozen=True)
class SessionToken:
    user_id: int
    email: Optional[str]
    jti: str
    expires_at: datetime


@dataclass(frozen=True)
class SessionError:
    reason: str


SessionResult = Union[SessionToken, SessionError]


def create_session_token(user_id: int, email: Optional[str] = None, expires_delta: timedelta = None) -> str:
    expire = datetime.utcnow() + (expires_delta or timedelta(days=settings.SESSION_TOKEN_EXPIRE_DAYS))
    payload = {
        "sub": str(user_id),
        "email": email,
        "exp": expire,
        "jti": str(uuid.uuid4()),
        "type": SESSION_TOKEN_TYPE,
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def verify_session_token(raw_token: Optional[str]) -> SessionResult:
    """Decode a raw session token taken from a cookie or Authorization header.

    Never raises: every failure comes back as a :class:`SessionError` so the
    caller decides how to respond.
    """
    if not raw_token:
        return SessionError("missing token")

    try:
        payload = jwt.decode(
            raw_token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM]
        )
    except ExpiredSignatureError:
        return SessionError("token expired")
    except JWTError:
        return SessionError("invalid token")

    if payload.get("type") != SESSION_TOKEN_TYPE:
        return SessionError("wrong token type")

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        return SessionError("invalid subject")

    # sessions always carry an expiry
    if payload.get("exp") is None:
        return SessionError("missing expiry")

    return SessionToken(
        user_id=user_id,
        email=payload.get("email"),
        jti=payload.get("jti") or "",
        expires_at=datetime.utcfromtimestamp(payload["exp"]),
    )
