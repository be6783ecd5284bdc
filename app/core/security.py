# employee-directory-api/app/core/security.py
# Handles session cookie signing and the role-checking guards every resolver calls.
from fastapi import Response
from jose import JWTError, jwt
from datetime import datetime, timezone

from app.core.config import settings
from app.core.exceptions import UnauthenticatedError, ForbiddenError
from app.schemas.user import SessionUser

# --- Session cookie ---
# The cookie only carries the opaque session token, signed so a forged value
# is rejected before it reaches the store.
def sign_session_token(token: str, expires_at: datetime) -> str:
    claims = {"sid": token, "exp": expires_at.replace(tzinfo=timezone.utc)}
    return jwt.encode(claims, settings.SESSION_SECRET_KEY, algorithm=settings.SESSION_ALGORITHM)

def read_session_token(cookie_value: str | None) -> str | None:
    if not cookie_value:
        return None
    try:
        payload = jwt.decode(cookie_value, settings.SESSION_SECRET_KEY, algorithms=[settings.SESSION_ALGORITHM])
    except JWTError:
        return None
    return payload.get("sid")

def set_session_cookie(response: Response, token: str, expires_at: datetime) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=sign_session_token(token, expires_at),
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        max_age=settings.SESSION_EXPIRE_MINUTES * 60,
        path="/",
    )

def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(settings.SESSION_COOKIE_NAME, path="/")

# --- Role-Checking Guards ---
def require_authenticated(context) -> SessionUser:
    if context.user is None:
        raise UnauthenticatedError()
    return context.user

def require_admin(context) -> SessionUser:
    user = require_authenticated(context)
    if not user.is_admin:
        raise ForbiddenError()
    return user
