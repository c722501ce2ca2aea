from typing import Optional

from fastapi import Depends, Request, Response
from fastapi.security import APIKeyCookie, APIKeyHeader
from sqlalchemy.orm import Session

from daily_diet.api.deps import get_db
from daily_diet.core.config import Settings, get_settings
from daily_diet.core.errors import forbidden, unauthorized
from daily_diet.core.security import constant_time_equals
from daily_diet.models.user import User

SESSION_COOKIE_NAME = "sessionId"
SESSION_HEADER_NAME = "x-session-id"
API_KEY_HEADER_NAME = "x-api-key"

NOT_LOGGED_IN = "You must be logged in to access this resource"

# auto_error=False: the gate decides the status code and message itself
api_key_header = APIKeyHeader(name=API_KEY_HEADER_NAME, auto_error=False)
session_cookie = APIKeyCookie(name=SESSION_COOKIE_NAME, auto_error=False)


def require_api_key(
    api_key: Optional[str] = Depends(api_key_header),
    settings: Settings = Depends(get_settings),
) -> None:
    """Admin gate: x-api-key must equal the configured ADMIN_API_KEY."""
    if not settings.admin_api_key or not constant_time_equals(api_key, settings.admin_api_key):
        raise unauthorized("Invalid API Key")


def get_session_token(request: Request, cookie: Optional[str] = Depends(session_cookie)) -> Optional[str]:
    """Session token from the sessionId cookie, the x-session-id header, or a Bearer header."""
    if cookie:
        return cookie
    header = (request.headers.get(SESSION_HEADER_NAME) or "").strip()
    if header:
        return header
    auth = request.headers.get("authorization") or ""
    if auth.lower().startswith("bearer "):
        token = auth.split(" ", 1)[1].strip()
        return token or None
    return None


def current_user(
    token: Optional[str] = Depends(get_session_token),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the session token to a verified User.

    Missing token and unknown token both give the same 401 so callers cannot
    tell them apart. A known but unverified user gets 403.
    """
    if not token:
        raise unauthorized(NOT_LOGGED_IN)

    user = db.get(User, token)
    if not user:
        raise unauthorized(NOT_LOGGED_IN)
    if not user.email_verified:
        raise forbidden("You must activate your account to access this resource")
    return user


def set_session_cookie(response: Response, user: User, settings: Settings) -> str:
    """Issue the session token (the user's id) as the session cookie and return it."""
    session_id = str(user.id)
    response.set_cookie(
        SESSION_COOKIE_NAME,
        session_id,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        max_age=settings.session_max_age,
    )
    return session_id
