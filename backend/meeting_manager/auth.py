"""Session-token identity for the meeting API.

A single shared password (``MM_AUTH_PASSWORD``) unlocks the API. Logging in
issues a random token persisted in the ``authsession`` table; callers present
it as a bearer token or through the ``mm_session`` cookie. Without a
configured password the API runs open and ``require_user`` lets everything
through.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional
import hashlib
import hmac
import logging
import secrets

from fastapi import Depends, HTTPException, Request
from sqlmodel import Session

from meeting_manager.config import Settings
from meeting_manager.deps import get_session, get_settings
from meeting_manager.models.auth_session import AuthSession
from meeting_manager.models.base import to_utc, utcnow
from meeting_manager.repositories.store import store_errors

logger = logging.getLogger("meeting_manager.auth")

SESSION_COOKIE = "mm_session"


@dataclass(frozen=True)
class UserIdentity:
    email: str


def hash_password(password: str, secret: str) -> str:
    return hashlib.sha256(f"{secret}{password}".encode()).hexdigest()


def check_password(password: str, settings: Settings) -> bool:
    if not settings.auth_password:
        return False
    expected = hash_password(settings.auth_password, settings.auth_secret)
    return hmac.compare_digest(hash_password(password, settings.auth_secret), expected)


def create_session(session: Session, email: str, user_agent: str = "") -> str:
    token = secrets.token_urlsafe(32)
    with store_errors(session, "opening session"):
        session.add(AuthSession(token=token, email=email, user_agent=user_agent))
        session.commit()
    logger.info("Session opened for %s", email)
    return token


def destroy_session(session: Session, token: str) -> None:
    with store_errors(session, "closing session"):
        row = session.get(AuthSession, token)
        if row is not None:
            session.delete(row)
            session.commit()


def resolve_session(session: Session, token: str, ttl_hours: int, now: Optional[datetime] = None) -> Optional[UserIdentity]:
    if not token:
        return None
    with store_errors(session, "resolving session"):
        row = session.get(AuthSession, token)
    if row is None:
        return None
    now = to_utc(now or utcnow())
    if now > to_utc(row.created_at) + timedelta(hours=ttl_hours):
        destroy_session(session, token)
        return None
    return UserIdentity(email=row.email)


def token_from_request(request: Request) -> str:
    header = request.headers.get("Authorization", "")
    if header.lower().startswith("bearer "):
        return header[7:].strip()
    return request.cookies.get(SESSION_COOKIE, "")


def current_user(
    request: Request,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> Optional[UserIdentity]:
    return resolve_session(session, token_from_request(request), settings.session_ttl_hours)


def require_user(
    user: Optional[UserIdentity] = Depends(current_user),
    settings: Settings = Depends(get_settings),
) -> Optional[UserIdentity]:
    if not settings.auth_password:
        return None
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user
