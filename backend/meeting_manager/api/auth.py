from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel
from sqlmodel import Session

from meeting_manager.auth import (
    SESSION_COOKIE,
    UserIdentity,
    check_password,
    create_session,
    current_user,
    destroy_session,
    token_from_request,
)
from meeting_manager.config import Settings
from meeting_manager.deps import get_session, get_settings


router = APIRouter(prefix="/auth", tags=["auth"])


class LoginRequest(BaseModel):
    email: str
    password: str


@router.post("/session")
def login(
    body: LoginRequest,
    request: Request,
    response: Response,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    if not check_password(body.password, settings):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    token = create_session(session, body.email, request.headers.get("user-agent", ""))
    response.set_cookie(
        SESSION_COOKIE,
        token,
        max_age=settings.session_ttl_hours * 3600,
        httponly=True,
        samesite="lax",
    )
    return {"token": token, "user": {"email": body.email}}


@router.delete("/session")
def logout(request: Request, response: Response, session: Session = Depends(get_session)) -> Dict[str, bool]:
    token = token_from_request(request)
    if token:
        destroy_session(session, token)
    response.delete_cookie(SESSION_COOKIE)
    return {"ok": True}


@router.get("/me")
def me(user: Optional[UserIdentity] = Depends(current_user)) -> Dict[str, str]:
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return {"email": user.email}
