from __future__ import annotations

import datetime as dt
from typing import Any, Dict

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from meeting_manager.auth import require_user
from meeting_manager.deps import get_now, get_session
from meeting_manager.services.analytics_service import build_analytics


router = APIRouter(prefix="/analytics", tags=["analytics"], dependencies=[Depends(require_user)])


@router.get("")
def read_analytics(
    time_range: int = Query(default=30, ge=1, le=365, description="Window length in days"),
    session: Session = Depends(get_session),
    now: dt.datetime = Depends(get_now),
) -> Dict[str, Any]:
    summary = build_analytics(session, time_range, now)
    return {"analytics": summary.dict(), "generated_at": now.isoformat()}
