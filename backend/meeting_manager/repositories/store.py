from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from meeting_manager.errors import UpstreamError

logger = logging.getLogger("meeting_manager.store")


@contextmanager
def store_errors(session: Session, action: str) -> Iterator[None]:
    """Roll back and re-raise record store failures as ``UpstreamError``."""
    try:
        yield
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Store failure while %s: %s", action, exc)
        raise UpstreamError(str(exc)) from exc
