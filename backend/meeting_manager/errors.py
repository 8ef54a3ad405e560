"""Error taxonomy shared by the services and the HTTP layer."""

from __future__ import annotations


class MeetingManagerError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_body(self) -> dict[str, str]:
        return {"error": self.message}


class NotFoundError(MeetingManagerError):
    status_code = 404

    def __init__(self, message: str = "Meeting not found") -> None:
        super().__init__(message)


class ValidationFailed(MeetingManagerError):
    """Input rejected before any store mutation."""

    status_code = 422


class UpstreamError(MeetingManagerError):
    """Record store or identity provider failure; message passed through."""

    status_code = 502
    prefix = "Record store error"

    def to_body(self) -> dict[str, str]:
        return {"error": f"{self.prefix}: {self.message}"}


class InternalError(MeetingManagerError):
    status_code = 500

    def to_body(self) -> dict[str, str]:
        return {"error": "Internal server error", "detail": self.message}
