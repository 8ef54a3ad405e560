from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
from logging.handlers import RotatingFileHandler

from meeting_manager.config import Settings
from meeting_manager.errors import InternalError, MeetingManagerError
from meeting_manager.models.base import init_db
from meeting_manager.api.analytics import router as analytics_router
from meeting_manager.api.auth import router as auth_router
from meeting_manager.api.db_init import router as db_init_router
from meeting_manager.api.meetings import router as meetings_router


settings = Settings()
logger = logging.getLogger("meeting_manager")


def configure_logging(settings: Settings) -> None:
    settings.ensure_dirs()
    log_file = settings.resolved_logs_dir / "backend.log"
    root = logging.getLogger()
    if not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        handler = RotatingFileHandler(str(log_file), maxBytes=5_000_000, backupCount=2)
        handler.setFormatter(logging.Formatter(fmt="%(asctime)s %(levelname)s %(name)s %(message)s"))
        root.addHandler(handler)
    root.setLevel(settings.log_level.upper())


def create_app() -> FastAPI:
    app = FastAPI(title="Meeting Manager Backend", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    def _startup() -> None:
        try:
            configure_logging(settings)
        except OSError:
            logger.warning("File logging unavailable; continuing with default handlers")
        init_db()

    @app.get("/healthz")
    def healthz() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(meetings_router)
    app.include_router(analytics_router)
    app.include_router(auth_router)
    app.include_router(db_init_router)

    @app.exception_handler(MeetingManagerError)
    async def _meeting_error_handler(request: Request, exc: MeetingManagerError):  # type: ignore[override]
        if isinstance(exc, InternalError) or exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):  # type: ignore[override]
        logger.exception("Unhandled exception")
        return JSONResponse(status_code=500, content=InternalError(str(exc)).to_body())

    return app


app = create_app()


if __name__ == "__main__":
    import argparse
    import uvicorn

    parser = argparse.ArgumentParser(description="Meeting Manager Backend Server")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload (dev only)")

    args = parser.parse_args()

    uvicorn.run(
        "meeting_manager.main:app" if args.reload else app,
        host=args.host,
        port=args.port,
        reload=args.reload,
    )
