from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import logging
from logging.handlers import RotatingFileHandler

from planner.config import get_settings
from planner.models.base import init_db
from planner.repositories.base import RecordNotFound
from planner.api.actions import router as actions_router
from planner.api.calendar import router as calendar_router
from planner.api.dashboard import router as dashboard_router
from planner.api.decisions import router as decisions_router
from planner.api.journal import router as journal_router
from planner.api.knowledge import router as knowledge_router
from planner.api.meetings import router as meetings_router
from planner.api.settings import router as settings_router
from planner.api.tags import grids_router, router as tags_router
from planner.api.time import router as time_router


settings = get_settings()
logger = logging.getLogger("planner")


def _configure_logging() -> None:
    # Minimal structured logging to local file
    log_file = settings.logs_dir / "backend.log"
    root = logging.getLogger()
    if not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        handler = RotatingFileHandler(str(log_file), maxBytes=5_000_000, backupCount=2)
        handler.setFormatter(logging.Formatter(fmt="%(asctime)s %(levelname)s %(name)s %(message)s"))
        root.addHandler(handler)
    root.setLevel(logging.INFO)


def create_app() -> FastAPI:
    app = FastAPI(title="Personal Planner Backend", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    def _startup() -> None:
        settings.ensure_dirs()
        try:
            _configure_logging()
        except OSError:
            # keep serving without a log file (read-only profile dir etc.)
            logger.warning("File logging unavailable", exc_info=True)
        init_db()

    @app.get("/healthz")
    def healthz() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(meetings_router)
    app.include_router(actions_router)
    app.include_router(decisions_router)
    app.include_router(journal_router)
    app.include_router(knowledge_router)
    app.include_router(tags_router)
    app.include_router(grids_router)
    app.include_router(time_router)
    app.include_router(calendar_router)
    app.include_router(dashboard_router)
    app.include_router(settings_router)

    @app.exception_handler(RecordNotFound)
    async def _not_found_handler(request: Request, exc: RecordNotFound):  # type: ignore[override]
        return JSONResponse(status_code=404, content={"error": str(exc)})

    @app.exception_handler(OverflowError)
    async def _date_range_handler(request: Request, exc: OverflowError):  # type: ignore[override]
        # calendar arithmetic walked past date.min / date.max
        logger.info("Date out of range on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=422, content={"error": "date out of range"})

    @app.exception_handler(IntegrityError)
    async def _conflict_handler(request: Request, exc: IntegrityError):  # type: ignore[override]
        # constraint details stay in the log, not in the response
        logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
        return JSONResponse(status_code=409, content={"error": "request failed"})

    @app.exception_handler(SQLAlchemyError)
    async def _store_error_handler(request: Request, exc: SQLAlchemyError):  # type: ignore[override]
        logger.error("Store error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"error": "request failed"})

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):  # type: ignore[override]
        logger.exception("Unhandled exception")
        return JSONResponse(status_code=500, content={"error": str(exc)})

    return app


app = create_app()


if __name__ == "__main__":
    import argparse
    import uvicorn

    parser = argparse.ArgumentParser(description="Personal Planner Backend Server")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload (dev only)")

    args = parser.parse_args()

    uvicorn.run(
        "planner.main:app" if args.reload else app,
        host=args.host,
        port=args.port,
        reload=args.reload,
    )
