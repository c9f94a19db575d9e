"""
# `app/main.py` - Application entry point

## Overview
Builds the FastAPI app: CORS, error handlers, routers, and the optional
background recycle bin sweep.

## Routers
**Public:**
- `GET /` (health text)
- `POST /feedback`

**Admin** (every route guarded by `get_current_admin`):
- `/activities/*`, `/activity`
- `/test-firestore`
- `/users/*`
- `/analytics/summary`, `/leaderboard`, `/display-name-changes`
- `/feedback` (list, status, resolve, recycled, restore)

## Background scheduler
- **Library:** APScheduler (`AsyncIOScheduler`)
- **Job:** `run_scheduled_sweep` (purges expired recycle bin entries)
- **Period:** `RECYCLE_SWEEP_INTERVAL_MINUTES`; `0` disables the job and leaves
  the purge to `GET /feedback/recycled` alone.
"""
import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from admin_backend.app.config import Settings, get_settings
from admin_backend.app.core.errors import register_error_handlers
from admin_backend.app.core.log import configure_logging
from admin_backend.app.routers import activities, analytics, diagnostics, feedback, users
from admin_backend.app.services.recycle_bin import run_scheduled_sweep

logger = logging.getLogger("admin.main")

SWEEP_JOB_ID = "recycle-bin-sweep"


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Admin Dashboard API",
        description="Admin backend over Firestore and Firebase Auth: activities, progress, analytics and feedback.",
        version="1.0.0",
        redirect_slashes=False,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    def root():
        return "Admin Dashboard Backend Running"

    # Include public routers
    app.include_router(feedback.router)

    # Include admin routers
    app.include_router(activities.router)
    app.include_router(diagnostics.router)
    app.include_router(users.router)
    app.include_router(analytics.router)
    app.include_router(feedback.admin_router)

    scheduler = AsyncIOScheduler()
    app.state.scheduler = scheduler

    @app.on_event("startup")
    async def _startup_scheduler():
        interval = settings.recycle_sweep_interval_minutes
        if interval <= 0:
            return
        scheduler.add_job(
            run_scheduled_sweep,
            "interval",
            minutes=interval,
            id=SWEEP_JOB_ID,
            replace_existing=True,
        )
        if not scheduler.running:
            scheduler.start()
        logger.info("Recycle bin sweep scheduled every %d min", interval)

    @app.on_event("shutdown")
    async def _shutdown_scheduler():
        if scheduler.running:
            scheduler.shutdown(wait=False)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    logger.info("Server running on port %d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


# Run the app directly with uvicorn (for development)
if __name__ == "__main__":
    run()
