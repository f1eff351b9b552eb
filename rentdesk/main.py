"""
RentDesk - rental property management
FastAPI Application Entry Point
"""
import asyncio
import contextlib
import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from rentdesk.config import settings
from rentdesk.database import async_engine, AsyncSessionLocal, Base
from rentdesk.logging_setup import setup_logging
from rentdesk.api import units, expenses, income, documents, tasks, cron, notifications, push
from rentdesk.services.notifications import push_service
from rentdesk.services.scheduler import run_reminder_loop

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging(settings.log_level, settings.log_file)

    async with async_engine.begin() as conn:
        # Create tables if they don't exist (for development)
        # In production, use Alembic migrations
        await conn.run_sync(Base.metadata.create_all)

    if not push_service.is_configured:
        logger.warning("VAPID keys not set; push notifications are disabled")

    reminder_task = None
    if settings.reminder_interval_minutes:
        reminder_task = asyncio.create_task(
            run_reminder_loop(
                AsyncSessionLocal,
                push_service,
                interval_minutes=settings.reminder_interval_minutes,
            )
        )

    yield

    # Shutdown
    if reminder_task:
        reminder_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await reminder_task
        logger.info("Reminder loop stopped")

    await async_engine.dispose()


app = FastAPI(
    title="RentDesk API",
    description="Rental property management - units, ledger, documents, tasks and reminders",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# Include routers
app.include_router(units.router, prefix="/api/units", tags=["Units"])
app.include_router(expenses.router, prefix="/api/expenses", tags=["Expenses"])
app.include_router(income.router, prefix="/api/income", tags=["Income"])
app.include_router(documents.router, prefix="/api/documents", tags=["Documents"])
app.include_router(tasks.router, prefix="/api/tasks", tags=["Tasks"])
app.include_router(cron.router, prefix="/api/cron", tags=["Cron"])
app.include_router(notifications.router, prefix="/api/notifications", tags=["Notifications"])
app.include_router(push.router, prefix="/api/push", tags=["Push"])


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "healthy", "service": "RentDesk API", "version": "1.0.0"}


@app.get("/health")
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "database": "connected",
        "push_configured": push_service.is_configured,
        "reminder_loop": bool(settings.reminder_interval_minutes),
        "timezone": settings.timezone,
    }
