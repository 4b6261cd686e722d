"""
Aurora - calendar and wellness assistant
FastAPI Application Entry Point
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from aurora import __version__
from aurora.config import settings
from aurora.database import async_engine, Base
from aurora.errors import register_exception_handlers
from aurora.api import events, categories, suggestions, productivity, wellness

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    async with async_engine.begin() as conn:
        # Create tables if they don't exist (for development)
        # In production, use Alembic migrations
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Aurora API %s started", __version__)
    yield
    # Shutdown
    await async_engine.dispose()


app = FastAPI(
    title="Aurora API",
    description="Calendar, mood tracking and schedule suggestions",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(categories.router, prefix="/api/categories", tags=["Categories"])
app.include_router(suggestions.router, prefix="/api/schedule-suggestions", tags=["Schedule Suggestions"])
app.include_router(productivity.router, prefix="/api/productivity", tags=["Productivity"])
app.include_router(wellness.router, prefix="/api/wellness", tags=["Wellness"])


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "healthy", "service": "Aurora API", "version": __version__}


@app.get("/health")
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "database": "connected",
        "anthropic_configured": bool(settings.anthropic_api_key),
        "anonymous_access": settings.allow_anonymous_access,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "aurora.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
