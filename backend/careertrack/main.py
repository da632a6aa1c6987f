"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware

from careertrack import __version__
from careertrack.config import get_settings
from careertrack.errors import register_exception_handlers
from careertrack.models.base import engine, Base, is_in_memory
from careertrack.api import router as api_router
from careertrack.services.file_storage import ensure_upload_dir

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    logger.info("Starting %s (%s)...", settings.app_name, settings.environment)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    if is_in_memory(settings.database_url):
        logger.info("Using in-memory storage; data is lost on restart")
    else:
        logger.info("Using database at %s", engine.url.render_as_string(hide_password=True))
    ensure_upload_dir()
    yield
    logger.info("Shutting down...")
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    description="Job search tracker with resume analysis",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(GZipMiddleware, minimum_size=500)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(api_router)


@app.get("/health")
async def health_check():
    return {"status": "healthy", "app": settings.app_name}
