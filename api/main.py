"""
FastAPI Backend for Feature Photos.

Serves representative photos for map features resolved from Wikimedia,
Fody and Mapillary.
"""

import logging

from dotenv import load_dotenv

load_dotenv()

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import photos
from feature_photos.config import get_settings
from feature_photos.resolver import FeaturePhotoResolver
from feature_photos.utils.http import JsonFetcher

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting Feature Photos API...")

    # One fetch client and response cache for the whole process
    app.state.fetcher = JsonFetcher()
    app.state.resolver = FeaturePhotoResolver(fetcher=app.state.fetcher)

    yield

    logger.info("Shutting down Feature Photos API...")
    await app.state.fetcher.aclose()


app = FastAPI(
    title="Feature Photos API",
    description="Representative photos for OpenStreetMap features",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS - allow frontend to connect (configured via API_CORS_ORIGINS env var)
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.api.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
)

# Include routers
app.include_router(photos.router, prefix="/api/photos", tags=["photos"])


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "version": "1.0.0", "service": "Feature Photos API"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.main:app", host=settings.api.host, port=settings.api.port, reload=True)
