"""Main FastAPI application for the ERP cache service."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from api.middleware import ResponseCacheMiddleware
from api.routes import router
from config import Settings
from services.cache import TTLCache


def create_app(cache: Optional[TTLCache] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the app around a cache instance; one is created from settings if not given."""
    settings = settings or Settings.from_env()
    if cache is None:
        cache = TTLCache(
            capacity=settings.cache_capacity,
            default_ttl=settings.cache_default_ttl,
            sweep_interval=settings.cache_sweep_interval,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        app.state.cache.close()

    app = FastAPI(
        title="ERP Cache Service API",
        description="Cached read API for the pharmaceutical ERP dashboard",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.cache = cache

    # Add CORS middleware - allow localhost dev servers and configured origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        ResponseCacheMiddleware,
        ttl_seconds=settings.response_cache_ttl,
        path_prefixes=settings.response_cache_paths,
    )

    # Include API routes
    app.include_router(router)

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {"message": "ERP Cache Service API is running"}

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=Settings.from_env().port, reload=True)
