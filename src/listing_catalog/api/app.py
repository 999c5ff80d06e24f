"""API – FastAPI application factory.

Run with::

    listing-catalog            # reads LISTINGS_* from the environment / .env
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import FastAPI
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from listing_catalog import __version__
from listing_catalog.adapters.mongodb import MongoListingStore
from listing_catalog.api.deps import ServiceContainer
from listing_catalog.api.errors import ExceptionMapper
from listing_catalog.api.routes import health_router, listings_router
from listing_catalog.config import Settings
from listing_catalog.kernel.errors import ConnectionError
from listing_catalog.observability.correlation import CorrelationIdMiddleware
from listing_catalog.observability.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def _mongo_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Own the motor client for the lifetime of the app.

    Skipped when a container was injected (tests, embedding).
    """
    if app.state.container is not None:
        yield
        return

    settings: Settings = app.state.settings
    client: Any = AsyncIOMotorClient(
        settings.mongo_uri,
        serverSelectionTimeoutMS=settings.server_selection_timeout_ms,
    )
    collection = client[settings.database][settings.collection]
    try:
        await MongoListingStore.create_indexes(collection)
    except PyMongoError as exc:
        client.close()
        logger.error("mongo.connect_failed", error=repr(exc))
        raise ConnectionError("mongodb", cause=exc) from exc

    logger.info("mongo.connected", database=settings.database, collection=settings.collection)
    app.state.container = ServiceContainer.from_collection(collection, settings)
    try:
        yield
    finally:
        app.state.container = None
        client.close()
        logger.info("mongo.closed")


def create_app(settings: Settings, container: ServiceContainer | None = None) -> FastAPI:
    """Create the FastAPI application.

    Parameters
    ----------
    settings:
        Populated :class:`~listing_catalog.config.Settings`.
    container:
        Pre-built collaborators.  When omitted, a motor client is opened
        on startup from *settings* and closed on shutdown.
    """
    app = FastAPI(
        title="Listing Catalog API",
        version=__version__,
        lifespan=_mongo_lifespan,
    )
    app.state.settings = settings
    app.state.container = container

    app.add_middleware(CorrelationIdMiddleware)
    ExceptionMapper().register(app)
    app.include_router(health_router)
    app.include_router(listings_router)
    return app


__all__ = ["create_app"]
