"""API – service container and FastAPI dependencies."""
from __future__ import annotations

import dataclasses
from typing import Annotated, Any, Awaitable, Callable

from fastapi import Depends, Request

from listing_catalog.adapters.mongodb import MongoListingRepository, MongoListingStore
from listing_catalog.config import Settings
from listing_catalog.search import ListingSearchService, PaginatedQueryExecutor

ReadinessCheck = Callable[[], Awaitable[bool]]


@dataclasses.dataclass
class ServiceContainer:
    """Collaborators shared by the request handlers of one app instance."""

    search: ListingSearchService
    repository: Any
    readiness_checks: list[ReadinessCheck] = dataclasses.field(default_factory=list)

    @classmethod
    def from_collection(cls, collection: Any, settings: Settings) -> "ServiceContainer":
        """Wire the MongoDB adapters around a motor collection."""
        store = MongoListingStore(collection)
        executor = PaginatedQueryExecutor(store, max_time_ms=settings.query_timeout_ms)
        return cls(
            search=ListingSearchService(executor, settings.builder_options()),
            repository=MongoListingRepository(collection),
            readiness_checks=[store.ping],
        )


def get_container(request: Request) -> ServiceContainer:
    container: ServiceContainer | None = request.app.state.container
    if container is None:
        raise RuntimeError("Service container is not initialised")
    return container


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


ContainerDep = Annotated[ServiceContainer, Depends(get_container)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


__all__ = [
    "ContainerDep",
    "ReadinessCheck",
    "ServiceContainer",
    "SettingsDep",
    "get_container",
    "get_settings",
]
