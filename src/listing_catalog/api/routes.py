"""API – listing routes."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Request, status
from fastapi.responses import JSONResponse

from listing_catalog.api.deps import ContainerDep, SettingsDep
from listing_catalog.domain import ListingDraft

listings_router = APIRouter(prefix="/listings", tags=["listings"])
health_router = APIRouter(prefix="/health", tags=["ops"])


@listings_router.get("")
async def search_listings(request: Request, container: ContainerDep) -> dict[str, Any]:
    """Filter, sort and paginate listings.

    Query parameters: ``q``, ``city``, ``category`` (``cuisine``),
    ``minRating``, ``maxPrice``, ``tags``, ``sortBy``, ``order``, ``page``,
    ``limit``.
    """
    envelope = await container.search.search(dict(request.query_params))
    return envelope.to_dict()


@listings_router.get("/{listing_id}")
async def get_listing(listing_id: str, container: ContainerDep) -> dict[str, Any]:
    listing = await container.repository.get_or_raise(listing_id)
    return listing.to_dict()


@listings_router.post("", status_code=status.HTTP_201_CREATED)
async def create_listing(
    container: ContainerDep,
    payload: dict[str, Any] = Body(...),
) -> dict[str, Any]:
    listing = await container.repository.create(ListingDraft.from_payload(payload))
    return listing.to_dict()


@listings_router.put("/{listing_id}")
async def update_listing(
    listing_id: str,
    container: ContainerDep,
    payload: dict[str, Any] = Body(...),
) -> dict[str, Any]:
    listing = await container.repository.update(listing_id, ListingDraft.from_payload(payload))
    return listing.to_dict()


@listings_router.delete("/{listing_id}")
async def delete_listing(listing_id: str, container: ContainerDep) -> dict[str, bool]:
    await container.repository.delete(listing_id)
    return {"ok": True}


@health_router.get("/live")
async def liveness(settings: SettingsDep) -> dict[str, str]:
    """Liveness probe – always 200 OK when the process is up."""
    return {"status": "ok", "env": settings.env}


@health_router.get("/ready")
async def readiness(container: ContainerDep) -> JSONResponse:
    """Readiness probe – runs every registered readiness check."""
    results: dict[str, bool] = {}
    for check in container.readiness_checks:
        name = getattr(check, "__name__", repr(check))
        try:
            ok = await check()
        except Exception:  # noqa: BLE001
            ok = False
        results[name] = ok

    all_ok = all(results.values())
    return JSONResponse(
        status_code=status.HTTP_200_OK if all_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "ok" if all_ok else "degraded", "checks": results},
    )


__all__ = ["health_router", "listings_router"]
