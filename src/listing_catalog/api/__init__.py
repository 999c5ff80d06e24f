"""API – FastAPI surface: search, by-id CRUD, health."""
from listing_catalog.api.app import create_app
from listing_catalog.api.deps import ServiceContainer
from listing_catalog.api.errors import ExceptionMapper

__all__ = ["ExceptionMapper", "ServiceContainer", "create_app"]
