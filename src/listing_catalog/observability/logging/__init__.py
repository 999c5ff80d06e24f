"""Observability – structured logging helpers."""
from listing_catalog.observability.logging.factory import LoggingFactory, get_logger

__all__ = ["LoggingFactory", "get_logger"]
