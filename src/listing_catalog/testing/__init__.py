"""Testing – in-memory doubles for the store and repository ports."""
from listing_catalog.testing.fakes import InMemoryListingRepository, InMemoryListingStore, matches

__all__ = ["InMemoryListingRepository", "InMemoryListingStore", "matches"]
