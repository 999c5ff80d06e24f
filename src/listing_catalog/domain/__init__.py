"""Domain – the Listing entity."""
from listing_catalog.domain.listing import Address, Listing, ListingDraft

__all__ = ["Address", "Listing", "ListingDraft"]
