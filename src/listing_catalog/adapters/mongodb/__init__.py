"""MongoDB adapter – search store and CRUD repository.

Requires **motor**::

    pip install listing-catalog
"""

from listing_catalog.adapters.mongodb.repository import MongoListingRepository
from listing_catalog.adapters.mongodb.store import MongoListingStore

__all__ = [
    "MongoListingRepository",
    "MongoListingStore",
]
