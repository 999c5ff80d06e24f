"""
listing_catalog – Searchable, paginated listing catalog backed by MongoDB.

Import path convention::

    from listing_catalog.search import ListingSearchService, build_search_query
    from listing_catalog.kernel.errors import ValidationError
    from listing_catalog.adapters.mongodb import MongoListingStore
    from listing_catalog.api import create_app
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
