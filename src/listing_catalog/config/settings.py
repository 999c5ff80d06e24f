"""Config – Settings for the listing catalog service."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from listing_catalog.config.errors import InvalidSettingValueError
from listing_catalog.search.builder import BuilderOptions
from listing_catalog.search.predicates import TagMatchPolicy


@dataclasses.dataclass
class Settings:
    """12-factor settings, read from ``LISTINGS_*`` environment variables.

    Example::

        LISTINGS_MONGO_URI=mongodb://localhost:27017
        LISTINGS_TAG_MATCH_POLICY=all
    """

    _prefix: ClassVar[str] = "LISTINGS"

    mongo_uri: str
    database: str = "catalog"
    collection: str = "listings"
    env: str = "dev"
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    json_logs: bool = True
    server_selection_timeout_ms: int = 5000
    query_timeout_ms: int | None = None
    default_page_size: int = 10
    max_page_size: int = 100
    tag_match_policy: str = TagMatchPolicy.ANY.value
    case_sensitive_categories: bool = False

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        if not self.mongo_uri.strip():
            raise InvalidSettingValueError("mongo_uri", self.mongo_uri, "must not be blank")
        policies = {p.value for p in TagMatchPolicy}
        if self.tag_match_policy not in policies:
            raise InvalidSettingValueError(
                "tag_match_policy", self.tag_match_policy, f"expected one of {sorted(policies)}"
            )
        if self.max_page_size < 1:
            raise InvalidSettingValueError("max_page_size", self.max_page_size, "must be >= 1")
        if not (1 <= self.default_page_size <= self.max_page_size):
            raise InvalidSettingValueError(
                "default_page_size", self.default_page_size, "must be between 1 and max_page_size"
            )
        if self.server_selection_timeout_ms <= 0:
            raise InvalidSettingValueError(
                "server_selection_timeout_ms", self.server_selection_timeout_ms, "must be > 0"
            )
        if self.query_timeout_ms is not None and self.query_timeout_ms <= 0:
            raise InvalidSettingValueError("query_timeout_ms", self.query_timeout_ms, "must be > 0")

    def builder_options(self) -> BuilderOptions:
        return BuilderOptions(
            tag_policy=TagMatchPolicy(self.tag_match_policy),
            case_sensitive_categories=self.case_sensitive_categories,
            default_page_size=self.default_page_size,
            max_page_size=self.max_page_size,
        )


__all__ = ["Settings"]
