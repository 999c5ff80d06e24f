"""Process entry point: ``python -m listing_catalog`` / ``listing-catalog``."""
from __future__ import annotations

import uvicorn

from listing_catalog.api import create_app
from listing_catalog.config import DotenvSettingsLoader, Settings
from listing_catalog.observability.logging import LoggingFactory


def main() -> None:
    settings = DotenvSettingsLoader().load(Settings)
    LoggingFactory.configure(settings.log_level, json=settings.json_logs)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
