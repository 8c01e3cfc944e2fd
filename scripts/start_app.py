#!/usr/bin/env python3
"""Run the local discussion API for the renderer."""

import sys

import logfire
import uvicorn

from discuss.config import Settings
from discuss.util.error import ConfigurationError
from discuss.util.logging import setup_logging
from discuss.util.observability import configure_logfire


def check_settings(settings: Settings) -> None:
    """Refuse to start without an AniList token.

    The repository is only built on the first request, so a missing token
    would otherwise surface as a failed request instead of a failed start.
    """
    if not settings.anilist.token:
        raise ConfigurationError("AniList token not found. Set ANILIST__TOKEN.")


def main() -> int:
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    try:
        check_settings(settings)
        logfire.info(
            "Starting discussion API",
            base_url=settings.base_url,
            environment=settings.environment,
        )
        uvicorn.run(
            "discuss.interface.api.app:create_app",
            factory=True,
            host=settings.host,
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
    except Exception as e:
        logfire.error(
            "Discussion API failed to start",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise

    return 0


if __name__ == "__main__":
    sys.exit(main())
