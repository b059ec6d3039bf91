#!/usr/bin/env python3
"""
Authsession - Development Entry Point

Serves the mock identity backend so the session client can be exercised
locally:

    python -m authsession.main

Host and port come from AUTH_BACKEND_URL (default http://localhost:3000).
"""

import logging
from urllib.parse import urlparse

import uvicorn

from authsession.config import EnvConfigProvider
from authsession.logging_config import configure_logging, get_logging_config
from authsession.modules.backend import create_mock_backend_app

config = EnvConfigProvider().get_client_config()

configure_logging(config.log_level)
logger = logging.getLogger(__name__)

app = create_mock_backend_app()


def main() -> None:
    backend = urlparse(config.backend_url)
    host = backend.hostname or "localhost"
    port = backend.port or 3000

    logger.info(f"Serving mock identity backend on {host}:{port}")
    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=config.log_level.lower(),
        log_config=get_logging_config(config.log_level),
    )


if __name__ == "__main__":
    main()
