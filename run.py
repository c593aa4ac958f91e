#!/usr/bin/env python3
"""
Run the ASSERO valuation engine web server locally.
"""

import logging

import uvicorn

from utils.config import Config
from utils.logging import configure_logging


def main():
    """Start the web server."""
    config = Config.load()
    configure_logging(config.log_level, json_output=config.log_json)

    logger = logging.getLogger(__name__)
    logger.info("Starting ASSERO valuation engine on http://%s:%s", config.host, config.port)
    logger.info("Press Ctrl+C to stop")

    uvicorn.run(
        "web.app:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_config=None,
    )


if __name__ == "__main__":
    main()
