"""
Container entrypoint for the ASSERO valuation engine.

Binds to 0.0.0.0:$PORT.
"""

import logging
import os

import uvicorn

from utils.config import Config
from utils.logging import configure_logging

if __name__ == "__main__":
    config = Config.load()
    configure_logging(config.log_level, json_output=True)

    port = int(os.getenv("PORT", "8000"))
    logging.getLogger(__name__).info("Starting ASSERO valuation engine on port %d", port)

    # Import app here so logging is configured first
    from web.app import app

    uvicorn.run(app, host="0.0.0.0", port=port, log_config=None)
