"""Main entry point for the Synca transit API server."""

import logging
import sys

import uvicorn
from pydantic import ValidationError

from synca_transit.adapters.config import AppConfig
from synca_transit.adapters.web import create_app

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)


def load_config() -> AppConfig:
    """Load configuration from the environment and the optional TOML file."""
    try:
        config = AppConfig()
        config.load_toml()
    except (ValidationError, ValueError, FileNotFoundError) as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)
    return config


def run() -> None:
    """Serve the transit API with uvicorn."""
    config = load_config()
    logging.getLogger().setLevel(config.log_level)

    if not config.odpt_api_key:
        logger.warning("ODPT_API_KEY is not set; station railway lookup will fail")

    logger.info(f"Starting transit API on {config.host}:{config.port}")
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    run()
