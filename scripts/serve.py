"""
Run the movie catalog API under uvicorn.

Usage:
    python -m scripts.serve

Host, port and log level come from MOVIE_API_HOST, MOVIE_API_PORT and
MOVIE_API_LOG_LEVEL (see src/config.py).
"""

import uvicorn  # ASGI server

from loguru import logger  # console logging

from api import create_app  # FastAPI app factory
from src.config import configure_logging, load_settings  # env-driven settings


def main():
	settings = load_settings()  # read environment once
	configure_logging(settings.log_level)  # single stderr sink

	logger.info("=" * 60)
	logger.info(f"Movie Catalog API on http://{settings.host}:{settings.port}")
	logger.info("=" * 60)

	# Build a fresh app; the catalog starts empty and is discarded on exit
	app = create_app(settings=settings)
	uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == '__main__':
	main()
