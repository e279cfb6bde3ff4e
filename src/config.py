"""
Runtime configuration for the Movie Catalog API.
Settings come from environment variables; logging is configured through loguru.
"""

import os  # environment-based settings
import sys  # stderr sink for loguru
from dataclasses import dataclass  # immutable settings container

from loguru import logger  # console logger

# Environment variable names
ENV_HOST = "MOVIE_API_HOST"
ENV_PORT = "MOVIE_API_PORT"
ENV_LOG_LEVEL = "MOVIE_API_LOG_LEVEL"
ENV_TOP_RATED_LIMIT = "MOVIE_API_TOP_RATED_LIMIT"


@dataclass(frozen=True)
class Settings:
	host: str = "127.0.0.1"  # interface uvicorn binds to
	port: int = 8000  # TCP port uvicorn listens on
	log_level: str = "INFO"  # loguru level for the stderr sink
	top_rated_limit: int = 5  # default size of the top-rated view


def _int_env(name: str, default: int) -> int:
	raw = os.getenv(name)
	if raw is None or raw.strip() == "":
		return default
	try:
		return int(raw)
	except ValueError:
		raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_settings() -> Settings:
	"""Build Settings from the environment, falling back to defaults."""
	settings = Settings(
		host=os.getenv(ENV_HOST, Settings.host),
		port=_int_env(ENV_PORT, Settings.port),
		log_level=os.getenv(ENV_LOG_LEVEL, Settings.log_level).upper(),
		top_rated_limit=_int_env(ENV_TOP_RATED_LIMIT, Settings.top_rated_limit),
	)
	if settings.top_rated_limit < 1:
		raise ValueError(f"{ENV_TOP_RATED_LIMIT} must be at least 1, got {settings.top_rated_limit}")
	return settings


def configure_logging(level: str = "INFO") -> None:
	"""Replace loguru's default sink with a single stderr sink at `level`."""
	logger.remove()
	logger.add(sys.stderr, level=level)
