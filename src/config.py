"""
Configuration loader.
Reads settings from the environment (and a .env file if present).
"""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

load_dotenv()


@dataclass
class Settings:
	"""Central configuration driven by environment variables."""

	movie_data_path: str = os.getenv("MOVIE_DATA_PATH", "data/movies.csv")  # file path or http(s) URL
	malformed_row_policy: str = os.getenv("MALFORMED_ROW_POLICY", "abort")  # "abort" or "drop"
	scatter_limit: int = int(os.getenv("SCATTER_LIMIT", "100"))
	request_timeout_seconds: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "15"))
	log_level: str = os.getenv("LOG_LEVEL", "INFO")
	export_dir: Path = field(default_factory=lambda: Path(os.getenv("EXPORT_DIR", "./exports")))


def configure_logging(level: str) -> None:
	"""Send loguru output to stderr at the given level."""
	logger.remove()  # drop the default handler so the level applies
	logger.add(sys.stderr, level=level.upper())


settings = Settings()
