"""
Build and persist the chart data files.

This script:
1) Loads movies from MOVIE_DATA_PATH (default data/movies.csv)
2) Filters them to films released 2000-2009 with budget and revenue figures
3) Builds the bar, scatter and line chart aggregates
4) Writes bar.json, scatter.json and line.json to EXPORT_DIR (default exports/)

Usage:
    poetry run python -m scripts.export_chart_data

A static front end can draw straight from these files.
"""

import json  # write the payloads
import time  # measure step timings
from pathlib import Path  # filesystem-safe paths

from loguru import logger  # console logging

from src.config import configure_logging, settings  # environment-driven settings
from src.data_loader import DataLoader, MalformedRowPolicy  # data ingestion
from src.pipeline import ChartPipeline  # filter + aggregate
from src.serialization import bar_to_json, line_to_json, scatter_to_json  # JSON-ready payloads


def write_json(path: Path, payload) -> None:
	"""Write one payload as strict JSON (no NaN literals)."""
	with open(path, 'w', encoding='utf-8') as f:
		json.dump(payload, f, indent=2, allow_nan=False)


def export_charts(location: str, export_dir: Path, policy: MalformedRowPolicy, scatter_limit: int) -> dict:
	"""Run the whole pipeline and write one file per chart. Returns the written paths."""
	export_dir.mkdir(parents=True, exist_ok=True)  # ensure exists

	# 1) Load data
	logger.info("[1/3] Loading movies...")
	t0 = time.time()  # start timer
	loader = DataLoader(policy=policy)  # loader instance
	movies = loader.load_movies(location, timeout=settings.request_timeout_seconds)  # read dataset
	logger.info(f"[OK] Loaded {len(movies)} movies in {time.time() - t0:.2f}s")  # confirm count
	year_range = loader.get_year_range(movies)
	logger.info(f"[OK] {len(loader.get_all_genres(movies))} genres, release years {year_range}")

	# 2) Filter and aggregate
	logger.info("[2/3] Building chart data...")
	pipeline = ChartPipeline(movies)  # filter once
	charts = pipeline.all_charts(scatter_limit=scatter_limit)

	# 3) Save
	logger.info(f"[3/3] Writing chart data to {export_dir}...")
	paths = {
		'bar': export_dir / 'bar.json',
		'scatter': export_dir / 'scatter.json',
		'line': export_dir / 'line.json',
	}
	write_json(paths['bar'], bar_to_json(charts['bar']))
	write_json(paths['scatter'], scatter_to_json(charts['scatter']))
	write_json(paths['line'], line_to_json(charts['line']))
	logger.info("[OK] Saved.")  # done
	return paths


def main():
	configure_logging(settings.log_level)

	# Headline banner for visibility in console
	logger.info("=" * 60)
	logger.info("Export Chart Data")
	logger.info("=" * 60)

	export_charts(
		settings.movie_data_path,
		settings.export_dir,
		MalformedRowPolicy(settings.malformed_row_policy),
		settings.scatter_limit,
	)

	logger.info("=" * 60)


if __name__ == '__main__':
	main()  # invoke exporter
