"""
Chart pipeline module.
Filters a set of movies once and builds any of the chart aggregates from it.
"""

from typing import Dict, List, Optional

from loguru import logger  # simple structured logger

# Import project modules for data structures and components
from .models import BarDatum, LineChartData, MovieRecord  # core data classes
from .data_loader import DataLoader, MalformedRowPolicy  # raw rows -> typed records
from .filters import MovieFilter  # chart inclusion rules
from .aggregation import (
	SCATTER_LIMIT,
	prepare_bar_chart_data,
	prepare_line_chart_data,
	prepare_scatter_chart_data,
)


class ChartPipeline:
	"""
	High-level API: typed movies in, chart-ready aggregates out.
	The filtered set is computed once on construction and reused by every chart.
	"""

	def __init__(self, movies: List[MovieRecord], movie_filter: Optional[MovieFilter] = None):
		self.movies = movies  # keep full dataset reference
		self.movie_filter = movie_filter or MovieFilter()  # default 2000-2009 rules
		self.filtered = self.movie_filter.apply(movies)  # qualifying movies, original order
		logger.info(f"[Pipeline] Ready with {len(self.filtered)} qualifying movies")

	@classmethod
	def from_source(
		cls,
		location: str,
		policy: MalformedRowPolicy = MalformedRowPolicy.ABORT,
		timeout: float = 15.0,
		movie_filter: Optional[MovieFilter] = None,
	) -> 'ChartPipeline':
		"""Load movies from a file or URL and build a pipeline over them."""
		loader = DataLoader(policy=policy)
		movies = loader.load_movies(location, timeout=timeout)
		return cls(movies, movie_filter=movie_filter)

	def bar_chart(self) -> List[BarDatum]:
		"""Total revenue by genre, largest first."""
		return prepare_bar_chart_data(self.filtered)

	def scatter_chart(self, limit: int = SCATTER_LIMIT) -> List[MovieRecord]:
		"""Top films by budget."""
		return prepare_scatter_chart_data(self.filtered, limit=limit)

	def line_chart(self) -> LineChartData:
		"""Yearly revenue and budget totals."""
		return prepare_line_chart_data(self.filtered)

	def all_charts(self, scatter_limit: int = SCATTER_LIMIT) -> Dict[str, object]:
		"""Every aggregate keyed by chart type."""
		charts = {
			'bar': self.bar_chart(),
			'scatter': self.scatter_chart(limit=scatter_limit),
			'line': self.line_chart(),
		}
		logger.info(
			f"[Pipeline] Built charts | bar={len(charts['bar'])} genres "
			f"scatter={len(charts['scatter'])} points line={len(charts['line'].dates)} years"
		)
		return charts
