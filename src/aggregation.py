"""
Chart aggregation module.
Builds the bar, scatter and line chart data from filtered movies.
"""

from datetime import date  # years become Jan 1 dates for the line chart x-axis
from typing import Callable, Dict, Generic, Hashable, Iterable, List, Optional, Tuple, TypeVar

from loguru import logger

from .models import BarDatum, LineChartData, LinePoint, LineSeries, MovieRecord


K = TypeVar('K', bound=Hashable)

SCATTER_LIMIT = 100  # top-N films by budget
REVENUE_COLOR = 'dodgerblue'
BUDGET_COLOR = 'darkorange'


class GroupedSum(Generic[K]):
	"""
	Ordered group-by-and-sum accumulator.
	Keys are compared with ==, and iteration follows first-seen order.
	"""

	def __init__(self):
		self._totals: Dict[K, float] = {}  # dicts keep insertion order

	def add(self, key: K, value: float) -> None:
		self._totals[key] = self._totals.get(key, 0.0) + value

	def items(self) -> List[Tuple[K, float]]:
		"""(key, total) pairs in first-seen order."""
		return list(self._totals.items())

	def values(self) -> List[float]:
		return list(self._totals.values())

	def sorted_by_key(self) -> List[Tuple[K, float]]:
		return sorted(self._totals.items(), key=lambda kv: kv[0])

	def __len__(self) -> int:
		return len(self._totals)

	@classmethod
	def of(cls, items: Iterable, key: Callable, value: Callable) -> 'GroupedSum':
		"""Build an accumulator from an iterable with key/value extractors."""
		acc = cls()
		for item in items:
			acc.add(key(item), value(item))
		return acc


def prepare_bar_chart_data(movies: List[MovieRecord]) -> List[BarDatum]:
	"""
	Total revenue per genre, largest first.
	Ties keep the order in which genres were first seen.
	"""
	revenue_by_genre = GroupedSum.of(movies, key=lambda m: m.genre, value=lambda m: m.revenue)
	data = [BarDatum(genre=genre, revenue=total) for genre, total in revenue_by_genre.items()]
	data.sort(key=lambda d: d.revenue, reverse=True)  # stable, so ties stay in insertion order
	logger.debug(f"[Charts] Bar data: {len(data)} genres")
	return data


def prepare_scatter_chart_data(movies: List[MovieRecord], limit: int = SCATTER_LIMIT) -> List[MovieRecord]:
	"""The `limit` biggest-budget movies, sorted by budget descending."""
	if limit < 0:
		raise ValueError(f"limit must be non-negative, got {limit}")
	ranked = sorted(movies, key=lambda m: m.budget, reverse=True)  # copy; input is left alone
	data = ranked[:limit]
	logger.debug(f"[Charts] Scatter data: {len(data)} of {len(movies)} movies")
	return data


def _year_series(name: str, color: str, totals: GroupedSum) -> LineSeries:
	values = [LinePoint(date=date(int(year), 1, 1), value=total) for year, total in totals.sorted_by_key()]
	return LineSeries(name=name, color=color, values=values)


def prepare_line_chart_data(movies: List[MovieRecord]) -> LineChartData:
	"""
	Yearly revenue and budget totals as two series over the same sorted years.
	Years without movies are left out rather than zero-filled.
	"""
	revenue_by_year = GroupedSum.of(movies, key=lambda m: m.release_year, value=lambda m: m.revenue)
	budget_by_year = GroupedSum.of(movies, key=lambda m: m.release_year, value=lambda m: m.budget)

	revenue = _year_series('Revenue', REVENUE_COLOR, revenue_by_year)
	budget = _year_series('Budget', BUDGET_COLOR, budget_by_year)

	dates = [point.date for point in revenue.values]
	y_values = revenue_by_year.values() + budget_by_year.values()
	y_max: Optional[float] = max(y_values) if y_values else None

	logger.debug(f"[Charts] Line data: {len(dates)} years, y_max={y_max}")
	return LineChartData(series=[revenue, budget], dates=dates, y_max=y_max)
