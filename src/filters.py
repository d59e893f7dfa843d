"""
Filtering module.
Keeps only the movies that qualify for the charts: released 2000-2009, with
positive budget and revenue figures, and with a genre and a title.
"""

from typing import List

from loguru import logger

from .models import MovieRecord


class MovieFilter:
	"""
	Applies the chart inclusion rules. Year bounds are exclusive on both ends,
	so the defaults keep 2000 through 2009.
	"""

	def __init__(
		self,
		min_year_exclusive: int = 1999,
		max_year_exclusive: int = 2010,
		require_positive_revenue: bool = True,
		require_positive_budget: bool = True,
	):
		self.min_year_exclusive = min_year_exclusive
		self.max_year_exclusive = max_year_exclusive
		self.require_positive_revenue = require_positive_revenue
		self.require_positive_budget = require_positive_budget

	def matches(self, movie: MovieRecord) -> bool:
		"""
		True when the movie satisfies every rule. NaN never compares true, so a
		movie with an unparseable year, budget or revenue is rejected here.
		"""
		year = movie.release_year
		if not (self.min_year_exclusive < year < self.max_year_exclusive):
			return False
		if self.require_positive_revenue and not movie.revenue > 0:
			return False
		if self.require_positive_budget and not movie.budget > 0:
			return False
		# Empty strings count as missing, like None
		return bool(movie.genre) and bool(movie.title)

	def apply(self, movies: List[MovieRecord]) -> List[MovieRecord]:
		"""Return the qualifying movies in their original order."""
		kept = [m for m in movies if self.matches(m)]
		logger.info(f"[Filter] Kept {len(kept)} of {len(movies)} movies ({self.min_year_exclusive} < year < {self.max_year_exclusive})")
		return kept


def filter_movies(movies: List[MovieRecord]) -> List[MovieRecord]:
	"""Filter with the default chart rules."""
	return MovieFilter().apply(movies)
