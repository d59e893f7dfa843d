"""
Data models for the Movie Charts pipeline.
Defines the typed movie record and the chart-ready aggregates built from it.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field  # auto-generates __init__, __repr__, etc.
# Dates for release dates and line chart x-values
from datetime import date  # calendar dates
import math  # NaN for invalid numeric/date values
# Import typing helpers for precise and self-documenting types
from typing import Any, List, Optional  # lists, optional values, arbitrary JSON


@dataclass(frozen=True)
class MovieRecord:
	"""
	One fully-typed movie row, converted from the raw CSV strings.
	Numeric fields hold NaN when the raw value could not be parsed; text fields
	hold None when the raw value was the "NA" sentinel.
	"""
	id: float  # numeric movie id from the source
	title: Optional[str]  # None when absent
	genre: Optional[str]  # primary genre, None when absent
	genres: List[str]  # all genre names from the embedded JSON list
	budget: float  # production budget in $US
	revenue: float  # box office revenue in $US
	runtime: float  # minutes
	popularity: float  # popularity score from the dataset
	vote_average: float  # average vote on a 0-10 scale
	vote_count: float  # number of votes
	release_date: Optional[date]  # None marks an unparseable date
	imdb_id: Optional[str] = None
	original_language: Optional[str] = None
	overview: Optional[str] = None
	poster_path: Optional[str] = None
	tagline: Optional[str] = None
	production_countries: Any = None  # raw parsed JSON value
	homepage: str = ''
	status: str = ''
	video: str = ''
	invalid_fields: List[str] = field(default_factory=list)  # fields whose parse failed

	@property
	def release_year(self) -> float:
		"""Year of the release date, or NaN when the date is invalid."""
		if self.release_date is None:
			return math.nan
		return self.release_date.year

	@property
	def is_valid(self) -> bool:
		"""True when every numeric and date field parsed cleanly."""
		return not self.invalid_fields


@dataclass(frozen=True)
class BarDatum:
	"""Total revenue for one genre."""
	genre: str
	revenue: float


@dataclass(frozen=True)
class LinePoint:
	date: date  # first day of the year being summed
	value: float  # summed measure for that year


@dataclass(frozen=True)
class LineSeries:
	"""One measure plotted over time, e.g. yearly revenue."""
	name: str  # series label ("Revenue", "Budget")
	color: str  # suggested stroke color for the renderer
	values: List[LinePoint]  # ascending by date


@dataclass(frozen=True)
class LineChartData:
	"""
	Everything a line chart needs: the series, the shared x-domain and the
	shared y-maximum so both series can be drawn on one scale.
	"""
	series: List[LineSeries]
	dates: List[date]  # sorted years present in the input
	y_max: Optional[float]  # None when there is no data
