"""
Data loading and type conversion module.
Turns raw movie rows (all strings) into typed MovieRecord objects.
"""

# Standard libs for JSON parsing, dates, NaN and typing
import json  # embedded JSON fields (genres, production_countries)
import math  # NaN for unparseable numbers
import re  # strict numeric syntax
from datetime import date, datetime  # release date parsing
from enum import Enum  # explicit malformed-row policy
from typing import Any, Dict, Iterable, List, Optional, Tuple  # type hints

# Import our record data class used across the project
from .models import MovieRecord  # structured movie record
from .sources import RawRecord, read_rows  # raw row readers

# Console logging
from loguru import logger  # console logger


NA_SENTINEL = 'NA'  # raw value that marks a missing text field
DATE_FORMAT = '%Y-%m-%d'  # release_date layout
# Plain decimal or exponent notation, or a signed Infinity
NUMBER_PATTERN = re.compile(r'^[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|Infinity)$', re.ASCII)

# Columns coerced to numbers (NaN when unparseable)
NUMERIC_FIELDS = ('id', 'budget', 'revenue', 'runtime', 'popularity', 'vote_average', 'vote_count')
# Columns where "NA" means absent
OPTIONAL_TEXT_FIELDS = ('genre', 'imdb_id', 'original_language', 'overview', 'poster_path', 'tagline', 'title')
# Columns passed through untouched
RAW_TEXT_FIELDS = ('homepage', 'status', 'video')


class MalformedFieldError(ValueError):
	"""Raised when an embedded JSON field cannot be parsed."""

	def __init__(self, field_name: str, raw_value: str, reason: str, row_num: Optional[int] = None):
		self.field_name = field_name  # which column failed
		self.raw_value = raw_value  # offending text
		self.reason = reason
		self.row_num = row_num  # 1-based data row, set by the loader
		prefix = f"Row {row_num}: " if row_num is not None else ""
		super().__init__(f"{prefix}Malformed JSON in field '{field_name}': {reason}")


class MalformedRowPolicy(str, Enum):
	"""What the loader does with a row whose embedded JSON is malformed."""
	ABORT = 'abort'  # stop the whole load and re-raise
	DROP = 'drop'  # skip the row, log a warning and keep going


def parse_na(value: Optional[str]) -> Optional[str]:
	"""Map the "NA" sentinel (or a missing cell) to None; pass anything else through."""
	if value is None or value == NA_SENTINEL:
		return None
	return value


def parse_number(value: Optional[str]) -> float:
	"""
	Coerce a raw cell to a float. Blank or non-numeric text gives NaN rather
	than an error or a zero, so bad values stay visible downstream.
	"""
	if value is None:
		return math.nan
	text = value.strip()
	if not text:
		return math.nan
	if not NUMBER_PATTERN.match(text):
		return math.nan  # rejects "1_000", "inf", "nan", "0x1A"
	return float(text)


def parse_date(value: Optional[str]) -> Optional[date]:
	"""Parse YYYY-MM-DD; None marks an invalid or missing date."""
	if not value:
		return None
	try:
		return datetime.strptime(value.strip(), DATE_FORMAT).date()
	except ValueError:
		return None


def parse_json_field(field_name: str, value: Optional[str]) -> Any:
	"""Parse an embedded JSON cell; malformed text is a hard failure."""
	try:
		return json.loads(value if value is not None else '')
	except (json.JSONDecodeError, TypeError) as e:
		raise MalformedFieldError(field_name, value, str(e)) from e


def parse_genre_names(value: Optional[str]) -> List[str]:
	"""Project the embedded [{"id": .., "name": ..}, ...] list to its names."""
	parsed = parse_json_field('genres', value)
	if not isinstance(parsed, list):
		raise MalformedFieldError('genres', value, 'expected a JSON array')
	# Entries without a name are skipped; only broken JSON is fatal
	return [entry['name'] for entry in parsed if isinstance(entry, dict) and isinstance(entry.get('name'), str)]


class LoadReport:
	"""Counts for one load run, kept for logging and the API health view."""

	def __init__(self):
		self.rows_read = 0
		self.records_built = 0
		self.rows_dropped = 0
		self.records_with_invalid_fields = 0

	def as_dict(self) -> Dict[str, int]:
		return {
			'rows_read': self.rows_read,
			'records_built': self.records_built,
			'rows_dropped': self.rows_dropped,
			'records_with_invalid_fields': self.records_with_invalid_fields,
		}


class DataLoader:
	"""
	Handles loading and type conversion of movie data.
	The malformed-row policy decides whether one bad embedded JSON cell aborts
	the load (default) or just drops that row.
	"""

	def __init__(self, policy: MalformedRowPolicy = MalformedRowPolicy.ABORT):
		"""Store the malformed-row policy and start an empty load report."""
		self.policy = MalformedRowPolicy(policy)  # accept the enum or its string value
		self.last_report = LoadReport()  # counts from the most recent load

	def load_movies(self, location: str, timeout: float = 15.0) -> List[MovieRecord]:
		"""
		Load movies from a CSV/JSON/JSONL file or an http(s) URL.
		Returns a list of MovieRecord objects.
		"""
		logger.info(f"[DataLoader] Loading movies from {location}...")  # log action
		rows = read_rows(location, timeout=timeout)  # raw string rows
		return self.convert_rows(rows)

	def convert_rows(self, rows: Iterable[RawRecord]) -> List[MovieRecord]:
		"""Convert raw rows into MovieRecords, applying the malformed-row policy."""
		report = LoadReport()  # fresh counts for this run
		self.last_report = report
		movies = []  # accumulator for parsed records

		for row_num, row in enumerate(rows, 1):  # keep track of row number for diagnostics
			report.rows_read += 1
			try:
				movie = self.parse_movie_row(row)  # convert dict -> MovieRecord
			except MalformedFieldError as e:
				if self.policy is MalformedRowPolicy.ABORT:
					logger.error(f"[DataLoader] Aborting load at row {row_num}: {e}")
					raise MalformedFieldError(e.field_name, e.raw_value, e.reason, row_num=row_num) from e
				logger.warning(f"[DataLoader] Dropping row {row_num}: {e}")  # malformed row
				report.rows_dropped += 1
				continue  # move on

			if movie.invalid_fields:
				report.records_with_invalid_fields += 1
				logger.debug(f"[DataLoader] Row {row_num} has unparseable fields: {movie.invalid_fields}")
			movies.append(movie)  # collect

		report.records_built = len(movies)
		logger.info(
			f"[DataLoader] Built {report.records_built} movies from {report.rows_read} rows "
			f"({report.rows_dropped} dropped, {report.records_with_invalid_fields} with invalid fields)."
		)  # summary
		return movies  # return list

	def parse_movie_row(self, row: RawRecord) -> MovieRecord:
		"""
		Convert one raw row into a strongly-typed MovieRecord.
		Raises MalformedFieldError if an embedded JSON field is broken.
		"""
		# Embedded JSON first: a failure here must not leave a partial record behind
		genres = parse_genre_names(row.get('genres'))  # list of genre names
		production_countries = parse_json_field('production_countries', row.get('production_countries'))

		numbers, invalid_fields = self._parse_numbers(row)  # floats, NaN where invalid

		release_date = parse_date(row.get('release_date'))  # None when unparseable
		if release_date is None:
			invalid_fields.append('release_date')

		optional_text = {name: parse_na(row.get(name)) for name in OPTIONAL_TEXT_FIELDS}  # "NA" -> None
		raw_text = {name: row.get(name) or '' for name in RAW_TEXT_FIELDS}  # untouched strings

		# Assemble the record with typed values
		return MovieRecord(
			genres=genres,
			production_countries=production_countries,
			release_date=release_date,
			invalid_fields=invalid_fields,
			**numbers,
			**optional_text,
			**raw_text,
		)

	def _parse_numbers(self, row: RawRecord) -> Tuple[Dict[str, float], List[str]]:
		"""Parse every numeric column and note which ones failed."""
		numbers = {}
		invalid = []
		for name in NUMERIC_FIELDS:
			value = parse_number(row.get(name))
			if math.isnan(value):
				invalid.append(name)
			numbers[name] = value
		return numbers, invalid

	def get_all_genres(self, movies: List[MovieRecord]) -> List[str]:
		"""Return a sorted list of all unique primary genres in the dataset."""
		genres = set()  # unique genres
		for movie in movies:  # iterate
			if movie.genre:  # ignore absent
				genres.add(movie.genre)
		return sorted(genres)  # sorted output

	def get_year_range(self, movies: List[MovieRecord]) -> Optional[Tuple[int, int]]:
		"""Return (first, last) release year among movies with a valid date."""
		years = [m.release_date.year for m in movies if m.release_date is not None]
		if not years:
			return None
		return min(years), max(years)
