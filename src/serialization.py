"""
JSON conversion for chart aggregates.
Dates become ISO strings and NaN becomes null so the output is strict JSON.
"""

import math
from typing import Any, Dict, List

from .models import BarDatum, LineChartData, MovieRecord


def _number(value: float):
	if value is None or (isinstance(value, float) and math.isnan(value)):
		return None
	return value


def movie_to_dict(movie: MovieRecord) -> Dict[str, Any]:
	"""Flatten a MovieRecord, including the derived release year."""
	return {
		'id': _number(movie.id),
		'title': movie.title,
		'genre': movie.genre,
		'genres': list(movie.genres),
		'budget': _number(movie.budget),
		'revenue': _number(movie.revenue),
		'runtime': _number(movie.runtime),
		'popularity': _number(movie.popularity),
		'vote_average': _number(movie.vote_average),
		'vote_count': _number(movie.vote_count),
		'release_date': movie.release_date.isoformat() if movie.release_date else None,
		'release_year': _number(movie.release_year),
		'imdb_id': movie.imdb_id,
		'original_language': movie.original_language,
		'overview': movie.overview,
		'poster_path': movie.poster_path,
		'tagline': movie.tagline,
		'production_countries': movie.production_countries,
		'homepage': movie.homepage,
		'status': movie.status,
		'video': movie.video,
	}


def bar_to_json(data: List[BarDatum]) -> List[Dict[str, Any]]:
	return [{'genre': d.genre, 'revenue': _number(d.revenue)} for d in data]


def scatter_to_json(data: List[MovieRecord]) -> List[Dict[str, Any]]:
	return [movie_to_dict(m) for m in data]


def line_to_json(data: LineChartData) -> Dict[str, Any]:
	return {
		'series': [
			{
				'name': s.name,
				'color': s.color,
				'values': [{'date': p.date.isoformat(), 'value': _number(p.value)} for p in s.values],
			}
			for s in data.series
		],
		'dates': [d.isoformat() for d in data.dates],
		'yMax': _number(data.y_max),
	}
