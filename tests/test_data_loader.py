"""
Tests for data loading and type conversion.
Run: pytest tests/test_data_loader.py
"""

import math
from datetime import date
from pathlib import Path

import pytest

from src.data_loader import (
    DataLoader,
    MalformedFieldError,
    MalformedRowPolicy,
    parse_date,
    parse_na,
    parse_number,
)

ROOT = Path(__file__).resolve().parents[1]
SAMPLE_CSV = ROOT / 'tests' / 'data' / 'movies_sample.csv'


def make_row(**overrides):
    row = {
        'budget': '50000000',
        'genre': 'Action',
        'genres': '[{"id": 28, "name": "Action"}, {"id": 12, "name": "Adventure"}]',
        'homepage': 'http://example.com',
        'id': '42',
        'imdb_id': 'tt0000042',
        'original_language': 'en',
        'overview': 'Things happen.',
        'popularity': '12.5',
        'poster_path': '/poster.jpg',
        'production_countries': '[{"iso_3166_1": "US", "name": "United States of America"}]',
        'release_date': '2005-06-10',
        'revenue': '200000000',
        'runtime': '121',
        'status': 'Released',
        'tagline': 'A tagline.',
        'title': 'Alpha',
        'video': 'FALSE',
        'vote_average': '6.8',
        'vote_count': '1520',
    }
    row.update(overrides)
    return row


def test_parse_na_maps_only_the_sentinel():
    assert parse_na('NA') is None
    assert parse_na('Drama') == 'Drama'
    assert parse_na('na') == 'na'  # case-sensitive
    assert parse_na('') == ''


def test_parse_number_gives_nan_for_bad_input():
    assert parse_number('12.5') == 12.5
    assert parse_number(' 7 ') == 7.0
    assert math.isnan(parse_number(''))
    assert math.isnan(parse_number('abc'))
    assert math.isnan(parse_number(None))


def test_parse_date():
    assert parse_date('2005-06-10') == date(2005, 6, 10)
    assert parse_date('2005-13-01') is None
    assert parse_date('not-a-date') is None
    assert parse_date('') is None


def test_parse_movie_row_types_every_field():
    movie = DataLoader().parse_movie_row(make_row())

    assert movie.id == 42.0
    assert movie.budget == 50000000.0
    assert movie.revenue == 200000000.0
    assert movie.runtime == 121.0
    assert movie.popularity == 12.5
    assert movie.vote_average == 6.8
    assert movie.vote_count == 1520.0
    assert movie.genre == 'Action'
    assert movie.genres == ['Action', 'Adventure']
    assert movie.production_countries == [{'iso_3166_1': 'US', 'name': 'United States of America'}]
    assert movie.release_date == date(2005, 6, 10)
    assert movie.release_year == 2005
    assert movie.homepage == 'http://example.com'
    assert movie.status == 'Released'
    assert movie.video == 'FALSE'
    assert movie.invalid_fields == []
    assert movie.is_valid


def test_na_fields_become_absent():
    movie = DataLoader().parse_movie_row(make_row(genre='NA', title='NA', tagline='NA', imdb_id='NA'))
    assert movie.genre is None
    assert movie.title is None
    assert movie.tagline is None
    assert movie.imdb_id is None
    # pass-through fields keep the sentinel text
    movie = DataLoader().parse_movie_row(make_row(homepage='NA'))
    assert movie.homepage == 'NA'


def test_unparseable_numbers_and_dates_are_flagged_not_raised():
    movie = DataLoader().parse_movie_row(make_row(budget='abc', revenue='', release_date='2005/06/10'))
    assert math.isnan(movie.budget)
    assert math.isnan(movie.revenue)
    assert movie.release_date is None
    assert math.isnan(movie.release_year)
    assert movie.invalid_fields == ['budget', 'revenue', 'release_date']
    assert not movie.is_valid


def test_malformed_genres_json_raises():
    with pytest.raises(MalformedFieldError) as excinfo:
        DataLoader().parse_movie_row(make_row(genres='[{"name": "Action"'))
    assert excinfo.value.field_name == 'genres'


def test_malformed_production_countries_raises():
    with pytest.raises(MalformedFieldError) as excinfo:
        DataLoader().parse_movie_row(make_row(production_countries='not json'))
    assert excinfo.value.field_name == 'production_countries'


def test_abort_policy_stops_the_load():
    rows = [make_row(), make_row(genres='{broken'), make_row()]
    loader = DataLoader(policy=MalformedRowPolicy.ABORT)
    with pytest.raises(MalformedFieldError):
        loader.convert_rows(rows)


def test_drop_policy_skips_bad_rows():
    rows = [make_row(title='One'), make_row(genres='{broken'), make_row(title='Three')]
    loader = DataLoader(policy='drop')
    movies = loader.convert_rows(rows)
    assert [m.title for m in movies] == ['One', 'Three']
    assert loader.last_report.as_dict() == {
        'rows_read': 3,
        'records_built': 2,
        'rows_dropped': 1,
        'records_with_invalid_fields': 0,
    }


def test_load_sample_csv():
    loader = DataLoader()
    movies = loader.load_movies(str(SAMPLE_CSV))

    assert len(movies) == 11
    assert movies[0].title == 'Alpha'
    assert movies[0].genres == ['Action', 'Adventure']
    assert movies[5].genre is None  # "NA" genre row
    assert loader.last_report.records_with_invalid_fields == 2  # bad budget, bad date
    assert loader.get_all_genres(movies) == ['Action', 'Comedy', 'Drama']
    assert loader.get_year_range(movies) == (1995, 2010)


def test_missing_file_raises():
    with pytest.raises(FileNotFoundError):
        DataLoader().load_movies(str(ROOT / 'tests' / 'data' / 'missing.csv'))


def test_genre_entries_without_a_name_are_skipped():
    movies = DataLoader().convert_rows([make_row(genres='[{"id": 28}, {"id": 18, "name": "Drama"}]')])
    assert len(movies) == 1
    assert movies[0].genres == ['Drama']


def test_genres_must_still_be_a_json_array():
    with pytest.raises(MalformedFieldError):
        DataLoader().parse_movie_row(make_row(genres='{"name": "Action"}'))


def test_abort_error_carries_row_number():
    rows = [make_row(), make_row(), make_row(production_countries='{broken')]
    with pytest.raises(MalformedFieldError) as excinfo:
        DataLoader().convert_rows(rows)
    assert excinfo.value.row_num == 3
    assert excinfo.value.field_name == 'production_countries'
    assert str(excinfo.value).startswith('Row 3:')


def test_parse_number_rejects_python_only_spellings():
    for text in ('1_000', 'inf', 'nan', 'NaN', '0x1A', '1e', '12abc'):
        assert math.isnan(parse_number(text)), text
    assert parse_number('1e3') == 1000.0
    assert parse_number('-.5') == -0.5
    assert parse_number('5.') == 5.0
    assert parse_number('Infinity') == math.inf
    assert parse_number('-Infinity') == -math.inf
