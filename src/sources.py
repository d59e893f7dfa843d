"""
Row sources.
Reads raw movie rows (string -> string mappings) from local CSV/JSON/JSONL files
or from an HTTP endpoint. No typing happens here; that is the DataLoader's job.
"""

import csv  # delimited text parsing
import io  # wrap downloaded text for the csv reader
import json  # JSON arrays and JSON lines
from pathlib import Path  # filesystem-safe paths
from typing import Dict, Iterable, List

# HTTP client for remote sources
import requests  # make web requests to remote data endpoints

from loguru import logger  # console logger


RawRecord = Dict[str, str]  # one untyped row, exactly as read


def _stringify(row: Dict) -> RawRecord:
	"""
	JSON sources carry real numbers and nested lists; turn every value back into
	the string form a CSV cell would have so the type converter sees one shape.
	"""
	out = {}
	for key, value in row.items():
		if isinstance(value, str):
			out[key] = value
		elif value is None:
			out[key] = 'NA'  # null behaves like the CSV sentinel
		elif isinstance(value, (list, dict)):
			out[key] = json.dumps(value)  # embedded JSON stays JSON text
		else:
			out[key] = str(value)
	return out


def _require_file(filepath: Path) -> None:
	# Validate the file presence early to give clear error messages
	if not filepath.exists():
		raise FileNotFoundError(f"Movie data file not found: {filepath}")


def read_csv_rows(filepath: str) -> List[RawRecord]:
	"""Read a CSV file with a header row into a list of raw records."""
	filepath = Path(filepath)  # normalize path
	_require_file(filepath)
	logger.info(f"[Sources] Reading CSV rows from {filepath}...")
	with open(filepath, 'r', encoding='utf-8-sig', newline='') as f:
		rows = list(csv.DictReader(f))  # header row becomes the keys
	logger.info(f"[Sources] Read {len(rows)} rows.")
	return rows


def read_json_rows(filepath: str) -> List[RawRecord]:
	"""Read a file holding one JSON array of row objects."""
	filepath = Path(filepath)
	_require_file(filepath)
	logger.info(f"[Sources] Reading JSON rows from {filepath}...")
	with open(filepath, 'r', encoding='utf-8-sig') as f:
		data = json.load(f)
	if not isinstance(data, list):
		raise ValueError(f"Expected a JSON array of rows in {filepath}, got {type(data).__name__}")
	rows = [_stringify(row) for row in data]
	logger.info(f"[Sources] Read {len(rows)} rows.")
	return rows


def read_jsonl_rows(filepath: str) -> List[RawRecord]:
	"""Read a JSON Lines file where each non-blank line is one row object."""
	filepath = Path(filepath)
	_require_file(filepath)
	logger.info(f"[Sources] Reading JSONL rows from {filepath}...")
	rows = []
	with open(filepath, 'r', encoding='utf-8-sig') as f:
		for line_num, line in enumerate(f, 1):  # keep track of line number for diagnostics
			line = line.strip()
			if not line:
				continue  # tolerate trailing blank lines
			try:
				rows.append(_stringify(json.loads(line)))
			except json.JSONDecodeError as e:
				raise ValueError(f"Invalid JSON at line {line_num} of {filepath}: {e}") from e
	logger.info(f"[Sources] Read {len(rows)} rows.")
	return rows


def fetch_json_rows(url: str, timeout: float = 15.0) -> List[RawRecord]:
	"""GET a JSON array of rows from an HTTP endpoint."""
	logger.info(f"[Sources] Fetching JSON rows from {url}")
	resp = requests.get(url, timeout=timeout)  # single request, no retries
	resp.raise_for_status()  # raise error if server responded with an error code
	data = resp.json()
	if not isinstance(data, list):
		raise ValueError(f"Expected a JSON array of rows from {url}, got {type(data).__name__}")
	rows = [_stringify(row) for row in data]
	logger.info(f"[Sources] Fetched {len(rows)} rows.")
	return rows


def fetch_csv_rows(url: str, timeout: float = 15.0) -> List[RawRecord]:
	"""GET a CSV document from an HTTP endpoint."""
	logger.info(f"[Sources] Fetching CSV rows from {url}")
	resp = requests.get(url, timeout=timeout)
	resp.raise_for_status()
	rows = list(csv.DictReader(io.StringIO(resp.content.decode('utf-8-sig'))))  # strip a leading BOM
	logger.info(f"[Sources] Fetched {len(rows)} rows.")
	return rows


def read_rows(location: str, timeout: float = 15.0) -> List[RawRecord]:
	"""
	Pick a reader from the location: http(s) URLs are fetched, local files are
	read by suffix (.csv, .json, .jsonl). Anything else is treated as CSV.
	"""
	lowered = location.lower()
	if lowered.startswith(('http://', 'https://')):
		if lowered.split('?', 1)[0].endswith('.csv'):
			return fetch_csv_rows(location, timeout=timeout)
		return fetch_json_rows(location, timeout=timeout)

	suffix = Path(location).suffix.lower()
	if suffix == '.jsonl':
		return read_jsonl_rows(location)
	if suffix == '.json':
		return read_json_rows(location)
	return read_csv_rows(location)


def combine_rows(*row_sets: Iterable[RawRecord]) -> List[RawRecord]:
	"""Concatenate rows from several sources, keeping source order."""
	combined: List[RawRecord] = []
	for rows in row_sets:
		combined.extend(rows)
	return combined
