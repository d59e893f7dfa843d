"""
FastAPI server exposing chart-ready movie data.
Endpoints:
- GET /health: basic health check with load counts
- GET /charts/bar: total revenue by genre, largest first
- GET /charts/scatter?limit=100: top films by budget
- GET /charts/line: yearly revenue and budget totals

Startup loads and filters the dataset once (MOVIE_DATA_PATH, a file or URL).
A rendering front end fetches these payloads and draws them.
"""

# Import standard libraries for timing
import time  # measure startup and request latencies
from typing import Any, List, Optional  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for response models
from fastapi import FastAPI, HTTPException, Query  # FastAPI primitives
from pydantic import BaseModel  # response schema definitions

# Import our internal modules for loading and chart preparation
from src.config import configure_logging, settings  # environment-driven settings
from src.data_loader import DataLoader, MalformedRowPolicy  # loads and types movies
from src.pipeline import ChartPipeline  # filter + aggregate
from src.serialization import bar_to_json, line_to_json, movie_to_dict  # NaN-safe payloads

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger

# Instantiate the FastAPI application with metadata
app = FastAPI(title="Movie Charts API", version="1.0.0")  # web app

# Globals that hold the pipeline instance and measured startup time
PIPELINE: Optional[ChartPipeline] = None  # will point to the initialized pipeline
LOAD_REPORT: dict = {}  # counts from the startup load
STARTUP_TIME_S: float = 0.0  # measures how long startup took


# Pydantic model for one bar of the bar chart
class BarOut(BaseModel):
	genre: str  # genre label
	revenue: float  # total revenue in $US


# Pydantic model for one scatter point (a full movie record)
class ScatterPointOut(BaseModel):
	id: Optional[float] = None
	title: Optional[str] = None
	genre: Optional[str] = None
	genres: List[str]
	budget: Optional[float] = None  # x position
	revenue: Optional[float] = None  # y position
	runtime: Optional[float] = None
	popularity: Optional[float] = None
	vote_average: Optional[float] = None
	vote_count: Optional[float] = None
	release_date: Optional[str] = None  # ISO date
	release_year: Optional[float] = None
	imdb_id: Optional[str] = None
	original_language: Optional[str] = None
	overview: Optional[str] = None
	poster_path: Optional[str] = None
	tagline: Optional[str] = None
	production_countries: Any = None  # raw JSON passed through
	homepage: str = ''
	status: str = ''
	video: str = ''


class LinePointOut(BaseModel):
	date: str  # ISO date for Jan 1 of the year
	value: float  # summed measure


class LineSeriesOut(BaseModel):
	name: str
	color: str
	values: List[LinePointOut]


class LineChartOut(BaseModel):
	series: List[LineSeriesOut]
	dates: List[str]
	yMax: Optional[float] = None  # shared vertical maximum


def _require_pipeline() -> ChartPipeline:
	"""Return the pipeline or fail with 503 while it is not ready."""
	if PIPELINE is None:  # pipeline must be ready to serve
		logger.warning("[API] Chart requested but pipeline not initialized")  # guard log
		raise HTTPException(status_code=503, detail="Chart data not loaded")
	return PIPELINE


# FastAPI startup hook to load the dataset once
@app.on_event("startup")
async def startup_event():
	"""Load movies, build the pipeline and log how long it took."""
	global PIPELINE, LOAD_REPORT, STARTUP_TIME_S  # refer to module-level globals
	configure_logging(settings.log_level)
	start = time.time()  # start timer for startup latency

	logger.info(f"[API] Startup: loading movies from {settings.movie_data_path}...")  # log intent

	loader = DataLoader(policy=MalformedRowPolicy(settings.malformed_row_policy))  # policy from env
	movies = loader.load_movies(settings.movie_data_path, timeout=settings.request_timeout_seconds)
	LOAD_REPORT = loader.last_report.as_dict()  # keep counts for /health
	PIPELINE = ChartPipeline(movies)  # filter once

	STARTUP_TIME_S = time.time() - start  # elapsed seconds
	logger.info(f"[API] Startup complete in {STARTUP_TIME_S:.2f}s.")  # summary log


# Simple health endpoint for readiness checks
@app.get("/health")
async def health():
	"""Return minimal health info for liveness/readiness probes."""
	return {
		"status": "ok",  # constant indicator
		"pipeline_ready": PIPELINE is not None,  # True if data loaded
		"qualifying_movies": len(PIPELINE.filtered) if PIPELINE is not None else 0,
		"load": LOAD_REPORT,  # rows read / dropped / invalid
		"startup_seconds": round(STARTUP_TIME_S, 2)  # startup latency
	}


@app.get("/charts/bar", response_model=List[BarOut])
async def bar_chart():
	"""Total revenue by genre for films released 2000-2009."""
	pipeline = _require_pipeline()
	data = pipeline.bar_chart()
	logger.info(f"[API] /charts/bar served {len(data)} genres")
	return bar_to_json(data)


@app.get("/charts/scatter", response_model=List[ScatterPointOut])
async def scatter_chart(limit: int = Query(settings.scatter_limit, ge=0, description="Number of films to return")):
	"""Top films by budget, budget descending."""
	pipeline = _require_pipeline()
	data = pipeline.scatter_chart(limit=limit)
	logger.info(f"[API] /charts/scatter served {len(data)} points")
	return [ScatterPointOut(**movie_to_dict(m)) for m in data]


@app.get("/charts/line", response_model=LineChartOut)
async def line_chart():
	"""Yearly revenue and budget totals over a shared y-scale."""
	pipeline = _require_pipeline()
	data = pipeline.line_chart()
	logger.info(f"[API] /charts/line served {len(data.dates)} years")
	return line_to_json(data)  # same payload the export script writes
