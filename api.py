"""
FastAPI server exposing the movie catalog API.
Endpoints:
- GET /health: basic health check
- POST /movies, GET /movies: create and list movies
- GET/PATCH/DELETE /movies/{movie_id}: read, partially update, delete one movie
- POST/GET /movies/{movie_id}/rating: rate a movie, read its average rating
- GET /movies/top-rated?limit=5: rated movies by descending average
- GET /movies/genre/{genre}, /movies/director/{director}, /movies/search/{keyword}: lookups

The catalog lives in memory for the lifetime of the process; every app built by
create_app() owns its own empty MovieStore unless one is passed in.
"""

# Import typing helpers for request/response schemas
from typing import Any, List, Optional, Union  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for request/response models
from fastapi import Depends, FastAPI, Query, Request, Response  # FastAPI primitives
from fastapi.exceptions import RequestValidationError  # raised for undecodable bodies
from fastapi.responses import JSONResponse  # error payloads
from pydantic import BaseModel, ConfigDict, Field  # schema definitions

# Import our internal modules for storage, ratings, queries and settings
from src.config import Settings, configure_logging, load_settings  # env-driven settings
from src.exceptions import CatalogError, MalformedInputError  # error taxonomy
from src.models import Movie  # stored record
from src.movie_store import MovieStore  # source of truth
from src.query_engine import QueryEngine  # genre/director/title lookups
from src.ratings import RatingAggregator  # ratings and ranking

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger


# Request body for create and partial update; Any keeps the raw JSON types for validation
class MovieIn(BaseModel):
	model_config = ConfigDict(populate_by_name=True, extra='ignore')

	id: Any = None  # client-supplied identifier
	title: Any = None  # movie title
	director: Any = None  # director name
	genre: Any = None  # genre label
	release_year: Any = Field(default=None, alias='releaseYear')  # release year

	def provided(self) -> dict:
		"""Only the fields present in the request body, keyed by wire name."""
		return self.model_dump(by_alias=True, exclude_unset=True)


# Request body for submitting a rating
class RatingIn(BaseModel):
	rating: Any = None  # checked by the rating validator, not by pydantic


# Pydantic model that describes the shape of a single movie in responses
class MovieOut(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	id: str  # unique id
	title: str  # movie title
	director: str  # director name
	release_year: Union[int, float] = Field(alias='releaseYear')  # release year
	genre: str  # genre label
	rating: Optional[List[Union[int, float]]] = None  # omitted until rated

	@classmethod
	def from_movie(cls, movie: Movie) -> 'MovieOut':
		return cls(**movie.to_dict())


class MovieResponse(BaseModel):
	message: Optional[str] = None
	movie: MovieOut


class MoviesResponse(BaseModel):
	movies: List[MovieOut]


class MessageResponse(BaseModel):
	message: str


class AverageRatingResponse(BaseModel):
	movie: MovieOut
	average_rating: float = Field(alias='averageRating')


class HealthResponse(BaseModel):
	status: str
	movies: int


# Dependency helpers reading the components attached in create_app()
def get_store(request: Request) -> MovieStore:
	return request.app.state.store


def get_ratings(request: Request) -> RatingAggregator:
	return request.app.state.ratings


def get_queries(request: Request) -> QueryEngine:
	return request.app.state.queries


def _movies(movies: List[Movie]) -> MoviesResponse:
	return MoviesResponse(movies=[MovieOut.from_movie(m) for m in movies])


def create_app(store: Optional[MovieStore] = None, settings: Optional[Settings] = None) -> FastAPI:
	"""Build the API around one MovieStore (a fresh empty one by default)."""
	settings = settings or load_settings()  # resolve configuration once
	store = store if store is not None else MovieStore()  # explicit store instance

	# Instantiate the FastAPI application with metadata
	app = FastAPI(title="Movie Catalog API", version="1.0.0")  # web app
	app.state.settings = settings
	app.state.store = store
	app.state.ratings = RatingAggregator(store, default_limit=settings.top_rated_limit)
	app.state.queries = QueryEngine(store)

	@app.on_event("startup")
	async def startup_event():
		"""Apply logging configuration and report the starting catalog size."""
		configure_logging(settings.log_level)
		logger.info(f"[API] Startup complete | movies={len(store)} | top_rated_limit={settings.top_rated_limit}")

	# Map catalog errors to their status code with a {"message": ...} body
	@app.exception_handler(CatalogError)
	async def catalog_error_handler(request: Request, exc: CatalogError):
		logger.warning(f"[API] {request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
		return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

	# Bodies that cannot be decoded, and bad query parameters, are client errors
	@app.exception_handler(RequestValidationError)
	async def validation_error_handler(request: Request, exc: RequestValidationError):
		errors = exc.errors()
		if any(err.get('loc', ('',))[0] == 'body' for err in errors):
			error = MalformedInputError(detail=str(errors))
		else:
			error = CatalogError("400 Bad Request: Invalid request parameters.")
		logger.warning(f"[API] {request.method} {request.url.path} -> 400: {errors}")
		return JSONResponse(status_code=400, content={"message": error.message})

	# Simple health endpoint for readiness checks
	@app.get("/health", response_model=HealthResponse)
	def health(store: MovieStore = Depends(get_store)):
		"""Return minimal health info for liveness/readiness probes."""
		return HealthResponse(status="ok", movies=len(store))

	@app.post("/movies", status_code=201, response_model=MovieResponse, response_model_exclude_none=True)
	def create_movie(payload: MovieIn, store: MovieStore = Depends(get_store)):
		movie = store.create(payload.provided())
		return MovieResponse(message="Movie added successfully", movie=MovieOut.from_movie(movie))

	@app.get("/movies", response_model=MoviesResponse, response_model_exclude_none=True)
	def list_movies(store: MovieStore = Depends(get_store)):
		return _movies(store.list())

	# Declared before /movies/{movie_id} so "top-rated" is never taken for an id
	@app.get("/movies/top-rated", response_model=MoviesResponse, response_model_exclude_none=True)
	def top_rated(
		limit: Optional[int] = Query(None, ge=1, description="Maximum number of movies to return"),
		ratings: RatingAggregator = Depends(get_ratings),
	):
		return _movies(ratings.top_rated(limit))

	@app.patch("/movies/{movie_id}", response_model=MovieResponse, response_model_exclude_none=True)
	def update_movie(movie_id: str, payload: MovieIn, store: MovieStore = Depends(get_store)):
		movie = store.update(movie_id, payload.provided())
		return MovieResponse(message="Movie updated", movie=MovieOut.from_movie(movie))

	@app.get("/movies/{movie_id}", response_model=MovieResponse, response_model_exclude_none=True)
	def get_movie(movie_id: str, store: MovieStore = Depends(get_store)):
		return MovieResponse(movie=MovieOut.from_movie(store.get(movie_id)))

	@app.delete("/movies/{movie_id}", response_model=MessageResponse)
	def delete_movie(movie_id: str, store: MovieStore = Depends(get_store)):
		store.delete(movie_id)
		return MessageResponse(message="Movie deleted successfully")

	# Lookups come before /movies/{movie_id}/rating so a genre, director or keyword
	# spelled "rating" is never taken for a movie id
	@app.get("/movies/genre/{genre}", response_model=MoviesResponse, response_model_exclude_none=True)
	def movies_by_genre(genre: str, queries: QueryEngine = Depends(get_queries)):
		return _movies(queries.by_genre(genre))

	@app.get("/movies/director/{director}", response_model=MoviesResponse, response_model_exclude_none=True)
	def movies_by_director(director: str, queries: QueryEngine = Depends(get_queries)):
		return _movies(queries.by_director(director))

	@app.get("/movies/search/{keyword}", response_model=MoviesResponse, response_model_exclude_none=True)
	def search_movies(keyword: str, queries: QueryEngine = Depends(get_queries)):
		return _movies(queries.by_title_keyword(keyword))

	@app.post("/movies/{movie_id}/rating", response_model=MovieResponse, response_model_exclude_none=True)
	def rate_movie(movie_id: str, payload: RatingIn, ratings: RatingAggregator = Depends(get_ratings)):
		movie = ratings.add_rating(movie_id, payload.rating)
		return MovieResponse(message="Movie rated successfully", movie=MovieOut.from_movie(movie))

	@app.get("/movies/{movie_id}/rating", response_model=AverageRatingResponse, response_model_exclude_none=True)
	def average_rating(movie_id: str, ratings: RatingAggregator = Depends(get_ratings)):
		summary = ratings.average_for(movie_id)
		if not summary.has_ratings:
			return Response(status_code=204)  # no ratings yet: no content, not an error
		return AverageRatingResponse(movie=MovieOut.from_movie(summary.movie), averageRating=summary.average)

	return app


# Default application instance for `uvicorn api:app`
app = create_app()
