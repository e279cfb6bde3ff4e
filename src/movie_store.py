"""
Movie record store.
Owns every movie record, enforces id uniqueness and is the only component
allowed to mutate records. Callers always receive detached snapshots.
"""

# Lock so the store can be shared by FastAPI's worker threads
import threading  # serializes store operations
# Typing hints for clarity of public API
from typing import Any, Dict, List, Mapping  # type hints

# Import our Movie model and the validation helpers
from .models import Movie, Number  # movie data class
from .validation import UPDATABLE_FIELDS, require_field_types, require_fields  # payload checks
from .exceptions import DuplicateIdError, NotFoundError  # error taxonomy

# Console logging
from loguru import logger  # console logger

# Wire field name -> Movie attribute name
_ATTRIBUTES = {
	'title': 'title',
	'director': 'director',
	'genre': 'genre',
	'releaseYear': 'release_year',
}


class MovieStore:
	"""
	In-memory collection of movies keyed by id, kept in insertion order.
	Starts empty and lives as long as the process; nothing is persisted.
	"""

	def __init__(self):
		self._movies: Dict[str, Movie] = {}  # movie_id -> Movie, insertion ordered
		self._lock = threading.RLock()  # one lock guards the whole collection
		logger.debug("[Store] Initialized empty movie store")

	def __len__(self) -> int:
		with self._lock:
			return len(self._movies)

	def __contains__(self, movie_id: object) -> bool:
		with self._lock:
			return movie_id in self._movies

	def create(self, candidate: Mapping[str, Any]) -> Movie:
		"""
		Insert a new movie built from a wire payload.
		Only the five named fields are kept; ratings always start absent.
		"""
		require_fields(candidate)  # MissingFieldError when anything required is falsy
		require_field_types({name: candidate[name] for name in UPDATABLE_FIELDS}, operation='create')  # strings and a numeric year

		movie = Movie(
			id=str(candidate['id']),  # ensure ID is string
			title=candidate['title'],
			director=candidate['director'],
			genre=candidate['genre'],
			release_year=candidate['releaseYear'],
		)

		with self._lock:
			if movie.id in self._movies:
				logger.warning(f"[Store] Rejected duplicate id '{movie.id}'")
				raise DuplicateIdError(movie.id)
			self._movies[movie.id] = movie
			logger.info(f"[Store] Created movie '{movie.id}' ({movie.title}) | total={len(self._movies)}")
			return movie.snapshot()

	def get(self, movie_id: str) -> Movie:
		"""Return a snapshot of one movie or raise NotFoundError."""
		with self._lock:
			return self._require(movie_id, 'get').snapshot()

	def update(self, movie_id: str, partial: Mapping[str, Any]) -> Movie:
		"""
		Merge the provided title/director/genre/releaseYear into an existing movie.
		Other keys, `id` and `rating` included, are ignored.
		"""
		with self._lock:
			movie = self._require(movie_id, 'update')
			changes = {name: partial[name] for name in UPDATABLE_FIELDS if name in partial}
			require_field_types(changes)  # InvalidFieldTypeError before anything is touched

			for name, value in changes.items():
				setattr(movie, _ATTRIBUTES[name], value)
			logger.info(f"[Store] Updated movie '{movie_id}' | fields={sorted(changes)}")
			return movie.snapshot()

	def delete(self, movie_id: str) -> None:
		with self._lock:
			self._require(movie_id, 'delete')
			del self._movies[movie_id]
			logger.info(f"[Store] Deleted movie '{movie_id}' | total={len(self._movies)}")

	def list(self) -> List[Movie]:
		"""Snapshots of all movies in insertion order, taken under one lock."""
		with self._lock:
			return [movie.snapshot() for movie in self._movies.values()]

	def append_rating(self, movie_id: str, value: Number) -> Movie:
		"""Append an already validated rating, creating the list on first use."""
		with self._lock:
			movie = self._require(movie_id, 'add_rating')
			if movie.rating is None:
				movie.rating = []
			movie.rating.append(value)
			logger.info(f"[Store] Rated movie '{movie_id}' with {value} | ratings={len(movie.rating)}")
			return movie.snapshot()

	def _require(self, movie_id: str, operation: str) -> Movie:
		"""Look up the live record; callers must hold the lock."""
		movie = self._movies.get(movie_id)
		if movie is None:
			logger.warning(f"[Store] {operation}: movie '{movie_id}' not found")
			raise NotFoundError.for_movie(movie_id, operation)
		return movie
