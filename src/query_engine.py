"""
Query engine module.
Read-only filters over the store: genre, director and title keyword.
"""

from typing import Callable, List  # type annotations for clarity

# Import project modules for data structures and components
from .models import Movie  # core data class
from .movie_store import MovieStore  # source of truth
from .exceptions import NotFoundError  # empty results are errors

# Import loguru for console logging
from loguru import logger  # simple structured logger


def _fold(text: str) -> str:
	"""Normalize text for case-insensitive comparison."""
	return text.casefold()


class QueryEngine:
	"""
	Case-insensitive lookups over a MovieStore.
	Results keep store order; an empty result raises NotFoundError.
	"""

	def __init__(self, store: MovieStore):
		self.store = store  # read access only

	def by_genre(self, genre: str) -> List[Movie]:
		"""Movies whose genre equals `genre`, ignoring case."""
		wanted = _fold(genre)
		return self._filter(
			lambda m: _fold(m.genre) == wanted,
			f"404 Not Found: No movies found for the genre '{genre}'.",
			'by_genre',
		)

	def by_director(self, director: str) -> List[Movie]:
		"""Movies whose director equals `director`, ignoring case."""
		wanted = _fold(director)
		return self._filter(
			lambda m: _fold(m.director) == wanted,
			f"404 Not Found: No movies found by the director '{director}'.",
			'by_director',
		)

	def by_title_keyword(self, keyword: str) -> List[Movie]:
		"""Movies whose title contains `keyword`, ignoring case."""
		needle = _fold(keyword)
		return self._filter(
			lambda m: needle in _fold(m.title),
			f"404 Not Found: No movies match the search keyword '{keyword}'.",
			'by_title_keyword',
		)

	def _filter(self, predicate: Callable[[Movie], bool], not_found: str, operation: str) -> List[Movie]:
		movies = self.store.list()  # snapshot in insertion order
		matches = [m for m in movies if predicate(m)]  # keep order
		logger.debug(f"[Query] {operation} matched {len(matches)} of {len(movies)} movies")
		if not matches:
			raise NotFoundError(not_found, operation=operation)
		return matches
