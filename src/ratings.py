"""
Rating aggregation module.
Appends ratings, averages them per movie, and ranks the catalog by average rating.
"""

from typing import Dict, List, Optional, Sequence

from loguru import logger

from .exceptions import NotFoundError
from .models import Movie, Number, RatingSummary
from .movie_store import MovieStore
from .validation import check_rating


def mean(values: Optional[Sequence[Number]]) -> Optional[float]:
	"""Arithmetic mean, or None for a missing or empty sequence."""
	if not values:
		return None
	return sum(values) / len(values)


class RatingAggregator:
	"""
	Rating operations over a MovieStore.
	Movies without ratings have no average and are never ranked.
	"""

	def __init__(self, store: MovieStore, default_limit: int = 5):
		self.store = store
		self.default_limit = default_limit

	def add_rating(self, movie_id: str, value) -> Movie:
		"""
		Record one rating for a movie.
		Raises NotFoundError for an unknown movie before looking at the value.
		"""
		self.store.get(movie_id)
		check_rating(value)
		return self.store.append_rating(movie_id, value)

	def average_for(self, movie_id: str) -> RatingSummary:
		movie = self.store.get(movie_id)
		average = mean(movie.rating)
		count = len(movie.rating) if movie.rating else 0
		logger.debug(f"[Ratings] Average for '{movie_id}': {average} over {count} ratings")
		return RatingSummary(movie=movie, average=average, count=count)

	def top_rated(self, limit: Optional[int] = None) -> List[Movie]:
		"""
		Up to `limit` rated movies by descending average rating.
		Ties keep insertion order. Raises NotFoundError when the store is empty;
		an empty list means the store has movies but none are rated.
		"""
		if limit is None:
			limit = self.default_limit

		movies = self.store.list()  # one consistent snapshot
		if not movies:
			logger.warning("[Ratings] Top-rated requested on an empty store")
			raise NotFoundError("404 Not Found: No movies found.", operation='top_rated')

		averages: Dict[str, float] = {}
		for movie in movies:
			average = mean(movie.rating)
			if average is not None:
				averages[movie.id] = average

		rated = [m for m in movies if m.id in averages]
		# sorted() is stable, so equal averages stay in insertion order
		ranked = sorted(rated, key=lambda m: averages[m.id], reverse=True)

		logger.info(f"[Ratings] Returning top {min(max(limit, 0), len(ranked))} of {len(ranked)} rated movies")
		return ranked[:max(limit, 0)]
