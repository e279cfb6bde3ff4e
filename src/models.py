"""
Data models for the Movie Catalog.
Defines the core data structures shared by the store, the aggregator and the API.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field, replace  # auto-generates __init__, __repr__, etc.
# Import typing helpers for precise and self-documenting types
from typing import List, Optional, Union  # lists, optional values and numeric unions

# Ratings and release years may arrive as ints or floats from JSON
Number = Union[int, float]


@dataclass
class Movie:
	"""
	Represents a single movie record held by the catalog.
	`rating` stays None until the first rating is submitted, which keeps
	"never rated" distinct from any numeric average.
	"""
	id: str  # client-supplied identifier, immutable after creation
	title: str  # movie title as submitted
	director: str  # director name as submitted
	genre: str  # genre label as submitted
	release_year: Number  # release year (wire name: releaseYear)
	rating: Optional[List[Number]] = None  # submitted ratings in arrival order

	def snapshot(self) -> 'Movie':
		"""Return a detached copy so callers cannot mutate stored state."""
		ratings = list(self.rating) if self.rating is not None else None
		return replace(self, rating=ratings)

	def to_dict(self) -> dict:
		"""Wire representation; `rating` is omitted while absent."""
		data = {
			'id': self.id,
			'title': self.title,
			'director': self.director,
			'releaseYear': self.release_year,
			'genre': self.genre,
		}
		if self.rating is not None:
			data['rating'] = list(self.rating)
		return data


@dataclass
class RatingSummary:
	"""
	Average rating of one movie.
	`average` is None when the movie has no ratings yet; that is a valid
	result, not an error and not zero.
	"""
	movie: Movie  # snapshot of the rated movie
	average: Optional[float] = None  # arithmetic mean, or None when unrated
	count: int = field(default=0)  # number of ratings averaged

	@property
	def has_ratings(self) -> bool:
		return self.average is not None
