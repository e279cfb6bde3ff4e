"""
Error taxonomy for the Movie Catalog.
Every error is recoverable at the request boundary; each class carries the
HTTP status the request layer should answer with.
"""

from typing import Any, Iterable, List, Optional


class CatalogError(Exception):
	"""Base exception for catalog operation errors."""
	status_code: int = 400

	def __init__(self, message: str, operation: Optional[str] = None):
		super().__init__(message)
		self.message = message
		self.operation = operation


class MissingFieldError(CatalogError):
	"""Raised when a create payload lacks one or more required fields."""

	def __init__(self, fields: Iterable[str], operation: str = 'create'):
		self.fields: List[str] = list(fields)
		super().__init__(f"Missing Required Fields: {', '.join(self.fields)}", operation)


class DuplicateIdError(CatalogError):
	"""Raised when a movie with the same id already exists."""

	def __init__(self, movie_id: str, operation: str = 'create'):
		self.movie_id = movie_id
		super().__init__(f"400 Bad Request: Duplicate ID '{movie_id}'.", operation)


class NotFoundError(CatalogError):
	"""Raised when a movie, or any movie matching a query, cannot be found."""
	status_code = 404

	def __init__(self, message: str, operation: Optional[str] = None, movie_id: Optional[str] = None):
		self.movie_id = movie_id
		super().__init__(message, operation)

	@classmethod
	def for_movie(cls, movie_id: str, operation: str) -> 'NotFoundError':
		return cls("404 Not Found: Movie not found.", operation=operation, movie_id=movie_id)


class InvalidFieldTypeError(CatalogError):
	"""Raised when an update provides a field with the wrong type."""

	def __init__(self, fields: Iterable[str], operation: str = 'update'):
		self.fields: List[str] = list(fields)
		super().__init__(f"400 Bad Request: Invalid fields provided: {', '.join(self.fields)}.", operation)


class InvalidRatingError(CatalogError):
	"""Raised when a rating is not a number between 1 and 5."""

	def __init__(self, value: Any, operation: str = 'add_rating'):
		self.value = value
		super().__init__("400 Bad Request: Rating must be a number between 1 and 5.", operation)


class MalformedInputError(CatalogError):
	"""Raised by the request layer when a body cannot be decoded."""

	def __init__(self, detail: Optional[str] = None, operation: Optional[str] = None):
		self.detail = detail
		super().__init__("400 Bad Request: Invalid JSON format.", operation)
