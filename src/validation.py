"""
Validation helpers for movie payloads and ratings.
Pure functions over plain mappings using the wire field names (e.g. releaseYear).
"""

import math
from typing import Any, List, Mapping

from .exceptions import InvalidFieldTypeError, InvalidRatingError, MissingFieldError

# Fields a create payload must carry, in reporting order
REQUIRED_FIELDS = ('id', 'title', 'director', 'genre', 'releaseYear')

# Fields an update may touch and the type check each must pass
TEXT_FIELDS = ('title', 'director', 'genre')
NUMERIC_FIELDS = ('releaseYear',)
UPDATABLE_FIELDS = TEXT_FIELDS + NUMERIC_FIELDS

MIN_RATING = 1
MAX_RATING = 5


def is_number(value: Any) -> bool:
	"""True for ints and finite floats; bools, NaN and infinities are not numbers here."""
	if isinstance(value, bool):
		return False
	if isinstance(value, float):
		return math.isfinite(value)
	return isinstance(value, int)


def missing_fields(candidate: Mapping[str, Any]) -> List[str]:
	"""
	Names of required fields that are absent or falsy.
	Empty strings, None and zero all count as missing.
	"""
	return [name for name in REQUIRED_FIELDS if not candidate.get(name)]


def invalid_field_types(partial: Mapping[str, Any]) -> List[str]:
	"""Names of provided update fields whose value has the wrong type."""
	invalid = []
	for name in TEXT_FIELDS:
		if name in partial and not isinstance(partial[name], str):
			invalid.append(name)
	for name in NUMERIC_FIELDS:
		if name in partial and not is_number(partial[name]):
			invalid.append(name)
	return invalid


def require_fields(candidate: Mapping[str, Any], operation: str = 'create') -> None:
	missing = missing_fields(candidate)
	if missing:
		raise MissingFieldError(missing, operation=operation)


def require_field_types(partial: Mapping[str, Any], operation: str = 'update') -> None:
	invalid = invalid_field_types(partial)
	if invalid:
		raise InvalidFieldTypeError(invalid, operation=operation)


def check_rating(value: Any):
	"""Return `value` if it is a number in [1, 5], else raise InvalidRatingError."""
	if not is_number(value) or not (MIN_RATING <= value <= MAX_RATING):
		raise InvalidRatingError(value)
	return value
