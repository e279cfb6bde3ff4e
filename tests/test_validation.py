"""
Unit tests for the validation helpers.
Run: python tests/test_validation.py
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

import pytest

from src.exceptions import InvalidRatingError
from src.validation import check_rating, invalid_field_types, is_number, missing_fields


def test_missing_fields_reports_all_in_order():
	assert missing_fields({}) == ["id", "title", "director", "genre", "releaseYear"]
	assert missing_fields({"id": "m1", "title": "", "director": "D", "genre": "G", "releaseYear": 0}) == ["title", "releaseYear"]
	assert missing_fields({"id": "m1", "title": "A", "director": "D", "genre": "G", "releaseYear": 1999}) == []


def test_invalid_field_types_only_checks_provided_fields():
	assert invalid_field_types({}) == []
	assert invalid_field_types({"title": "ok", "releaseYear": 1999.0}) == []
	assert invalid_field_types({"genre": ["Drama"], "releaseYear": "1999"}) == ["genre", "releaseYear"]
	assert invalid_field_types({"id": 5, "rating": "x"}) == []


def test_bools_and_non_finite_floats_are_not_numbers():
	assert is_number(3)
	assert is_number(2.5)
	assert not is_number(True)
	assert not is_number("3")
	assert not is_number(float("nan"))
	assert not is_number(float("inf"))
	assert is_number(10 ** 400)


@pytest.mark.parametrize("value", [1, 3, 4.5, 5])
def test_ratings_in_range_pass(value):
	assert check_rating(value) == value


@pytest.mark.parametrize("value", [0, 0.99, 5.01, 6, -1, "4", None, True, [3], float("nan"), float("inf")])
def test_ratings_out_of_range_or_wrong_type_fail(value):
	with pytest.raises(InvalidRatingError):
		check_rating(value)


def main():
	raise SystemExit(pytest.main([__file__, "-q"]))


if __name__ == '__main__':
	main()
