"""
End-to-end tests for the FastAPI request layer: routes, status codes and bodies.
Run: python tests/test_api.py
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

import pytest
from fastapi.testclient import TestClient

from api import create_app
from src.config import Settings
from src.movie_store import MovieStore


def movie_json(movie_id="m1", **overrides):
	body = {"id": movie_id, "title": "The Matrix", "director": "Lana Wachowski", "genre": "Sci-Fi", "releaseYear": 1999}
	body.update(overrides)
	return body


@pytest.fixture
def client():
	return TestClient(create_app(store=MovieStore(), settings=Settings()))


def test_health(client):
	response = client.get("/health")
	assert response.status_code == 200
	assert response.json() == {"status": "ok", "movies": 0}


def test_create_and_get(client):
	response = client.post("/movies", json=movie_json())
	assert response.status_code == 201
	data = response.json()
	assert data["message"] == "Movie added successfully"
	assert data["movie"] == movie_json()

	response = client.get("/movies/m1")
	assert response.status_code == 200
	assert response.json() == {"movie": movie_json()}


def test_create_missing_field_and_duplicate(client):
	body = movie_json()
	del body["genre"]
	response = client.post("/movies", json=body)
	assert response.status_code == 400
	assert "genre" in response.json()["message"]

	assert client.post("/movies", json=movie_json()).status_code == 201
	response = client.post("/movies", json=movie_json(title="Other"))
	assert response.status_code == 400
	assert "Duplicate" in response.json()["message"]


@pytest.mark.parametrize("raw", ["{not json", "[1, 2]", "\"text\""])
def test_malformed_body_is_bad_request(client, raw):
	response = client.post("/movies", content=raw, headers={"Content-Type": "application/json"})
	assert response.status_code == 400
	assert response.json()["message"] == "400 Bad Request: Invalid JSON format."


def test_patch(client):
	client.post("/movies", json=movie_json())

	response = client.patch("/movies/m1", json={"title": "Reloaded", "id": "other"})
	assert response.status_code == 200
	data = response.json()
	assert data["message"] == "Movie updated"
	assert data["movie"] == movie_json(title="Reloaded")

	response = client.patch("/movies/m1", json={"releaseYear": "bad"})
	assert response.status_code == 400
	assert "releaseYear" in response.json()["message"]

	assert client.patch("/movies/ghost", json={"title": "x"}).status_code == 404


def test_delete(client):
	client.post("/movies", json=movie_json())

	response = client.delete("/movies/m1")
	assert response.status_code == 200
	assert response.json() == {"message": "Movie deleted successfully"}
	assert client.get("/movies/m1").status_code == 404
	assert client.delete("/movies/m1").status_code == 404


def test_rating_flow(client):
	client.post("/movies", json=movie_json())

	response = client.get("/movies/m1/rating")
	assert response.status_code == 204
	assert response.content == b""

	response = client.post("/movies/m1/rating", json={"rating": 3})
	assert response.status_code == 200
	assert response.json()["message"] == "Movie rated successfully"
	assert response.json()["movie"]["rating"] == [3]
	client.post("/movies/m1/rating", json={"rating": 5})

	response = client.get("/movies/m1/rating")
	assert response.status_code == 200
	data = response.json()
	assert data["averageRating"] == 4
	assert data["movie"]["rating"] == [3, 5]


def test_rating_errors(client):
	client.post("/movies", json=movie_json())
	assert client.post("/movies/m1/rating", json={"rating": 6}).status_code == 400
	assert client.post("/movies/m1/rating", json={"rating": "5"}).status_code == 400
	assert client.post("/movies/m1/rating", json={}).status_code == 400
	assert client.post("/movies/ghost/rating", json={"rating": 3}).status_code == 404
	assert client.get("/movies/ghost/rating").status_code == 404


def test_top_rated(client):
	assert client.get("/movies/top-rated").status_code == 404

	for movie_id, value in [("A", 4), ("B", 4), ("C", 2), ("D", None)]:
		client.post("/movies", json=movie_json(movie_id, title=f"Movie {movie_id}"))
		if value is not None:
			client.post(f"/movies/{movie_id}/rating", json={"rating": value})

	response = client.get("/movies/top-rated")
	assert response.status_code == 200
	assert [m["id"] for m in response.json()["movies"]] == ["A", "B", "C"]

	response = client.get("/movies/top-rated", params={"limit": 1})
	assert [m["id"] for m in response.json()["movies"]] == ["A"]
	assert client.get("/movies/top-rated", params={"limit": 0}).status_code == 400


def test_top_rated_without_ratings_is_empty_list(client):
	client.post("/movies", json=movie_json())
	response = client.get("/movies/top-rated")
	assert response.status_code == 200
	assert response.json() == {"movies": []}


def test_lookups(client):
	client.post("/movies", json=movie_json())
	client.post("/movies", json=movie_json("m2", title="Heat", director="Michael Mann", genre="Drama"))

	response = client.get("/movies/genre/drama")
	assert response.status_code == 200
	assert [m["id"] for m in response.json()["movies"]] == ["m2"]
	assert client.get("/movies/genre/western").status_code == 404

	response = client.get("/movies/director/MICHAEL MANN")
	assert [m["id"] for m in response.json()["movies"]] == ["m2"]
	assert client.get("/movies/director/nobody").status_code == 404

	response = client.get("/movies/search/mat")
	assert [m["id"] for m in response.json()["movies"]] == ["m1"]
	assert client.get("/movies/search/zzz").status_code == 404


def test_lookups_for_the_word_rating_reach_the_query_engine(client):
	client.post("/movies", json=movie_json("m1", title="Rating Game", director="Rating", genre="Rating"))

	for path in ("/movies/search/rating", "/movies/genre/rating", "/movies/director/rating"):
		response = client.get(path)
		assert response.status_code == 200, path
		assert [m["id"] for m in response.json()["movies"]] == ["m1"], path

	# a movie actually named "genre" is still rated through its own route
	client.post("/movies", json=movie_json("genre"))
	assert client.post("/movies/genre/rating", json={"rating": 4}).status_code == 200
	assert client.get("/movies/genre").json()["movie"]["rating"] == [4]


@pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
def test_non_finite_release_year_is_rejected(client, literal):
	raw = '{"id": "m1", "title": "A", "director": "D", "genre": "G", "releaseYear": %s}' % literal
	response = client.post("/movies", content=raw, headers={"Content-Type": "application/json"})
	assert response.status_code == 400
	assert "releaseYear" in response.json()["message"]
	assert client.get("/movies/m1").status_code == 404

	client.post("/movies", json=movie_json())
	raw = '{"releaseYear": %s}' % literal
	response = client.patch("/movies/m1", content=raw, headers={"Content-Type": "application/json"})
	assert response.status_code == 400
	assert client.get("/movies/m1").json()["movie"]["releaseYear"] == 1999


def test_list_movies(client):
	assert client.get("/movies").json() == {"movies": []}
	client.post("/movies", json=movie_json("b"))
	client.post("/movies", json=movie_json("a"))
	assert [m["id"] for m in client.get("/movies").json()["movies"]] == ["b", "a"]


def test_apps_do_not_share_state():
	first = TestClient(create_app(settings=Settings()))
	second = TestClient(create_app(settings=Settings()))
	first.post("/movies", json=movie_json())
	assert second.get("/movies/m1").status_code == 404


def main():
	raise SystemExit(pytest.main([__file__, "-q"]))


if __name__ == '__main__':
	main()
