"""Integration tests for the movie and actor routes."""

import uuid

import pytest
import pytest_asyncio
from httpx import AsyncClient

USER = {"name": "DevsMachna", "email": "devsmachna@email.com", "password": "{StrongPassword1}"}

EXAMPLE_ACTOR = {
    "name": "Robert Pattinson",
    "bio": "Actor",
    "avatar": "https://upload.wikimedia.org",
}

EXAMPLE_MOVIE = {
    "title": "The Batman",
    "year": 2022,
    "genres": ["Action", "Thriller"],
    "directors": ["Matt Reeves"],
    "actors": [],
    "producer": "Warner Bros.",
    "plot": "Batman is called to intervene when the mayor of Gotham City is murdered.",
    "poster": "https://upload.wikimedia.org",
}


@pytest_asyncio.fixture
async def auth_headers(client: AsyncClient, load_account) -> dict:
    signup = await client.post("/auth/signup", json=USER)
    code = (await load_account(signup.json()["id"])).verification_code
    await client.get(f"/auth/verify/{code}")
    login = await client.post("/auth/login", json=USER)
    return {"Authorization": login.json()["auth"]}


async def _create_actor(client: AsyncClient, headers: dict) -> str:
    response = await client.post("/actors", json=EXAMPLE_ACTOR, headers=headers)
    assert response.status_code == 201
    return response.json()["id"]


@pytest.mark.asyncio
async def test_actor_crud(client: AsyncClient, auth_headers: dict) -> None:
    assert (await client.post("/actors", json=EXAMPLE_ACTOR)).status_code == 401

    actor_id = await _create_actor(client, auth_headers)
    listing = await client.get("/actors")
    assert [a["id"] for a in listing.json()] == [actor_id]

    got = await client.get(f"/actors/{actor_id}")
    assert got.status_code == 200
    assert got.json()["name"] == "Robert Pattinson"

    updated = await client.put(
        f"/actors/{actor_id}", json={**EXAMPLE_ACTOR, "bio": "British actor"}, headers=auth_headers
    )
    assert updated.status_code == 200
    assert (await client.get(f"/actors/{actor_id}")).json()["bio"] == "British actor"

    assert (await client.post("/actors", json={"bio": "x"}, headers=auth_headers)).status_code == 400
    assert (await client.get("/actors/not-an-id")).status_code == 400
    assert (await client.get(f"/actors/{uuid.uuid4()}")).status_code == 404

    deleted = await client.delete(f"/actors/{actor_id}", headers=auth_headers)
    assert deleted.status_code == 200
    assert (await client.get(f"/actors/{actor_id}")).status_code == 404


@pytest.mark.asyncio
async def test_movie_crud_and_filter(client: AsyncClient, auth_headers: dict) -> None:
    actor_id = await _create_actor(client, auth_headers)
    movie = {**EXAMPLE_MOVIE, "actors": [actor_id]}

    assert (await client.post("/movies", json=movie)).status_code == 401

    created = await client.post("/movies", json=movie, headers=auth_headers)
    assert created.status_code == 201
    movie_id = created.json()["id"]

    got = await client.get(f"/movies/{movie_id}")
    assert got.status_code == 200
    assert got.json()["actors"] == [actor_id]

    by_title = await client.get("/movies/filter", params={"title": "batman"})
    assert [m["id"] for m in by_title.json()] == [movie_id]
    by_genre = await client.get("/movies/filter", params={"genre": "Comedy"})
    assert by_genre.json() == []
    by_actor = await client.get("/movies/filter", params={"actor": actor_id, "year": 2022})
    assert [m["id"] for m in by_actor.json()] == [movie_id]

    actor_movies = await client.get(f"/actors/{actor_id}/movies")
    assert [m["id"] for m in actor_movies.json()] == [movie_id]

    updated = await client.put(
        f"/movies/{movie_id}", json={**movie, "title": "The Batman Returns"}, headers=auth_headers
    )
    assert updated.status_code == 200
    assert (await client.get(f"/movies/{movie_id}")).json()["title"] == "The Batman Returns"

    deleted = await client.delete(f"/movies/{movie_id}", headers=auth_headers)
    assert deleted.status_code == 200
    assert (await client.get("/movies")).json() == []


@pytest.mark.asyncio
async def test_movie_validation(client: AsyncClient, auth_headers: dict) -> None:
    actor_id = await _create_actor(client, auth_headers)

    old = {**EXAMPLE_MOVIE, "actors": [actor_id], "year": 1800}
    assert (await client.post("/movies", json=old, headers=auth_headers)).status_code == 400

    bad_genre = {**EXAMPLE_MOVIE, "actors": [actor_id], "genres": ["Documentary"]}
    assert (await client.post("/movies", json=bad_genre, headers=auth_headers)).status_code == 400

    bad_actor_id = {**EXAMPLE_MOVIE, "actors": ["not-an-id"]}
    assert (await client.post("/movies", json=bad_actor_id, headers=auth_headers)).status_code == 400


@pytest.mark.asyncio
async def test_movie_with_unknown_actor_is_not_written(client: AsyncClient, auth_headers: dict) -> None:
    movie = {**EXAMPLE_MOVIE, "actors": [str(uuid.uuid4())]}
    response = await client.post("/movies", json=movie, headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Actor not found"
    assert (await client.get("/movies")).json() == []
