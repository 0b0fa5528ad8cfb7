"""
Movies API — Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    ├── movie_store: InMemoryMovieStore standing in for MongoDB
    ├── app: fresh FastAPI app whose get_movie_store returns movie_store
    ├── test_client: HTTPX AsyncClient bound to `app` via ASGITransport
    ├── mock_collection: AsyncMock-based stand-in for a pymongo AsyncCollection
    └── sample_movie_payload: the Inception example body

No fixture runs the application lifespan, so no MongoDB server is needed.
"""

import os
from typing import Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Override settings for testing BEFORE any app imports
os.environ["MONGO_URL"] = "mongodb://localhost:1"
os.environ["MONGO_DATABASE"] = "movies_test"
os.environ["LOG_LEVEL"] = "WARNING"

from movies_api.database import get_movie_store  # noqa: E402
from movies_api.exceptions import DatabaseError, NotFoundError  # noqa: E402
from movies_api.main import create_app  # noqa: E402
from movies_api.schemas.movie import Movie  # noqa: E402
from movies_api.services.store_base import MovieStore  # noqa: E402


class InMemoryMovieStore(MovieStore):
    """
    Dict-backed MovieStore with the same error contract as MongoMovieStore.

    Set `fail_with` to a message to make every operation raise DatabaseError,
    and `healthy = False` to make ping() report an unreachable backend.
    """

    def __init__(self):
        self.movies: Dict[str, Movie] = {}
        self.fail_with = None
        self.healthy = True

    def _check(self, operation: str) -> None:
        if self.fail_with:
            raise DatabaseError(message=self.fail_with, context={"operation": operation})

    async def find_all(self) -> List[Movie]:
        self._check("find_all")
        return list(self.movies.values())

    async def find_by_id(self, movie_id: str) -> Movie:
        self._check("find_by_id")
        if movie_id not in self.movies:
            raise NotFoundError(resource="Movie", resource_id=movie_id)
        return self.movies[movie_id]

    async def insert(self, movie: Movie) -> None:
        self._check("insert")
        if movie.id in self.movies:
            raise DatabaseError(message=f"duplicate key: {movie.id}")
        self.movies[movie.id] = movie

    async def update(self, movie: Movie) -> None:
        self._check("update")
        if movie.id not in self.movies:
            raise NotFoundError(resource="Movie", resource_id=movie.id)
        self.movies[movie.id] = movie

    async def delete(self, movie_id: str) -> None:
        self._check("delete")
        self.movies.pop(movie_id, None)

    async def ping(self) -> bool:
        return self.healthy


@pytest.fixture
def movie_store():
    return InMemoryMovieStore()


@pytest.fixture
def app(movie_store):
    """A fresh app per test with the storage accessor swapped for movie_store."""
    application = create_app()
    application.dependency_overrides[get_movie_store] = lambda: movie_store
    return application


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient configured to talk to the FastAPI app.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/movies")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def mock_collection():
    """
    A MagicMock shaped like pymongo's AsyncCollection.

    find() is synchronous and returns a cursor whose to_list() is awaited;
    the other calls are coroutines.
    """
    collection = MagicMock()
    collection.find.return_value.to_list = AsyncMock(return_value=[])
    collection.find_one = AsyncMock(return_value=None)
    collection.insert_one = AsyncMock()
    collection.replace_one = AsyncMock()
    collection.delete_one = AsyncMock()
    collection.database.command = AsyncMock(return_value={"ok": 1.0})
    return collection


@pytest.fixture
def sample_movie_payload():
    return {
        "name": "Inception",
        "cover_image": "https://x/y.jpg",
        "description": "Sci-fi thriller",
    }
