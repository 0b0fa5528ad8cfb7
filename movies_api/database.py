"""
Movies API — MongoDB Client Management
========================================

What:  MongoDB client factory, collection accessor, and the FastAPI dependency
       that hands the storage accessor to route handlers.
How:   One AsyncMongoClient is created during application startup (lifespan),
       pinged once, wrapped in a MongoMovieStore, and kept on `app.state`.
       Handlers receive the store through `Depends(get_movie_store)`.
Who:   Used by main.py (lifecycle) and by route handlers (dependency).
When:  Client is created once at startup and closed at shutdown.

Connection Handling:
    The driver owns connection pooling and thread/task safety. The service
    performs no locking, retrying or health checking of its own after the
    startup ping; a failed operation surfaces as DatabaseError.
"""

import logging
from typing import Optional

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection

from movies_api.config import settings
from movies_api.services.store_base import MovieStore

logger = logging.getLogger(__name__)


# ── Client Factory ────────────────────────────────────────────────────────
def create_client(url: Optional[str] = None) -> AsyncMongoClient:
    """
    Build the process-wide MongoDB client.

    The client connects lazily; nothing touches the network until the first
    command (normally the startup ping in `verify_connection`).
    """
    return AsyncMongoClient(
        url or settings.mongo_url,
        serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms,
    )


def get_collection(client: AsyncMongoClient) -> AsyncCollection:
    """Returns the configured movies collection in the configured database."""
    return client[settings.mongo_database][settings.mongo_collection]


async def verify_connection(client: AsyncMongoClient) -> None:
    """
    Ping the server once.

    Raises:
        pymongo.errors.PyMongoError: server unreachable within the
            server-selection timeout. Startup lets this propagate so the
            process exits instead of serving requests it cannot fulfil.
    """
    await client.admin.command("ping")
    logger.info(
        "Connected to MongoDB (database=%s, collection=%s)",
        settings.mongo_database,
        settings.mongo_collection,
    )


# ── Store Dependency ──────────────────────────────────────────────────────
def get_movie_store(request: Request) -> MovieStore:
    """
    FastAPI dependency that provides the storage accessor.

    Example usage in a route:
        @router.get("/movies")
        async def list_movies(store: MovieStore = Depends(get_movie_store)):
            return await store.find_all()

    Tests replace it through `app.dependency_overrides[get_movie_store]`.
    """
    return request.app.state.movie_store


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_client(client: AsyncMongoClient) -> None:
    """Closes all pooled connections. Called during application shutdown."""
    await client.close()
