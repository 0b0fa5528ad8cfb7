"""
Movies API — Movie Route Handlers
===================================

What:  The five CRUD endpoints over the movies collection.
How:   Each handler takes the storage accessor from `Depends(get_movie_store)`,
       makes one store call, and returns the record. Errors are raised as
       application exceptions and turned into JSON envelopes by the global
       handlers in main.py.

Routes:
    GET    /movies        → list every movie
    GET    /movies/{id}   → one movie, 404 "Movie not found" if absent
    POST   /movies        → create with a server-generated id
    PUT    /movies/{id}   → full replace; id forced to the path id
    DELETE /movies/{id}   → {"result": "success"}, also for an absent id
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from movies_api.database import get_movie_store
from movies_api.schemas.movie import (
    DeleteResponse,
    ErrorResponse,
    Movie,
    MovieIn,
    new_movie_id,
)
from movies_api.services.store_base import MovieStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/movies", tags=["Movies"])

_error_responses = {
    400: {"description": "Request body could not be decoded", "model": ErrorResponse},
    500: {"description": "Storage error", "model": ErrorResponse},
}


@router.get(
    "",
    response_model=List[Movie],
    responses={500: _error_responses[500]},
    summary="List all movies",
)
async def list_movies(store: MovieStore = Depends(get_movie_store)) -> List[Movie]:
    return await store.find_all()


@router.get(
    "/{movie_id}",
    response_model=Movie,
    responses={
        404: {"description": "Movie not found", "model": ErrorResponse},
        500: _error_responses[500],
    },
    summary="Get a movie by ID",
)
async def get_movie(movie_id: str, store: MovieStore = Depends(get_movie_store)) -> Movie:
    return await store.find_by_id(movie_id)


@router.post(
    "",
    response_model=Movie,
    responses=_error_responses,
    summary="Create a movie",
)
async def create_movie(payload: MovieIn, store: MovieStore = Depends(get_movie_store)) -> Movie:
    """
    Create a movie from a (possibly partial) payload.

    The id is minted here; any id in the body was already dropped during
    decoding. The stored record is echoed back with status 200.
    """
    movie = payload.with_id(new_movie_id())
    await store.insert(movie)
    logger.info("Created movie %s", movie.id)
    return movie


@router.put(
    "/{movie_id}",
    response_model=Movie,
    responses={
        **_error_responses,
        404: {"description": "Movie not found", "model": ErrorResponse},
    },
    summary="Replace a movie",
)
async def update_movie(
    movie_id: str,
    payload: MovieIn,
    store: MovieStore = Depends(get_movie_store),
) -> Movie:
    """
    Replace the stored movie wholesale.

    Fields missing from the body are stored as "", not kept from the
    previous version.
    """
    movie = payload.with_id(movie_id)
    await store.update(movie)
    logger.info("Replaced movie %s", movie_id)
    return movie


@router.delete(
    "/{movie_id}",
    response_model=DeleteResponse,
    responses={500: _error_responses[500]},
    summary="Delete a movie",
)
async def delete_movie(movie_id: str, store: MovieStore = Depends(get_movie_store)) -> DeleteResponse:
    await store.delete(movie_id)
    logger.info("Deleted movie %s", movie_id)
    return DeleteResponse()
