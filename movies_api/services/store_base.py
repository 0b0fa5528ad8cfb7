"""
Movies API — Abstract Movie Store Interface
=============================================

What:  Abstract base class defining the storage accessor contract.
How:   Concrete implementations inherit from MovieStore and implement the five
       record operations plus a connectivity probe.
Who:   Called by the /movies route handlers and the /health route.

Implementations:
    - MongoMovieStore: one MongoDB collection (movies_api.services.mongo_store)
    - InMemoryMovieStore: dict-backed fake used by the test suite
"""

from abc import ABC, abstractmethod
from typing import List

from movies_api.schemas.movie import Movie


class MovieStore(ABC):
    """
    Abstract interface for movie persistence.

    Contract:
        - Records are keyed by `Movie.id`; the store enforces uniqueness.
        - NotFoundError is raised only by find_by_id and update.
        - Backend failures are wrapped in DatabaseError, carrying the
          backend's error text as the message.
    """

    @abstractmethod
    async def find_all(self) -> List[Movie]:
        """
        Return every stored movie.

        No filter, no pagination. Order is whatever the backend yields and
        carries no meaning.
        """
        ...

    @abstractmethod
    async def find_by_id(self, movie_id: str) -> Movie:
        """
        Return the movie with the given id.

        Raises:
            NotFoundError: no record has this id.
            DatabaseError: the backend failed.
        """
        ...

    @abstractmethod
    async def insert(self, movie: Movie) -> None:
        """
        Store a new movie.

        Raises:
            DatabaseError: id already present, or the backend failed.
        """
        ...

    @abstractmethod
    async def update(self, movie: Movie) -> None:
        """
        Replace the whole record stored under `movie.id`.

        Not a merge: fields are taken exactly as given. Concurrent updates
        to the same id are last-write-wins.

        Raises:
            NotFoundError: no record has this id.
            DatabaseError: the backend failed.
        """
        ...

    @abstractmethod
    async def delete(self, movie_id: str) -> None:
        """
        Remove the record with the given id. Removing an absent id is a no-op.

        Raises:
            DatabaseError: the backend failed.
        """
        ...

    @abstractmethod
    async def ping(self) -> bool:
        """True if the backend is reachable. Never raises."""
        ...
