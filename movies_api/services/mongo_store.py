"""
Movies API — MongoDB Movie Store
==================================

What:  MovieStore backed by a single MongoDB collection.
How:   Each operation is one driver call on the collection handed in at
       construction. Driver exceptions are wrapped in DatabaseError with
       the driver's text as message.
Who:   Built once in the application lifespan from the process-wide client.

Operation → driver call:
    find_all    → collection.find({})
    find_by_id  → collection.find_one({"_id": id})
    insert      → collection.insert_one(doc)
    update      → collection.replace_one({"_id": id}, doc)   (no upsert)
    delete      → collection.delete_one({"_id": id})
    ping        → database.command("ping")
"""

import logging
from typing import List

from pydantic import ValidationError
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from movies_api.exceptions import DatabaseError, NotFoundError
from movies_api.schemas.movie import Movie
from movies_api.services.store_base import MovieStore

logger = logging.getLogger(__name__)


class MongoMovieStore(MovieStore):
    """Storage accessor over one AsyncCollection."""

    def __init__(self, collection: AsyncCollection):
        self.collection = collection

    def _wrap(self, operation: str, exc: PyMongoError) -> DatabaseError:
        logger.error("MongoDB %s failed: %s", operation, exc)
        return DatabaseError(
            message=str(exc),
            context={"operation": operation, "error_type": type(exc).__name__},
        )

    def _decode(self, doc: dict) -> Movie:
        try:
            return Movie.from_document(doc)
        except ValidationError as e:
            doc_id = str(doc.get("_id"))
            logger.error("Undecodable movie document %s: %s", doc_id, e)
            raise DatabaseError(
                message=f"Stored movie document '{doc_id}' could not be decoded",
                context={"document_id": doc_id, "error_type": type(e).__name__},
            ) from e

    async def find_all(self) -> List[Movie]:
        try:
            docs = await self.collection.find({}).to_list()
        except PyMongoError as e:
            raise self._wrap("find_all", e) from e
        return [self._decode(doc) for doc in docs]

    async def find_by_id(self, movie_id: str) -> Movie:
        try:
            doc = await self.collection.find_one({"_id": movie_id})
        except PyMongoError as e:
            raise self._wrap("find_by_id", e) from e

        if doc is None:
            raise NotFoundError(resource="Movie", resource_id=movie_id)
        return self._decode(doc)

    async def insert(self, movie: Movie) -> None:
        try:
            await self.collection.insert_one(movie.to_document())
        except PyMongoError as e:
            # includes DuplicateKeyError on an _id collision
            raise self._wrap("insert", e) from e
        logger.debug("Inserted movie %s", movie.id)

    async def update(self, movie: Movie) -> None:
        # replace_one takes the replacement without the _id key
        replacement = movie.model_dump(exclude={"id"})
        try:
            result = await self.collection.replace_one({"_id": movie.id}, replacement)
        except PyMongoError as e:
            raise self._wrap("update", e) from e

        if result.matched_count == 0:
            raise NotFoundError(resource="Movie", resource_id=movie.id)
        logger.debug("Replaced movie %s", movie.id)

    async def delete(self, movie_id: str) -> None:
        try:
            result = await self.collection.delete_one({"_id": movie_id})
        except PyMongoError as e:
            raise self._wrap("delete", e) from e
        logger.debug("Deleted movie %s (deleted_count=%d)", movie_id, result.deleted_count)

    async def ping(self) -> bool:
        try:
            await self.collection.database.command("ping")
        except PyMongoError as e:
            logger.warning("MongoDB ping failed: %s", e)
            return False
        return True
