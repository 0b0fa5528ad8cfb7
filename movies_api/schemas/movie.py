"""
Movies API — Pydantic Request/Response Schemas
================================================

What:  Pydantic models defining the movie record and the API error format,
       plus the conversion between the JSON shape and the MongoDB document.
How:   FastAPI decodes request bodies into MovieIn, serializes Movie for
       responses, and generates OpenAPI docs from both.

Shapes:
    JSON (transport):   {"id": "...", "name": "...", "cover_image": "...", "description": "..."}
    Document (storage): {"_id": "...", "name": "...", "cover_image": "...", "description": "..."}
"""

from typing import Any, Dict, Optional

from bson import ObjectId
from pydantic import BaseModel, Field


def new_movie_id() -> str:
    """Mints a fresh 24-hex-character object id string for a new movie."""
    return str(ObjectId())


# ══════════════════════════════════════════════════════════════════════════
# Record Models
# ══════════════════════════════════════════════════════════════════════════


class MovieIn(BaseModel):
    """
    What:  Request body for POST /movies and PUT /movies/{id}.

    Every field defaults to an empty string, so a partial body decodes
    cleanly. On PUT that partial body replaces the stored document, which
    resets any omitted field to "".

    An `id` sent by the client is ignored: unknown keys are dropped and the
    server decides the id (fresh on create, path id on update).
    """
    name: str = Field(default="", description="Movie title")
    cover_image: str = Field(default="", description="Cover image URL (not validated)")
    description: str = Field(default="", description="Free-text description")

    model_config = {
        "extra": "ignore",
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Inception",
                    "cover_image": "https://x/y.jpg",
                    "description": "Sci-fi thriller",
                }
            ]
        },
    }

    def with_id(self, movie_id: str) -> "Movie":
        """Builds the full record for this payload under the given id."""
        return Movie(id=movie_id, **self.model_dump())


class Movie(MovieIn):
    """
    What:  The stored and returned movie record.
    Who:   Returned by every /movies endpoint except DELETE.
    """
    id: str = Field(description="Server-assigned unique identifier")

    def to_document(self) -> Dict[str, Any]:
        """Storage shape: `id` becomes the `_id` primary key."""
        doc = self.model_dump(exclude={"id"})
        doc["_id"] = self.id
        return doc

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Movie":
        """
        Decode a MongoDB document.

        `_id` may be an ObjectId for documents inserted by other tools; it is
        rendered as its hex string. A stray `id` key is ignored, and missing
        or null fields fall back to "".

        Raises:
            pydantic.ValidationError: a field holds a non-string value.
        """
        data = {
            k: ("" if v is None else v)
            for k, v in doc.items()
            if k not in ("_id", "id")
        }
        return cls(id=str(doc["_id"]), **data)


class DeleteResponse(BaseModel):
    """Body of a DELETE /movies/{id} response."""
    result: str = Field(default="success")


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Error envelope returned for every non-2xx response.

    Example:
        {
            "error": "not_found",
            "message": "Movie not found",
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for liveness/readiness probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="MongoDB connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
