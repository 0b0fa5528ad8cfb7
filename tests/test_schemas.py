"""Tests for the movie record model and its storage conversion."""

import re

import pytest
from bson import ObjectId
from pydantic import ValidationError

from movies_api.schemas.movie import Movie, MovieIn, new_movie_id


def test_new_movie_id_is_object_id_hex():
    movie_id = new_movie_id()

    assert re.fullmatch(r"[0-9a-f]{24}", movie_id)
    assert ObjectId.is_valid(movie_id)


def test_payload_drops_client_id():
    payload = MovieIn.model_validate({"id": "client-id", "name": "Heat"})

    assert "id" not in payload.model_dump()
    assert payload.with_id("server-id").id == "server-id"


def test_to_document_uses_primary_key():
    movie = Movie(id="abc", name="Ran", cover_image="", description="Epic")

    assert movie.to_document() == {"_id": "abc", "name": "Ran", "cover_image": "", "description": "Epic"}


def test_from_document_ignores_unknown_fields():
    movie = Movie.from_document({"_id": ObjectId("65f1c0ffee65f1c0ffee65f1"), "name": "Ran", "year": 1985})

    assert movie == Movie(id="65f1c0ffee65f1c0ffee65f1", name="Ran")


def test_from_document_ignores_stray_id_key():
    movie = Movie.from_document({"_id": "a" * 24, "id": "legacy", "name": "Alien"})

    assert movie.id == "a" * 24
    assert movie.name == "Alien"


def test_from_document_treats_null_fields_as_empty():
    movie = Movie.from_document({"_id": "a" * 24, "name": None, "description": None})

    assert movie.name == ""
    assert movie.description == ""


def test_from_document_rejects_non_string_field():
    with pytest.raises(ValidationError):
        Movie.from_document({"_id": "a" * 24, "name": 1985})
