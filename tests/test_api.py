"""Tests for the HTTP surface.

Tests cover:
- GET /pokemons (search, pagination, query-string fallbacks)
- GET /pokemons/{id} (neighbors, 404, 500)
- POST /pokemons (201, 400, 409)
- Static mounts, unmatched routes and unhandled errors
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from pokedex.main import create_app

from .conftest import SAMPLE_POKEMONS


# =============================================================================
# Listing
# =============================================================================


class TestListPokemons:
    def test_default_listing(self, client):
        response = client.get("/pokemons")

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == len(SAMPLE_POKEMONS)
        assert body["totalPokemons"] == len(SAMPLE_POKEMONS)
        assert body["data"][0] == SAMPLE_POKEMONS[0]

    def test_search_and_paginate(self, client):
        response = client.get("/pokemons", params={"search": "poison", "page": 2, "limit": 2})

        body = response.json()
        assert body["count"] == 1
        assert body["totalPokemons"] == 3
        assert body["data"][0]["name"] == "Gastly"

    @pytest.mark.parametrize("page,limit", [("abc", "2"), ("0", "2"), ("-4", "2")])
    def test_bad_page_falls_back_to_first(self, client, page, limit):
        response = client.get("/pokemons", params={"page": page, "limit": limit})

        assert response.status_code == 200
        assert [p["id"] for p in response.json()["data"]] == [1, 2]

    def test_no_data_is_500(self, client, db_path):
        db_path.write_text("", encoding="utf-8")

        response = client.get("/pokemons")

        assert response.status_code == 500
        assert response.text == "No Pokémon data available"


# =============================================================================
# Single record
# =============================================================================


class TestReadPokemon:
    def test_wraps_neighbors(self, client):
        response = client.get("/pokemons/1")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["pokemon"]["name"] == "Bulbasaur"
        assert data["previousPokemon"]["id"] == len(SAMPLE_POKEMONS)
        assert data["nextPokemon"]["id"] == 2

    def test_unknown_id_is_404(self, client):
        response = client.get("/pokemons/999")

        assert response.status_code == 404
        assert response.text == "Pokemon not found"

    def test_non_numeric_id_is_404(self, client):
        assert client.get("/pokemons/pikachu").status_code == 404

    def test_no_data_is_500(self, client, db_path):
        db_path.unlink()

        assert client.get("/pokemons/1").status_code == 500


# =============================================================================
# Creation
# =============================================================================


class TestCreatePokemon:
    def test_create_returns_201_and_is_readable(self, client):
        payload = {"name": "Eevee", "id": 133, "types": ["normal"], "url": "images/eevee.png"}

        response = client.post("/pokemons", json=payload)

        assert response.status_code == 201
        assert response.json() == payload
        fetched = client.get("/pokemons/133").json()["data"]["pokemon"]
        assert fetched == payload

    @pytest.mark.parametrize(
        "payload,message",
        [
            ({"name": "Eevee", "id": 133, "types": ["normal"]}, "Missing required data."),
            (
                {"name": "Eevee", "id": 133, "types": ["normal", "fire", "ice"], "url": "e.png"},
                "Pokémon can only have one or two types.",
            ),
            (
                {"name": "Eevee", "id": 133, "types": ["cosmic"], "url": "e.png"},
                "Pokémon's type is invalid.",
            ),
        ],
    )
    def test_invalid_payloads_are_400(self, client, payload, message):
        response = client.post("/pokemons", json=payload)

        assert response.status_code == 400
        assert response.text == message

    def test_non_object_body_is_400(self, client):
        response = client.post("/pokemons", json=["not", "an", "object"])

        assert response.status_code == 400

    def test_duplicate_is_409(self, client):
        response = client.post(
            "/pokemons",
            json={"name": "pikachu", "id": 600, "types": ["electric"], "url": "p.png"},
        )

        assert response.status_code == 409
        assert response.text == "The Pokémon already exists."


# =============================================================================
# Plumbing
# =============================================================================


class TestPlumbing:
    def test_health_check(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_serves_images(self, client):
        response = client.get("/pokemons/images/bulbasaur.png")

        assert response.status_code == 200
        assert response.content == b"\x89PNG fake bulbasaur"

    def test_serves_public_files(self, client):
        response = client.get("/files/readme.txt")

        assert response.status_code == 200
        assert response.text == "hello trainer"

    def test_unknown_path_is_404(self, client):
        response = client.get("/does/not/exist")

        assert response.status_code == 404
        assert response.text == "Path not found"

    def test_wrong_method_is_path_not_found(self, client):
        response = client.delete("/pokemons")

        assert response.status_code == 404
        assert response.text == "Path not found"

    def test_invalid_utf8_document_is_no_data(self, client, db_path):
        db_path.write_bytes(b'{"data": [\xff]}')

        response = client.get("/pokemons")

        assert response.status_code == 500
        assert response.text == "No Pokémon data available"

    def test_unhandled_error_is_500(self, client):
        with patch("pokedex.catalog.router.search_pokemons", side_effect=RuntimeError("boom")):
            response = client.get("/pokemons")

        assert response.status_code == 500
        assert response.text == "Internal Server Error"

    def test_cors_headers(self, client):
        response = client.get("/pokemons", headers={"Origin": "http://localhost:3000"})

        assert response.headers["access-control-allow-origin"] == "*"

    def test_app_uses_configured_store(self, settings):
        app = create_app(settings)

        assert app.state.store.path == settings.db_path
