"""Shared fixtures: a catalog document on disk, settings and a test client."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from pokedex.catalog.store import JsonCatalogStore
from pokedex.config import Settings
from pokedex.main import create_app


SAMPLE_POKEMONS = [
    {"id": 1, "name": "Bulbasaur", "types": ["grass", "poison"], "url": "images/bulbasaur.png"},
    {"id": 2, "name": "Ivysaur", "types": ["grass", "poison"], "url": "images/ivysaur.png"},
    {"id": 3, "name": "Charmander", "types": ["fire"], "url": "images/charmander.png"},
    {"id": 4, "name": "Charizard", "types": ["fire", "flying"], "url": "images/charizard.png"},
    {"id": 5, "name": "Squirtle", "types": ["water"], "url": "images/squirtle.png"},
    {"id": 6, "name": "Pikachu", "types": ["electric"], "url": "images/pikachu.png"},
    {"id": 7, "name": "Gastly", "types": ["ghost", "poison"], "url": "images/gastly.png"},
]


def write_db(path: Path, pokemons) -> Path:
    path.write_text(json.dumps({"data": pokemons}), encoding="utf-8")
    return path


@pytest.fixture
def db_path(tmp_path) -> Path:
    return write_db(tmp_path / "db.json", SAMPLE_POKEMONS)


@pytest.fixture
def store(db_path) -> JsonCatalogStore:
    return JsonCatalogStore(db_path)


@pytest.fixture
def empty_store(tmp_path) -> JsonCatalogStore:
    return JsonCatalogStore(tmp_path / "missing.json")


@pytest.fixture
def settings(tmp_path, db_path) -> Settings:
    images_dir = tmp_path / "images"
    images_dir.mkdir()
    (images_dir / "bulbasaur.png").write_bytes(b"\x89PNG fake bulbasaur")
    public_dir = tmp_path / "public"
    public_dir.mkdir()
    (public_dir / "readme.txt").write_text("hello trainer", encoding="utf-8")
    return Settings(
        db_path=db_path,
        images_dir=images_dir,
        public_dir=public_dir,
        log_level="DEBUG",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)
