"""
Route definitions for the catalogue API.

Endpoints under /pokemons:
- GET  /pokemons                : search + paginate the catalog
- GET  /pokemons/{pokemon_id}   : one pokemon with previous/next neighbors
- POST /pokemons                : create a pokemon

Images are served under /pokemons/images by a static mount registered in
``main.py``. Catalog errors are raised as-is and rendered by the
application's ``CatalogError`` handler.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, Request

from ..errors import NotFoundError
from .query import DEFAULT_LIMIT, DEFAULT_PAGE, create_pokemon, get_pokemon, search_pokemons
from .schemas import Pokemon, PokemonDetail, PokemonPage
from .store import CatalogStore


router = APIRouter(prefix="/pokemons", tags=["pokemons"])


def get_store(request: Request) -> CatalogStore:
    return request.app.state.store


def _positive_int(raw: Optional[str], default: int) -> int:
    """Loose query-string parsing: bad, zero or negative values fall back."""
    try:
        value = int((raw or "").strip())
    except ValueError:
        return default
    return value if value > 0 else default


@router.get("", response_model=PokemonPage)
def list_pokemons(
    search: Optional[str] = Query(default=None, description="Substring of name or type"),
    page: Optional[str] = Query(default=None, description="Page number (1-indexed)"),
    limit: Optional[str] = Query(default=None, description="Page size"),
    store: CatalogStore = Depends(get_store),
) -> PokemonPage:
    return search_pokemons(
        store,
        search=search or "",
        page=_positive_int(page, DEFAULT_PAGE),
        limit=_positive_int(limit, DEFAULT_LIMIT),
    )


@router.get("/{pokemon_id}", response_model=PokemonDetail)
def read_pokemon(pokemon_id: str, store: CatalogStore = Depends(get_store)) -> PokemonDetail:
    try:
        parsed_id = int(pokemon_id)
    except ValueError:
        raise NotFoundError()
    return get_pokemon(store, parsed_id)


@router.post("", response_model=Pokemon, status_code=201)
def add_pokemon(
    payload: Dict[str, Any] = Body(...),
    store: CatalogStore = Depends(get_store),
) -> Pokemon:
    return create_pokemon(store, payload)
