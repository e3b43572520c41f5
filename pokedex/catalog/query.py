"""
Query and mutation logic over the catalog.

These functions are what the routes call. They take the store as an
argument, load the whole catalog on each call and never cache between
requests.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from ..errors import DuplicateError, NoDataError, NotFoundError
from .schemas import Pokemon, PokemonDetail, PokemonNeighbors, PokemonPage
from .store import CatalogStore
from .validation import validate_candidate


DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def _norm(s: Optional[str]) -> str:
    return (s or "").lower()


def _load_non_empty(store: CatalogStore) -> List[Pokemon]:
    pokemons = store.load()
    if not pokemons:
        raise NoDataError()
    return pokemons


def matches(pokemon: Pokemon, search: str) -> bool:
    """True if ``search`` is a substring of the name or of any type.

    ``search`` must already be lower-cased; the empty string matches
    every record.
    """
    if search in _norm(pokemon.name):
        return True
    return any(search in _norm(t) for t in pokemon.types)


def filter_pokemons(pokemons: List[Pokemon], search: str = "") -> List[Pokemon]:
    """Keep the records whose name or any type contains ``search``.

    Parameters
    ----------
    pokemons : List[Pokemon]
        The catalog, in stored order.
    search : str
        Case-insensitive substring. An empty string keeps every record.

    Returns
    -------
    List[Pokemon]
        Matching records in their original order.
    """
    needle = _norm(search)
    return [p for p in pokemons if matches(p, needle)]


def paginate(items: List[Pokemon], page: int, limit: int) -> List[Pokemon]:
    """Return the 1-indexed ``page`` of ``limit`` items; past the end is empty."""
    start = (page - 1) * limit
    end = start + limit
    return items[start:end]


def search_pokemons(
    store: CatalogStore,
    search: str = "",
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
) -> PokemonPage:
    """Filter the catalog by ``search`` and return one page of matches.

    ``totalPokemons`` is the number of matches before pagination, so it
    does not depend on ``page`` or ``limit``. A page past the end is an
    empty page, not an error.
    """
    filtered = filter_pokemons(_load_non_empty(store), search)
    page_items = paginate(filtered, page, limit)
    return PokemonPage(
        count=len(page_items),
        data=page_items,
        totalPokemons=len(filtered),
    )


def _find_by_id(pokemons: List[Pokemon], pokemon_id: int) -> Optional[Pokemon]:
    return next((p for p in pokemons if p.id == pokemon_id), None)


def get_pokemon(store: CatalogStore, pokemon_id: int) -> PokemonDetail:
    """Return one record together with its circular previous/next neighbors.

    Neighbors are computed on ids, not list positions: the catalog is
    assumed to hold ids ``1..N``, so ``1`` wraps back to ``N`` and ``N``
    wraps forward to ``1``. If the computed neighbor id does not exist
    (gaps left by hand-picked ids) the neighbor is ``None``.
    """
    pokemons = _load_non_empty(store)
    pokemon = _find_by_id(pokemons, pokemon_id)
    if pokemon is None:
        raise NotFoundError()

    total = len(pokemons)
    previous_id = total if pokemon_id == 1 else pokemon_id - 1
    next_id = 1 if pokemon_id == total else pokemon_id + 1

    return PokemonDetail(
        data=PokemonNeighbors(
            pokemon=pokemon,
            previousPokemon=_find_by_id(pokemons, previous_id),
            nextPokemon=_find_by_id(pokemons, next_id),
        )
    )


def create_pokemon(store: CatalogStore, payload: Mapping[str, Any]) -> Pokemon:
    """Validate ``payload``, reject duplicates, then append and persist it."""
    candidate = validate_candidate(payload)

    name = _norm(candidate.name)
    for existing in store.load():
        if existing.id == candidate.id or _norm(existing.name) == name:
            raise DuplicateError()

    return store.append(candidate)
