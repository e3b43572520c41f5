"""
Pydantic schema definitions for the catalog module.

The ``Pokemon`` model is the record persisted in the catalog document
and returned by every endpoint. ``PokemonPage`` and ``PokemonDetail``
mirror the JSON envelopes the front-end expects, which is why their
field names are camelCase rather than snake_case.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


# Closed vocabulary of elemental types. Membership checks are
# case-sensitive: ingestion lower-cases types, so stored records and
# valid candidates always use these exact spellings.
POKEMON_TYPES = frozenset(
    [
        "bug", "dragon", "fairy", "fire", "ghost",
        "ground", "normal", "psychic", "steel", "dark",
        "electric", "fighting", "flying", "grass", "ice",
        "poison", "rock", "water",
    ]
)

MAX_TYPES = 2


class Pokemon(BaseModel):
    """A single catalog entry.

    ``types`` holds one or two names from ``POKEMON_TYPES`` in the order
    they were declared (primary type first). ``url`` is the path of the
    image served under ``/pokemons/images``.
    """

    id: int = Field(gt=0)
    name: str = Field(min_length=1)
    types: List[str] = Field(min_length=1, max_length=MAX_TYPES)
    url: str


class PokemonPage(BaseModel):
    """Envelope returned by ``GET /pokemons``."""

    count: int
    data: List[Pokemon]
    totalPokemons: int


class PokemonNeighbors(BaseModel):
    pokemon: Pokemon
    previousPokemon: Optional[Pokemon] = None
    nextPokemon: Optional[Pokemon] = None


class PokemonDetail(BaseModel):
    """Envelope returned by ``GET /pokemons/{id}``."""

    data: PokemonNeighbors
