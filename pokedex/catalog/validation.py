"""
Validation of candidate records submitted through ``POST /pokemons``.

Rules are checked in a fixed order and the first failure wins, so a
payload with both a missing ``url`` and three types is reported as
missing data.
"""

from typing import Any, Mapping

from ..errors import (
    InvalidIdError,
    InvalidTypeError,
    MissingFieldError,
    TooManyTypesError,
    ValidationError,
)
from .schemas import MAX_TYPES, POKEMON_TYPES, Pokemon


REQUIRED_FIELDS = ("name", "id", "types", "url")


def _parse_id(raw: Any) -> int:
    """Accept ``7`` or ``"7"``; reject booleans, floats and anything <= 0."""
    if isinstance(raw, bool):
        raise InvalidIdError()
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str) and raw.strip().isdigit():
        value = int(raw.strip())
    else:
        raise InvalidIdError()
    if value <= 0:
        raise InvalidIdError()
    return value


def validate_candidate(payload: Mapping[str, Any]) -> Pokemon:
    """Turn a raw request body into a ``Pokemon`` or raise a ValidationError."""
    if not isinstance(payload, Mapping):
        raise MissingFieldError()

    for field in REQUIRED_FIELDS:
        if not payload.get(field):
            raise MissingFieldError()

    types = payload["types"]
    if not isinstance(types, list):
        raise InvalidTypeError()
    if len(types) > MAX_TYPES:
        raise TooManyTypesError()
    if any(not isinstance(t, str) or t not in POKEMON_TYPES for t in types):
        raise InvalidTypeError()

    name = payload["name"]
    url = payload["url"]
    if not isinstance(name, str) or not isinstance(url, str):
        raise ValidationError("Pokémon's name and url must be strings.")

    return Pokemon(id=_parse_id(payload["id"]), name=name, types=list(types), url=url)
