"""
Catalog package for the Pokédex API.

This package holds the record schemas, the validation rules for new
records, the JSON-backed store and the query functions, plus the
``/pokemons`` routes that expose them. The store sits behind the
``CatalogStore`` protocol, so a database-backed implementation can be
dropped in without changing the query code.
"""

from .router import router as catalog_router  # noqa: F401
