# pokedex/errors.py
"""
Error types for the Pokédex catalog.

Every error raised by the catalog carries the HTTP status code the API
layer should answer with, so routes never translate exceptions by hand:
``main.py`` installs a single handler for ``CatalogError`` that turns
``status_code`` and ``message`` into the response.
"""


class CatalogError(Exception):
    """Base exception for all catalog errors."""

    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message: str = ""):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(CatalogError):
    """A candidate record was rejected before touching the store."""

    status_code = 400
    default_message = "Invalid Pokémon data."


class MissingFieldError(ValidationError):
    default_message = "Missing required data."


class TooManyTypesError(ValidationError):
    default_message = "Pokémon can only have one or two types."


class InvalidTypeError(ValidationError):
    default_message = "Pokémon's type is invalid."


class InvalidIdError(ValidationError):
    default_message = "Pokémon's id must be a positive integer."


class DuplicateError(CatalogError):
    status_code = 409
    default_message = "The Pokémon already exists."


class NotFoundError(CatalogError):
    status_code = 404
    default_message = "Pokemon not found"


class NoDataError(CatalogError):
    status_code = 500
    default_message = "No Pokémon data available"


class StorageError(CatalogError):
    """The catalog document could not be written."""

    status_code = 500
    default_message = "Unable to persist the Pokémon catalog."


class IngestionError(CatalogError):
    """The raw dataset could not be turned into a catalog (offline only)."""

    default_message = "Unable to ingest the Pokémon dataset."
