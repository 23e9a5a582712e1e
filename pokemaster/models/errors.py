"""
Error types raised by the store and the catalog client.

Every error carries a human-readable message; the API returns that message
as the response detail without any structured error code.
"""


class PokeMasterError(Exception):
    """Base class for all application errors."""

    pass


class ConfigurationError(PokeMasterError):
    """Raised when the application-data directory cannot be resolved or created."""

    pass


class StoreError(PokeMasterError):
    """Raised when the database file cannot be opened or its schema created."""

    pass


class CatalogError(PokeMasterError):
    """Raised when fetching data from the Pokémon TCG API fails."""

    pass
