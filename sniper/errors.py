"""
Domain exceptions raised by the sniper services.

The API layer translates these into HTTP responses (see api/routers/).
"""


class NotFoundError(LookupError):
    """Raised when a recipe or shopping list does not exist."""


class ScrapeError(IOError):
    """Raised when a recipe page cannot be fetched (network failure or HTTP >= 400)."""
