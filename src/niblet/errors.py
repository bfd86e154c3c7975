"""Error types shared across services and the HTTP layer."""


class InvalidInputError(ValueError):
    """Raised when caller-supplied input is missing, malformed or out of range."""
