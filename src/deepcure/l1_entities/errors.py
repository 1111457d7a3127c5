"""Domain error types."""


class EmptyQueryError(ValueError):
    """Raised when a query or text to simplify is empty after trimming."""
