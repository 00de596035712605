class InvalidInputError(ValueError):
    """Caller supplied something a run cannot start from (e.g. no source file)."""


class InvalidArgumentError(ValueError):
    """Programming error: an argument is outside its allowed range."""
