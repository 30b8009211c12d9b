"""Exceptions raised by Monty Hall Lab."""


class InvalidArgumentError(ValueError):
    """Raised when a batch size, door index or game action is not valid."""
