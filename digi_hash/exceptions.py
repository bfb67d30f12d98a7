"""Digi Hash Exceptions."""
from .conf import SECRET_KEY_ENV


class DigiHashError(Exception):
    """Base class for Digi Hash errors."""


class SecretKeyNotFound(DigiHashError):
    """Raised when a transform is enabled but no secret key is configured."""

    def __init__(self, message: str = None):
        super().__init__(
            message or f"{SECRET_KEY_ENV} not found in environment variables"
        )
