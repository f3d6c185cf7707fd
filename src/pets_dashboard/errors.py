"""
Exceptions raised by the Petfinder client layer.

- AuthenticationError: the token request failed
- FetchError: a data request failed
- RequestCancelled: the view that issued the request went away
"""
from __future__ import annotations
from typing import Optional


class PetfinderError(Exception):
    """Base class for errors that are shown to the user."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status


class AuthenticationError(PetfinderError):
    pass


class FetchError(PetfinderError):
    pass


class RequestCancelled(Exception):
    """Raised when a request's cancellation signal fires before it completes."""


def status_of(exc: Exception) -> Optional[int]:
    """HTTP status carried by an httpx error, if any."""
    response = getattr(exc, "response", None)
    return getattr(response, "status_code", None)
