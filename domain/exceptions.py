# domain/exceptions.py
from __future__ import annotations


class RequestBuilderError(Exception):
    pass


class InvalidMethodError(RequestBuilderError, ValueError):
    pass


class EncodingError(RequestBuilderError):
    """Raised when a payload cannot be encoded for the selected format."""
