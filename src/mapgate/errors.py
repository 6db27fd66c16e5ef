"""Exception types raised or carried by mapgate."""
from __future__ import annotations

from typing import Any, Optional


class MapgateError(Exception):
    """Base class for every mapgate exception."""


class InvalidDescriptor(MapgateError, ValueError):
    """A location or filter value matches none of the accepted forms.

    Raised before any request is sent; the caller fixes the input.
    """

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__(message)
        self.value = value


class UnexpectedResponse(MapgateError):
    """The service answered, but with a body we cannot classify.

    Only ever used as the ``cause`` of a ``TransportFailure``.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
