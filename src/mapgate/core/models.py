from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union


# ── Location descriptors ────────────────────────────────────────────────

@dataclass(frozen=True)
class Address:
    """Free text; the service geocodes it."""
    text: str


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lon: float


@dataclass(frozen=True)
class PlaceId:
    id: str


@dataclass(frozen=True)
class EncodedPolyline:
    """Google encoded polyline, only valid as a waypoint."""
    text: str


LocationDescriptor = Union[Address, Coordinate, PlaceId, EncodedPolyline]


# ── Raw dispatcher outcomes ─────────────────────────────────────────────

@dataclass(frozen=True)
class RawResponse:
    status_code: int
    body: Any


@dataclass(frozen=True)
class TransportError:
    cause: BaseException


RawOutcome = Union[RawResponse, TransportError]


# ── Results ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Success:
    payload: Dict[str, Any]

    @property
    def ok(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": "success", "payload": self.payload}


@dataclass(frozen=True)
class StatusFailure:
    """The service accepted the request but reported a non-OK status.

    ``code`` is the status string exactly as the service sent it.
    ``message`` is the optional ``error_message`` from the same body.
    """
    code: str
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": "status_failure", "status": self.code, "error_message": self.message}


@dataclass(frozen=True)
class TransportFailure:
    cause: BaseException

    @property
    def ok(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": "transport_failure", "error": f"{type(self.cause).__name__}: {self.cause}"}


Result = Union[Success, StatusFailure, TransportFailure]
