from __future__ import annotations

import logging
from typing import Mapping

from mapgate.core.models import (
    RawOutcome,
    RawResponse,
    Result,
    StatusFailure,
    Success,
    TransportError,
    TransportFailure,
)
from mapgate.errors import UnexpectedResponse

log = logging.getLogger(__name__)

STATUS_OK = "OK"

# Known envelope statuses; anything else is still carried through verbatim.
KNOWN_STATUSES = (
    "OK",
    "NOT_FOUND",
    "ZERO_RESULTS",
    "MAX_WAYPOINTS_EXCEEDED",
    "MAX_ROUTE_LENGTH_EXCEEDED",
    "INVALID_REQUEST",
    "OVER_DAILY_LIMIT",
    "OVER_QUERY_LIMIT",
    "REQUEST_DENIED",
    "UNKNOWN_ERROR",
)


def _is_success_code(status_code: int) -> bool:
    return 200 <= status_code < 300


def classify(outcome: RawOutcome) -> Result:
    """Map a dispatcher outcome onto Success / StatusFailure / TransportFailure."""
    if isinstance(outcome, TransportError):
        return TransportFailure(outcome.cause)

    if not isinstance(outcome, RawResponse):
        raise TypeError(f"not a dispatcher outcome: {outcome!r}")

    body = outcome.body
    if not isinstance(body, Mapping):
        return TransportFailure(
            UnexpectedResponse(
                f"expected a JSON object, got {type(body).__name__}",
                status_code=outcome.status_code,
                body=body,
            )
        )

    status = body.get("status")
    if status is None:
        # endpoints without a status envelope: trust the HTTP status
        if _is_success_code(outcome.status_code):
            return Success(body)
        return TransportFailure(
            UnexpectedResponse(
                f"HTTP {outcome.status_code} without a status field",
                status_code=outcome.status_code,
                body=body,
            )
        )

    if status == STATUS_OK:
        return Success(body)

    if status not in KNOWN_STATUSES:
        log.debug("unrecognised status %r passed through", status)
    return StatusFailure(str(status), body.get("error_message"))
