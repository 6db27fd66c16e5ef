"""Parameter merging with an explicit precedence rule.

    required  >  optional (caller keywords)  >  defaults (configuration)

Required entries come first in the result, then caller options in the
order supplied, then whatever defaults were not already given.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from mapgate.core.descriptors import encode_inline, is_coordinate_pair
from mapgate.core.models import Address, Coordinate, PlaceId
from mapgate.errors import InvalidDescriptor

log = logging.getLogger(__name__)


def to_wire(value: Any) -> str:
    """Stringify one parameter value the way the service expects it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, datetime):
        # departure_time / arrival_time are epoch seconds
        return str(int(value.timestamp()))
    if isinstance(value, (Address, Coordinate, PlaceId)) or is_coordinate_pair(value):
        # one location, e.g. a bounds corner or a location bias
        return encode_inline(value)
    if isinstance(value, (list, tuple)):
        return "|".join(to_wire(v) for v in value)
    return str(value)


def merge_params(
    required: Mapping[str, Any],
    optional: Optional[Mapping[str, Any]] = None,
    defaults: Optional[Mapping[str, Any]] = None,
) -> Dict[str, str]:
    out: Dict[str, str] = {}

    for k, v in required.items():
        if v is None:
            raise InvalidDescriptor(f"required parameter '{k}' is missing", v)
        out[k] = to_wire(v)

    for k, v in (optional or {}).items():
        if v is None:
            continue
        if k in required:
            log.debug("option '%s' shadowed by required parameter", k)
            continue
        out[k] = to_wire(v)

    for k, v in (defaults or {}).items():
        if v is None or k in out:
            continue
        out[k] = to_wire(v)

    return out
