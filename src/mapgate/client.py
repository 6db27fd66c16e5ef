"""Google Maps operations: encode, merge, dispatch, classify.

Each operation takes its required arguments positionally and any other
Google parameter as a keyword option::

    client = MapsClient()
    result = client.directions("Toronto", "Montreal", mode="bicycling", avoid="highways")
    if result.ok:
        routes = result.payload["routes"]

Every call returns a ``Result`` (``Success``, ``StatusFailure`` or
``TransportFailure``). Only ``InvalidDescriptor`` is raised, and always
before anything is sent.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from mapgate.config import Settings
from mapgate.core.classify import classify
from mapgate.core.descriptors import (
    encode_components,
    encode_geocode_input,
    encode_inline,
    encode_locations,
    encode_waypoints,
)
from mapgate.core.models import Result
from mapgate.core.params import merge_params
from mapgate.transport.base import Transport

log = logging.getLogger(__name__)

DIRECTIONS = "directions"
DISTANCE_MATRIX = "distancematrix"
GEOCODE = "geocode"
PLACE_AUTOCOMPLETE = "place/autocomplete"
PLACE_QUERY = "place/queryautocomplete"


def _encode_options(options: Dict[str, Any]) -> Dict[str, Any]:
    """Encode structured option values that have a descriptor form."""
    out = dict(options)
    if out.get("waypoints") is not None:
        out["waypoints"] = encode_waypoints(out["waypoints"])
    if out.get("components") is not None:
        out["components"] = encode_components(out["components"])
    if out.get("location") is not None and not isinstance(out["location"], str):
        out["location"] = encode_inline(out["location"])
    return out


class MapsClient:
    def __init__(self, settings: Optional[Settings] = None, transport: Optional[Transport] = None):
        self.settings = settings if settings is not None else Settings()
        if transport is None:
            from mapgate.transport.http import HTTPClient

            transport = HTTPClient(
                user_agent=self.settings.user_agent,
                timeout_s=self.settings.timeout_s,
            )
        self.transport = transport

    def _call(self, endpoint: str, required: Mapping[str, Any], options: Dict[str, Any]) -> Result:
        params = merge_params(required, _encode_options(options), self.settings.default_params())
        return self._dispatch(endpoint, params)

    def _dispatch(self, endpoint: str, params: Dict[str, str]) -> Result:
        outcome = self.transport.get(self.settings.base_url, endpoint, params)
        result = classify(outcome)
        log.debug("%s -> %s", endpoint, type(result).__name__)
        return result

    # ---------- Endpoint operations ----------

    def directions(self, origin: Any, destination: Any, /, **options: Any) -> Result:
        required = {
            "origin": encode_inline(origin),
            "destination": encode_inline(destination),
        }
        return self._call(DIRECTIONS, required, options)

    def distance(self, origins: Any, destinations: Any, /, **options: Any) -> Result:
        required = {
            "origins": encode_locations(origins),
            "destinations": encode_locations(destinations),
        }
        return self._call(DISTANCE_MATRIX, required, options)

    def geocode(self, value: Any, /, **options: Any) -> Result:
        """Forward, reverse, place-id or component-filter geocoding.

        The parameter sent depends on *value*: a coordinate pair becomes
        ``latlng``, a place id becomes ``place_id``, a mapping becomes
        ``components`` and any other string becomes ``address``.
        """
        name, wire = encode_geocode_input(value)
        return self._call(GEOCODE, {name: wire}, options)

    def place_autocomplete(self, input: str, /, **options: Any) -> Result:
        return self._call(PLACE_AUTOCOMPLETE, {"input": input}, options)

    def place_query(self, input: str, /, **options: Any) -> Result:
        return self._call(PLACE_QUERY, {"input": input}, options)

    # ---------- Raw passthrough ----------

    def get(self, endpoint: str, params: Optional[Mapping[str, Any]] = None, /, **options: Any) -> Result:
        """Direct request to any endpoint; no descriptor encoding.

        *params* and keyword *options* are merged (keywords win) over the
        configuration defaults.
        """
        caller: Dict[str, Any] = dict(params or {})
        caller.update(options)
        merged = merge_params({}, caller, self.settings.default_params())
        return self._dispatch(endpoint, merged)


_default_client: Optional[MapsClient] = None


def get_client() -> MapsClient:
    """Lazy shared client built from the module-level settings."""
    global _default_client
    if _default_client is None:
        from mapgate.config import settings

        _default_client = MapsClient(settings=settings)
    return _default_client
