"""Location/filter descriptor parsing and wire encoding.

Accepted raw forms for a location:

    "Toronto"                           -> Address
    "place_id:ChIJ..."                  -> PlaceId
    "enc:_p~iF~ps|U"                    -> EncodedPolyline (waypoints only)
    (43.65, -79.38) / [43.65, -79.38]   -> Coordinate
    ("place_id", "ChIJ...")             -> PlaceId
    ("enc", "_p~iF~ps|U")               -> EncodedPolyline (waypoints only)

Descriptor instances are accepted as-is. Anything else raises
``InvalidDescriptor``.
"""
from __future__ import annotations

from decimal import Decimal
from numbers import Real
from typing import Any, Iterable, Mapping, Tuple

from mapgate.core.models import (
    Address,
    Coordinate,
    EncodedPolyline,
    LocationDescriptor,
    PlaceId,
)
from mapgate.errors import InvalidDescriptor

PLACE_ID_PREFIX = "place_id:"
POLYLINE_PREFIX = "enc:"

_PLACE_ID_TAG = "place_id"
_POLYLINE_TAG = "enc"


def _is_number(v: Any) -> bool:
    # bool is an int subclass; True/False are never coordinates
    return isinstance(v, Real) and not isinstance(v, bool)


def is_coordinate_pair(value: Any) -> bool:
    return (
        isinstance(value, (tuple, list))
        and len(value) == 2
        and _is_number(value[0])
        and _is_number(value[1])
    )


def _is_tagged(value: Any) -> bool:
    # tagged forms are tuples only; lists are always lists of locations
    return (
        isinstance(value, tuple)
        and len(value) == 2
        and value[0] in (_PLACE_ID_TAG, _POLYLINE_TAG)
        and isinstance(value[1], str)
    )


def _is_single(value: Any) -> bool:
    """True when *value* is one location rather than a list of them."""
    if isinstance(value, (str, Address, Coordinate, PlaceId, EncodedPolyline)):
        return True
    return is_coordinate_pair(value) or _is_tagged(value)


def _checked(descriptor: LocationDescriptor) -> LocationDescriptor:
    """Reject descriptor instances whose fields have the wrong type."""
    if isinstance(descriptor, Coordinate):
        ok = _is_number(descriptor.lat) and _is_number(descriptor.lon)
    elif isinstance(descriptor, Address):
        ok = isinstance(descriptor.text, str)
    elif isinstance(descriptor, PlaceId):
        ok = isinstance(descriptor.id, str)
    elif isinstance(descriptor, EncodedPolyline):
        ok = isinstance(descriptor.text, str)
    else:
        ok = False
    if not ok:
        raise InvalidDescriptor(f"malformed location descriptor: {descriptor!r}", descriptor)
    return descriptor


def _format_number(v: Any) -> str:
    if isinstance(v, int):
        return str(v)
    # repr gives the shortest round-trip form and ignores locale
    text = repr(float(v))
    if "e" in text or "E" in text:
        # no exponent notation on the wire
        text = format(Decimal(text), "f")
    return text


def parse_location(value: Any, allow_polyline: bool = False) -> LocationDescriptor:
    """Turn a raw location value into exactly one descriptor variant."""
    if isinstance(value, (Address, Coordinate, PlaceId)):
        return _checked(value)

    if isinstance(value, EncodedPolyline):
        if not allow_polyline:
            raise InvalidDescriptor("encoded polylines are only accepted as waypoints", value)
        return _checked(value)

    if isinstance(value, str):
        if value.startswith(PLACE_ID_PREFIX):
            return PlaceId(value[len(PLACE_ID_PREFIX):])
        if value.startswith(POLYLINE_PREFIX):
            if not allow_polyline:
                raise InvalidDescriptor("encoded polylines are only accepted as waypoints", value)
            return EncodedPolyline(value[len(POLYLINE_PREFIX):])
        return Address(value)

    if is_coordinate_pair(value):
        return Coordinate(value[0], value[1])

    if _is_tagged(value):
        tag, text = value
        if tag == _PLACE_ID_TAG:
            return PlaceId(text)
        if not allow_polyline:
            raise InvalidDescriptor("encoded polylines are only accepted as waypoints", value)
        return EncodedPolyline(text)

    raise InvalidDescriptor(f"unsupported location value: {value!r}", value)


def encode_location(descriptor: LocationDescriptor) -> str:
    """Inline wire form, as used inside origin/destination/waypoints."""
    if not isinstance(descriptor, (Address, Coordinate, PlaceId, EncodedPolyline)):
        raise InvalidDescriptor(f"not a location descriptor: {descriptor!r}", descriptor)
    _checked(descriptor)
    if isinstance(descriptor, Address):
        return descriptor.text
    if isinstance(descriptor, Coordinate):
        return f"{_format_number(descriptor.lat)},{_format_number(descriptor.lon)}"
    if isinstance(descriptor, PlaceId):
        return f"{PLACE_ID_PREFIX}{descriptor.id}"
    # the service expects a colon after an inline polyline
    text = descriptor.text
    if not text.endswith(":"):
        text += ":"
    return f"{POLYLINE_PREFIX}{text}"


def encode_inline(value: Any) -> str:
    return encode_location(parse_location(value))


def encode_waypoints(values: Any) -> str:
    """Encode and pipe-join waypoints, keeping caller order and duplicates.

    A plain string is one waypoint; it is not split on ``|`` because
    encoded polylines may contain that character.
    """
    if _is_single(values):
        values = [values]
    if not isinstance(values, Iterable) or isinstance(values, Mapping):
        raise InvalidDescriptor(f"waypoints must be a list of locations: {values!r}", values)

    encoded = [encode_location(parse_location(v, allow_polyline=True)) for v in values]
    if not encoded:
        raise InvalidDescriptor("waypoints list is empty", values)
    return "|".join(encoded)


def encode_locations(values: Any) -> str:
    """One location or a list of them, pipe-joined (distance matrix origins)."""
    if _is_single(values):
        return encode_inline(values)
    if not isinstance(values, Iterable) or isinstance(values, Mapping):
        raise InvalidDescriptor(f"unsupported location value: {values!r}", values)

    encoded = [encode_inline(v) for v in values]
    if not encoded:
        raise InvalidDescriptor("location list is empty", values)
    return "|".join(encoded)


def encode_components(components: Any) -> str:
    """Render a component filter as ``key:value|key:value`` in iteration order."""
    if isinstance(components, str):
        return components
    if not isinstance(components, Mapping):
        raise InvalidDescriptor(f"components must be a mapping: {components!r}", components)
    return "|".join(f"{k}:{v}" for k, v in components.items())


def encode_geocode_input(value: Any) -> Tuple[str, str]:
    """Pick the geocode parameter for *value* and encode it.

    Geocoding has a dedicated ``place_id`` parameter, so place ids travel
    bare there instead of with the inline prefix.
    """
    if isinstance(value, Mapping):
        return "components", encode_components(value)

    descriptor = parse_location(value)
    if isinstance(descriptor, Coordinate):
        return "latlng", encode_location(descriptor)
    if isinstance(descriptor, PlaceId):
        return "place_id", descriptor.id
    return "address", descriptor.text
