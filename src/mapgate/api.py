"""FastAPI front for mapgate.

Every endpoint runs one client operation and maps the Result onto HTTP:

    Success           -> 200, service body unchanged
    StatusFailure     -> 422, {"status": ..., "error_message": ...}
    TransportFailure  -> 502, {"error": ...}
    InvalidDescriptor -> 400, {"detail": ...}
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from mapgate.client import MapsClient, get_client
from mapgate.core.models import Result, StatusFailure, Success
from mapgate.errors import InvalidDescriptor

log = logging.getLogger(__name__)

app = FastAPI(title="mapgate", version="0.1.0")

# A location is free text ("Toronto", "place_id:...", "40.7,-73.9") or a [lat, lon] pair.
Location = Union[str, Tuple[float, float]]


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class DirectionsRequest(BaseModel):
    origin: Location
    destination: Location
    waypoints: Optional[List[Location]] = None
    options: Dict[str, Any] = Field(default_factory=dict)


class DistanceRequest(BaseModel):
    origins: List[Location] = Field(..., min_length=1)
    destinations: List[Location] = Field(..., min_length=1)
    options: Dict[str, Any] = Field(default_factory=dict)


class GeocodeRequest(BaseModel):
    address: Optional[str] = None
    latlng: Optional[Tuple[float, float]] = None
    place_id: Optional[str] = None
    components: Optional[Dict[str, str]] = None
    options: Dict[str, Any] = Field(default_factory=dict)


class AutocompleteRequest(BaseModel):
    input: str
    options: Dict[str, Any] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Result mapping
# ---------------------------------------------------------------------------

def _respond(result: Result) -> JSONResponse:
    if isinstance(result, Success):
        return JSONResponse(status_code=200, content=result.payload)
    if isinstance(result, StatusFailure):
        return JSONResponse(
            status_code=422,
            content={"status": result.code, "error_message": result.message},
        )
    return JSONResponse(status_code=502, content={"error": result.to_dict()["error"]})


@app.exception_handler(InvalidDescriptor)
async def _invalid_descriptor(request: Request, exc: InvalidDescriptor) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/directions")
def directions(req: DirectionsRequest, client: MapsClient = Depends(get_client)):
    options = dict(req.options)
    if req.waypoints:
        options["waypoints"] = req.waypoints
    return _respond(client.directions(req.origin, req.destination, **options))


@app.post("/distance")
def distance(req: DistanceRequest, client: MapsClient = Depends(get_client)):
    return _respond(client.distance(req.origins, req.destinations, **req.options))


@app.post("/geocode")
def geocode(req: GeocodeRequest, client: MapsClient = Depends(get_client)):
    options = dict(req.options)
    if req.components and (req.latlng is not None or req.place_id is not None):
        raise InvalidDescriptor("components only apply to forward geocoding")
    if req.latlng is not None:
        value: Any = req.latlng
    elif req.place_id is not None:
        value = ("place_id", req.place_id)
    elif req.address is not None:
        value = req.address
        if req.components:
            options["components"] = req.components
    elif req.components:
        value = req.components
    else:
        raise InvalidDescriptor("one of address, latlng, place_id or components is required")
    return _respond(client.geocode(value, **options))


@app.post("/place/autocomplete")
def place_autocomplete(req: AutocompleteRequest, client: MapsClient = Depends(get_client)):
    return _respond(client.place_autocomplete(req.input, **req.options))


@app.post("/place/queryautocomplete")
def place_query(req: AutocompleteRequest, client: MapsClient = Depends(get_client)):
    return _respond(client.place_query(req.input, **req.options))


@app.get("/raw/{endpoint:path}")
def raw(endpoint: str, request: Request, client: MapsClient = Depends(get_client)):
    return _respond(client.get(endpoint, dict(request.query_params)))
