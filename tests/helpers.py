from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

from mapgate.core.models import RawOutcome, RawResponse
from mapgate.transport.base import Transport


class FakeTransport(Transport):
    """Records every request and answers with a canned outcome."""

    def __init__(self, outcome: Optional[RawOutcome] = None):
        self.outcome = outcome if outcome is not None else RawResponse(200, {"status": "OK"})
        self.calls: List[Tuple[str, str, Dict[str, str]]] = []

    def get(self, base_url: str, endpoint: str, params: Mapping[str, str]) -> RawOutcome:
        self.calls.append((base_url, endpoint, dict(params)))
        return self.outcome

    @property
    def last_endpoint(self) -> str:
        return self.calls[-1][1]

    @property
    def last_params(self) -> Dict[str, str]:
        return self.calls[-1][2]


def ok_body(**extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"status": "OK"}
    body.update(extra)
    return body
