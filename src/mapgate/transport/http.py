from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

import requests

from mapgate.core.models import RawOutcome, RawResponse, TransportError
from mapgate.transport.base import Transport

log = logging.getLogger(__name__)


def build_url(base_url: str, endpoint: str) -> str:
    return f"{base_url.rstrip('/')}/{endpoint.strip('/')}/json"


@dataclass
class HTTPClient(Transport):
    """Single-shot GET against ``<base_url>/<endpoint>/json``.

    Never raises for network or decode problems; those come back as
    ``TransportError``. No retries.
    """

    user_agent: str
    timeout_s: float = 10

    def __post_init__(self) -> None:
        self.s = requests.Session()
        self.s.headers.update(
            {
                "User-Agent": self.user_agent,
                "Accept": "application/json",
            }
        )

    def get(
        self,
        base_url: str,
        endpoint: str,
        params: Mapping[str, str],
        timeout_s: Optional[float] = None,
    ) -> RawOutcome:
        url = build_url(base_url, endpoint)
        timeout = timeout_s if timeout_s is not None else self.timeout_s
        log.debug("GET %s params=%s", url, sorted(k for k in params if k != "key"))
        try:
            r = self.s.get(url, params=dict(params), timeout=timeout)
        except requests.RequestException as e:
            return TransportError(e)

        try:
            body = r.json()
        except ValueError as e:
            return TransportError(e)

        return RawResponse(r.status_code, body)

    def close(self) -> None:
        self.s.close()
