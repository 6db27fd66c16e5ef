from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping

from mapgate.core.models import RawOutcome


class Transport(ABC):
    """Send one GET to ``endpoint`` and report what came back."""

    @abstractmethod
    def get(self, base_url: str, endpoint: str, params: Mapping[str, str]) -> RawOutcome:
        raise NotImplementedError
