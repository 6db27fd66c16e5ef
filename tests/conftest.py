from __future__ import annotations

import pytest

from helpers import FakeTransport
from mapgate.client import MapsClient
from mapgate.config import Settings


@pytest.fixture
def bare_settings() -> Settings:
    return Settings(api_key="", language="", region="")


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(bare_settings: Settings, transport: FakeTransport) -> MapsClient:
    return MapsClient(settings=bare_settings, transport=transport)
