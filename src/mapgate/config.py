"""Centralized settings for mapgate."""
from __future__ import annotations

from typing import Dict

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "MAPGATE_"}

    # Google Maps API key; empty means requests go out unauthenticated
    api_key: str = ""

    # Preferred language / region code; empty means let the service decide
    language: str = ""
    region: str = ""

    base_url: str = "https://maps.googleapis.com/maps/api"

    timeout_s: float = 10.0
    user_agent: str = "mapgate/0.1.0"

    def default_params(self) -> Dict[str, str]:
        """Lowest-precedence query parameters, empty values omitted."""
        out: Dict[str, str] = {}
        if self.api_key:
            out["key"] = self.api_key
        if self.language:
            out["language"] = self.language
        if self.region:
            out["region"] = self.region
        return out


settings = Settings()
