from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

import requests

from .errors import NetworkError, ServiceError
from .types import ClassificationRequest

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://api.plant.id/v2/identify"


@dataclass
class PlantIdClient:
    """Submit encoded images to the Plant.id identification endpoint."""

    api_key: str
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float | None = None
    session: requests.Session = field(default_factory=requests.Session)

    async def classify(self, request: ClassificationRequest) -> dict[str, Any]:
        payload = request.to_payload()
        return await asyncio.to_thread(self._send_request, payload)

    def _send_request(self, payload: dict[str, Any]) -> dict[str, Any]:
        if not self.api_key:
            logger.warning("Plant.id API key is not configured; request will be unauthenticated")
        headers = {
            "Content-Type": "application/json",
            "Api-Key": self.api_key or "",
        }
        logger.debug("POST %s images=%d", self.endpoint, len(payload.get("images", [])))
        try:
            response = self.session.post(
                self.endpoint,
                json=payload,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise NetworkError(f"Failed to reach Plant.id API: {exc}") from exc

        if not 200 <= response.status_code < 300:
            logger.warning("Plant.id API returned status=%d", response.status_code)
            raise ServiceError(
                f"Plant.id API returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise ServiceError(
                "Plant.id API response was not valid JSON", status_code=response.status_code
            ) from exc
        if not isinstance(data, dict):
            raise ServiceError(
                "Unexpected response format from Plant.id API", status_code=response.status_code
            )
        return data


__all__ = ["DEFAULT_ENDPOINT", "PlantIdClient"]
