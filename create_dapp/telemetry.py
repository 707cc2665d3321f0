"""Best-effort usage telemetry.

Sends one Google Analytics 4 measurement-protocol event per successful
scaffold.  Nothing here ever raises: a disabled, unconfigured or failing
telemetry backend simply yields ``False``.
"""

from __future__ import annotations

import uuid

import httpx

from create_dapp.config import TelemetryConfig
from create_dapp.models import TelemetryEvent

EVENT_NAME = "create_dapp"


class TelemetryClient:
    """Async GA4 client for scaffold events."""

    def __init__(self, config: TelemetryConfig | None = None) -> None:
        self.config = config or TelemetryConfig()
        self.client_id = str(uuid.uuid4())

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=httpx.Timeout(self.config.timeout))

    def build_payload(self, event: TelemetryEvent) -> dict:
        """Measurement-protocol body for *event*.  ``None`` params are dropped."""
        params = {k: v for k, v in event.model_dump().items() if v is not None}
        return {
            "client_id": self.client_id,
            "events": [{"name": EVENT_NAME, "params": params}],
        }

    async def record(self, event: TelemetryEvent) -> bool:
        """Post *event*.

        Returns:
            ``True`` if the backend accepted the event.
        """
        if not self.config.is_configured:
            return False

        try:
            async with self._client() as client:
                response = await client.post(
                    self.config.endpoint,
                    params={
                        "measurement_id": self.config.measurement_id,
                        "api_secret": self.config.api_secret,
                    },
                    json=self.build_payload(event),
                )
                response.raise_for_status()
                return True
        except httpx.HTTPError:
            return False
