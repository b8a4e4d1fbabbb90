"""
Client for the companion statistics service.

Public endpoints report a hit (``app``, ``uri``, ``ip``, ``timestamp``) to
``POST {STATS_SERVER_URL}/hit``.  Reporting is best-effort: when the URL is
not configured the client is a no-op, and transport or HTTP errors are
logged and dropped so a stats outage never fails a request.
"""
import logging
from datetime import datetime, timezone

import httpx

from ewm.config import settings

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class StatsClient:
    def __init__(
        self,
        base_url: str = settings.STATS_SERVER_URL,
        app_name: str = settings.STATS_APP_NAME,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.app_name = app_name
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.base_url)

    async def hit(self, uri: str, ip: str, timestamp: datetime | None = None) -> None:
        if not self.enabled:
            return
        payload = {
            "app": self.app_name,
            "uri": uri,
            "ip": ip,
            "timestamp": (timestamp or datetime.now(timezone.utc)).strftime(TIMESTAMP_FORMAT),
        }
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=settings.STATS_TIMEOUT,
                transport=self._transport,
            ) as client:
                resp = await client.post("/hit", json=payload)
                resp.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Stats hit for %s not recorded: %s", uri, exc)


stats_client = StatsClient()
