"""StatsClient tests — hit payloads and failure tolerance via httpx.MockTransport."""
import json
from datetime import datetime, timezone

import httpx
import pytest

from ewm.stats_client import StatsClient


@pytest.mark.asyncio
async def test_hit_posts_payload():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201)

    client = StatsClient("http://stats:9090/", "ewm-main-service", transport=httpx.MockTransport(handler))
    await client.hit("/events/5/comments", "10.0.0.1", datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc))

    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "http://stats:9090/hit"
    assert json.loads(request.content) == {
        "app": "ewm-main-service",
        "uri": "/events/5/comments",
        "ip": "10.0.0.1",
        "timestamp": "2026-01-02 03:04:05",
    }


@pytest.mark.asyncio
async def test_hit_disabled_without_url():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    client = StatsClient("", transport=httpx.MockTransport(handler))
    assert not client.enabled
    await client.hit("/events/1", "127.0.0.1")


@pytest.mark.asyncio
async def test_hit_swallows_server_and_transport_errors(caplog):
    def server_error(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500)

    def unreachable(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    for handler in (server_error, unreachable):
        client = StatsClient("http://stats:9090", transport=httpx.MockTransport(handler))
        await client.hit("/events/1", "127.0.0.1")

    assert sum("not recorded" in r.message for r in caplog.records) == 2
