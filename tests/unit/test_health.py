"""Tests for the keep-alive HTTP endpoints."""

import pytest
from aiohttp.test_utils import TestClient, TestServer

from school_bot.bot.messages import ALIVE_MESSAGE
from school_bot.services.health import HealthServer, create_app


@pytest.mark.asyncio
async def test_root_reports_alive() -> None:
    async with TestClient(TestServer(create_app())) as client:
        response = await client.get("/")

        assert response.status == 200
        assert await response.text() == ALIVE_MESSAGE


@pytest.mark.asyncio
async def test_health_returns_ok_json() -> None:
    async with TestClient(TestServer(create_app())) as client:
        response = await client.get("/health")

        assert response.status == 200
        assert await response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_health_server_start_and_stop_are_idempotent(unused_tcp_port) -> None:
    server = HealthServer(host="127.0.0.1", port=unused_tcp_port)

    await server.start()
    await server.start()
    await server.stop()
    await server.stop()
