"""Tests for RegistrationRoutes using aiohttp TestClient."""

from __future__ import annotations

import pytest
from aiohttp import web
from aiohttp.test_utils import TestClient, TestServer

from mcbot.server.routes.registration_routes import RegistrationRoutes

from fakes import MemoryAddressStore

AUTH_KEY = "pre-shared-secret"


def _build_app(store: MemoryAddressStore, auth_key: str = AUTH_KEY) -> web.Application:
    app = web.Application()
    RegistrationRoutes(store, auth_key).register(app.router)
    return app


class TestAuth:
    @pytest.mark.asyncio
    async def test_missing_header(self, store: MemoryAddressStore) -> None:
        async with TestClient(TestServer(_build_app(store))) as client:
            resp = await client.post("/serverURL", json={"serverURL": "example.com:25565"})
            assert resp.status == 400
            assert await resp.text() == "Undefined auth header"
        assert store.sets == []

    @pytest.mark.asyncio
    async def test_wrong_header(self, store: MemoryAddressStore) -> None:
        async with TestClient(TestServer(_build_app(store))) as client:
            resp = await client.post(
                "/serverURL",
                json={"serverURL": "example.com:25565"},
                headers={"Authorization": "guess"},
            )
            assert resp.status == 400
            assert await resp.text() == "Invalid auth header"
        assert store.sets == []

    @pytest.mark.asyncio
    async def test_no_key_configured_rejects_everything(self, store: MemoryAddressStore) -> None:
        async with TestClient(TestServer(_build_app(store, auth_key=""))) as client:
            resp = await client.post(
                "/serverURL",
                json={"serverURL": "example.com:25565"},
                headers={"Authorization": ""},
            )
            assert resp.status == 400
            assert await resp.text() == "Invalid auth header"
        assert store.sets == []

    @pytest.mark.asyncio
    async def test_auth_checked_before_validation(self, store: MemoryAddressStore) -> None:
        async with TestClient(TestServer(_build_app(store))) as client:
            resp = await client.post("/serverURL", json={})
            assert await resp.text() == "Undefined auth header"


class TestValidation:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("payload", "expected"),
        [
            ({}, "Server address is required"),
            ({"serverURL": ""}, "Server address must not be empty"),
            ({"serverURL": 25565}, "Server address must be a string"),
            ({"serverURL": "example.com"}, "Server address must include a port"),
            ({"serverURL": "http://example.com:80"}, "Server address scheme must be tcp"),
            ({"serverURL": "exa\nmple.com:25565"}, "Server address must not contain control characters"),
        ],
    )
    async def test_rejected(self, store: MemoryAddressStore, payload: dict, expected: str) -> None:
        async with TestClient(TestServer(_build_app(store))) as client:
            resp = await client.post("/serverURL", json=payload, headers={"Authorization": AUTH_KEY})
            assert resp.status == 400
            data = await resp.json()
            errors = data["errors"]
            assert expected in [e["msg"] for e in errors]
            assert all(e["param"] == "serverURL" and e["location"] == "body" for e in errors)
        assert store.sets == []

    @pytest.mark.asyncio
    async def test_non_json_body(self, store: MemoryAddressStore) -> None:
        async with TestClient(TestServer(_build_app(store))) as client:
            resp = await client.post("/serverURL", data="serverURL=x", headers={"Authorization": AUTH_KEY})
            assert resp.status == 400
            assert (await resp.json())["errors"][0]["msg"] == "Server address is required"

    @pytest.mark.asyncio
    async def test_multiple_problems_enumerated(self, store: MemoryAddressStore) -> None:
        async with TestClient(TestServer(_build_app(store))) as client:
            resp = await client.post(
                "/serverURL", json={"serverURL": "udp://"}, headers={"Authorization": AUTH_KEY},
            )
            msgs = [e["msg"] for e in (await resp.json())["errors"]]
            assert "Server address scheme must be tcp" in msgs
            assert "Server address must include a host" in msgs
            assert "Server address must include a port" in msgs


class TestStore:
    @pytest.mark.asyncio
    async def test_success(self, store: MemoryAddressStore) -> None:
        async with TestClient(TestServer(_build_app(store))) as client:
            resp = await client.post(
                "/serverURL",
                json={"serverURL": "example.com:25565"},
                headers={"Authorization": AUTH_KEY},
            )
            assert resp.status == 200
            assert await resp.text() == "OK"
        assert store.value == "example.com:25565"

    @pytest.mark.asyncio
    async def test_overwrites(self, store: MemoryAddressStore) -> None:
        async with TestClient(TestServer(_build_app(store))) as client:
            for addr in ("a.example.com:1", "tcp://b.example.com:2"):
                resp = await client.post(
                    "/serverURL", json={"serverURL": addr}, headers={"Authorization": AUTH_KEY},
                )
                assert resp.status == 200
        assert store.value == "tcp://b.example.com:2"

    @pytest.mark.asyncio
    async def test_value_stored_verbatim(self, store: MemoryAddressStore) -> None:
        async with TestClient(TestServer(_build_app(store))) as client:
            resp = await client.post(
                "/serverURL",
                json={"serverURL": " example.com:25565 "},
                headers={"Authorization": AUTH_KEY},
            )
            assert resp.status == 200
        assert store.sets == [" example.com:25565 "]

    @pytest.mark.asyncio
    async def test_store_failure(self, store: MemoryAddressStore) -> None:
        store.fail_set = True
        async with TestClient(TestServer(_build_app(store))) as client:
            resp = await client.post(
                "/serverURL",
                json={"serverURL": "example.com:25565"},
                headers={"Authorization": AUTH_KEY},
            )
            assert resp.status == 500
            assert await resp.text() == "Server Error"
