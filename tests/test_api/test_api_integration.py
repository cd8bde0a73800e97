"""Integration tests for the API endpoints."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import pytest

from backend.database import create_engine
from backend.models.component import ComponentRecord

if TYPE_CHECKING:
    from collections.abc import Callable

    from httpx import AsyncClient

    from backend.config import Settings


class TestHealth:
    @pytest.mark.asyncio
    async def test_health_check(self, client: AsyncClient) -> None:
        resp = await client.get("/api/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["version"] == "0.1.0"
        assert data["database"] == "ok"
        assert data["pageSeeded"] is True


class TestPage:
    @pytest.mark.asyncio
    async def test_get_default_page(self, client: AsyncClient) -> None:
        resp = await client.get("/api/page")
        assert resp.status_code == 200
        assert resp.json() == {
            "success": True,
            "data": {
                "elements": [],
                "settings": {
                    "responsive": True,
                    "width": 1200,
                    "height": 800,
                    "maxWidth": "none",
                    "bgColor": "#ffffff",
                },
            },
            "error": None,
        }

    @pytest.mark.asyncio
    async def test_save_echoes_page(
        self, client: AsyncClient, make_page: Callable[..., dict[str, Any]]
    ) -> None:
        page = make_page(1, 2)
        resp = await client.post("/api/page", json=page)
        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["data"] == page
        assert body["error"] is None

    @pytest.mark.asyncio
    async def test_save_then_get_round_trip(
        self, client: AsyncClient, make_page: Callable[..., dict[str, Any]]
    ) -> None:
        page = make_page(3, 4, 5, bg_color="#123456")
        await client.post("/api/page", json=page)

        resp = await client.get("/api/page")
        body = resp.json()
        assert body["success"] is True
        assert body["data"] == page

    @pytest.mark.asyncio
    async def test_element_props_default_to_empty_object(
        self, client: AsyncClient, make_page: Callable[..., dict[str, Any]]
    ) -> None:
        page = make_page(1)
        del page["elements"][0]["props"]
        await client.post("/api/page", json=page)

        resp = await client.get("/api/page")
        assert resp.json()["data"]["elements"][0]["props"] == {}

    @pytest.mark.asyncio
    async def test_invalid_page_body_rejected(self, client: AsyncClient) -> None:
        resp = await client.post("/api/page", json={"elements": "nope"})
        assert resp.status_code == 422
        fields = {err["field"] for err in resp.json()["detail"]}
        assert "elements" in fields
        assert "settings" in fields

    @pytest.mark.asyncio
    async def test_concurrent_saves_last_writer_wins(
        self, client: AsyncClient, make_page: Callable[..., dict[str, Any]]
    ) -> None:
        first = make_page(1, bg_color="#111111")
        second = make_page(2, 3, bg_color="#222222")

        responses = await asyncio.gather(
            client.post("/api/page", json=first),
            client.post("/api/page", json=second),
        )

        assert all(resp.json()["success"] for resp in responses)
        stored = (await client.get("/api/page")).json()["data"]
        assert stored in (first, second)


class TestComponents:
    @pytest.mark.asyncio
    async def test_list_empty(self, client: AsyncClient) -> None:
        resp = await client.get("/api/components")
        assert resp.status_code == 200
        assert resp.json() == {"success": True, "data": [], "error": None}

    @pytest.mark.asyncio
    async def test_save_returns_component(
        self, client: AsyncClient, make_component: Callable[..., dict[str, Any]]
    ) -> None:
        payload = make_component(101)
        resp = await client.post("/api/components", json=payload)
        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        data = body["data"]
        assert data["created_at"] == data["updated_at"]
        assert data["id"] == payload["id"]
        assert data["name"] == payload["name"]
        assert data["canContainContent"] is True
        assert data["defaultContent"] == payload["defaultContent"]
        assert data["tags"] == payload["tags"]
        assert [prop["name"] for prop in data["properties"]] == ["fontSize", "textAlign"]
        assert data["properties"][1]["options"] == ["left", "center", "right"]
        assert data["properties"][0]["options"] is None

    @pytest.mark.asyncio
    async def test_upsert_keeps_created_at(
        self, client: AsyncClient, make_component: Callable[..., dict[str, Any]]
    ) -> None:
        first = (await client.post("/api/components", json=make_component(5))).json()["data"]
        await asyncio.sleep(0.01)
        second = (
            await client.post("/api/components", json=make_component(5, name="Renamed"))
        ).json()["data"]

        listed = (await client.get("/api/components")).json()["data"]
        assert len(listed) == 1
        assert listed[0]["name"] == "Renamed"
        assert second["created_at"] == first["created_at"]
        assert second["updated_at"] > first["updated_at"]

    @pytest.mark.asyncio
    async def test_list_ordered_by_name(
        self, client: AsyncClient, make_component: Callable[..., dict[str, Any]]
    ) -> None:
        for component_id, name in ((1, "Banana"), (2, "Apple"), (3, "Cherry")):
            await client.post("/api/components", json=make_component(component_id, name=name))

        resp = await client.get("/api/components")
        names = [component["name"] for component in resp.json()["data"]]
        assert names == ["Apple", "Banana", "Cherry"]

    @pytest.mark.asyncio
    async def test_list_skips_malformed_rows(
        self,
        client: AsyncClient,
        test_settings: Settings,
        make_component: Callable[..., dict[str, Any]],
    ) -> None:
        await client.post("/api/components", json=make_component(1, name="Valid"))

        engine, session_factory = create_engine(test_settings)
        async with session_factory() as session:
            session.add(
                ComponentRecord(
                    id=2,
                    name="Corrupt",
                    icon="x",
                    category="custom",
                    properties=[{"label": "no name or type"}],
                    can_contain_content=False,
                    default_content=None,
                    created_at="2026-01-01 00:00:00.000000+0000",
                    updated_at="2026-01-01 00:00:00.000000+0000",
                )
            )
            await session.commit()
        await engine.dispose()

        resp = await client.get("/api/components")
        body = resp.json()
        assert body["success"] is True
        assert [component["id"] for component in body["data"]] == [1]

    @pytest.mark.asyncio
    async def test_open_category_and_opaque_default_content(
        self, client: AsyncClient, make_component: Callable[..., dict[str, Any]]
    ) -> None:
        payload = make_component(
            9, category="experimental", defaultContent={"html": "<b>hi</b>", "slots": [1, 2]}
        )
        resp = await client.post("/api/components", json=payload)
        data = resp.json()["data"]
        assert data["category"] == "experimental"
        assert data["defaultContent"] == {"html": "<b>hi</b>", "slots": [1, 2]}

    @pytest.mark.asyncio
    async def test_invalid_property_type_rejected(
        self, client: AsyncClient, make_component: Callable[..., dict[str, Any]]
    ) -> None:
        payload = make_component(3)
        payload["properties"][0]["type"] = "matrix"
        resp = await client.post("/api/components", json=payload)
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_delete_component(
        self, client: AsyncClient, make_component: Callable[..., dict[str, Any]]
    ) -> None:
        await client.post("/api/components", json=make_component(77))

        resp = await client.post("/api/components/delete", json=77)
        assert resp.status_code == 200
        assert resp.json() == {"success": True, "data": None, "error": None}

        listed = (await client.get("/api/components")).json()["data"]
        assert listed == []

    @pytest.mark.asyncio
    async def test_delete_missing_is_success(self, client: AsyncClient) -> None:
        resp = await client.post("/api/components/delete", json=123456)
        assert resp.status_code == 200
        assert resp.json()["success"] is True

    @pytest.mark.asyncio
    async def test_delete_requires_integer_body(self, client: AsyncClient) -> None:
        resp = await client.post("/api/components/delete", json={"id": 1})
        assert resp.status_code == 422


class TestCors:
    @pytest.mark.asyncio
    async def test_preflight_allows_any_origin(self, client: AsyncClient) -> None:
        resp = await client.options(
            "/api/page",
            headers={
                "Origin": "http://example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "content-type",
            },
        )
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "*"

    @pytest.mark.asyncio
    async def test_simple_request_has_cors_header(self, client: AsyncClient) -> None:
        resp = await client.get("/api/page", headers={"Origin": "http://example.com"})
        assert resp.headers["access-control-allow-origin"] == "*"
