"""Tests for the v1 API surface: route table, app scoping, and the error envelope."""

from __future__ import annotations

import uuid

import pytest
from fastapi.routing import APIRoute

from src.app import app
from src.models.tenant_app import TenantApp
from src.modules.tenancy.auth import get_current_user


def _routes() -> set[tuple[str, str]]:
    pairs = set()
    for route in app.routes:
        if isinstance(route, APIRoute):
            for method in route.methods:
                pairs.add((method, route.path))
    return pairs


class TestRouteTable:
    @pytest.mark.parametrize(
        ("method", "path"),
        [
            ("POST", "/api/v1/apps"),
            ("GET", "/api/v1/apps/{app_id}"),
            ("GET", "/api/v1/apps/{app_id}/locking"),
            ("PUT", "/api/v1/apps/{app_id}/locking"),
            ("POST", "/api/v1/apps/{app_id}/categories"),
            ("GET", "/api/v1/apps/{app_id}/categories"),
            ("GET", "/api/v1/apps/{app_id}/categories/tree"),
            ("GET", "/api/v1/apps/{app_id}/categories/{category_id}"),
            ("PATCH", "/api/v1/apps/{app_id}/categories/{category_id}"),
            ("DELETE", "/api/v1/apps/{app_id}/categories/{category_id}"),
            ("GET", "/api/v1/apps/{app_id}/categories/{category_id}/form"),
            ("PUT", "/api/v1/apps/{app_id}/categories/{category_id}/form"),
            ("DELETE", "/api/v1/apps/{app_id}/categories/{category_id}/form"),
            ("POST", "/api/v1/apps/{app_id}/categories/{category_id}/form/presets"),
            ("POST", "/api/v1/apps/{app_id}/submissions"),
            ("GET", "/api/v1/apps/{app_id}/submissions"),
            ("GET", "/api/v1/apps/{app_id}/submissions/{submission_id}"),
            ("PATCH", "/api/v1/apps/{app_id}/submissions/{submission_id}"),
            ("PATCH", "/api/v1/apps/{app_id}/submissions/{submission_id}/status"),
        ],
    )
    def test_route_registered(self, method, path) -> None:
        assert (method, path) in _routes()

    def test_tree_route_precedes_category_detail(self) -> None:
        paths = [r.path for r in app.routes if isinstance(r, APIRoute)]

        assert paths.index("/api/v1/apps/{app_id}/categories/tree") < paths.index(
            "/api/v1/apps/{app_id}/categories/{category_id}"
        )


class TestRequests:
    @pytest.mark.asyncio
    async def test_health(self, api_client) -> None:
        response = await api_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": "0.1.0"}

    @pytest.mark.asyncio
    async def test_other_app_is_forbidden(self, api_client) -> None:
        response = await api_client.get(
            f"/api/v1/apps/{uuid.uuid4()}/categories", headers={"X-Request-ID": "req-123"}
        )

        assert response.status_code == 403
        body = response.json()
        assert body["error"]["code"] == "FORBIDDEN"
        assert body["error"]["requestId"] == "req-123"
        assert response.headers["X-Request-ID"] == "req-123"

    @pytest.mark.asyncio
    async def test_missing_token_is_unauthorized(self, api_client, app_id) -> None:
        app.dependency_overrides.pop(get_current_user)

        response = await api_client.get(f"/api/v1/apps/{app_id}/categories")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    @pytest.mark.asyncio
    async def test_submission_without_registrant_is_rejected(self, api_client, app_id) -> None:
        response = await api_client.post(
            f"/api/v1/apps/{app_id}/submissions",
            json={"category_id": str(uuid.uuid4()), "raw_data": {}},
        )

        assert response.status_code == 422
        body = response.json()
        assert body["error"]["code"] == "VALIDATION_ERROR"
        assert body["error"]["details"]

    @pytest.mark.asyncio
    async def test_locking_policy_uses_camel_case(self, api_client, mock_session, app_id) -> None:
        mock_session.get.return_value = TenantApp(
            id=app_id, name="Demo", locking_json={"lockSubCategory": True}
        )

        response = await api_client.get(f"/api/v1/apps/{app_id}/locking")

        assert response.status_code == 200
        locking = response.json()["locking"]
        assert locking["lockSubCategory"] is True
        assert locking["lockCategory"] is False
