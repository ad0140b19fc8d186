import pytest
from httpx import AsyncClient

from partnerfinder.settings import settings


@pytest.mark.asyncio
async def test_health_live(api_client: AsyncClient):
    response = await api_client.get("/health/live")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_metrics_require_token_by_default(api_client: AsyncClient, monkeypatch):
    monkeypatch.setattr(settings, "obs_metrics_public", False)
    monkeypatch.setattr(settings, "obs_admin_token", "s3cret")

    denied = await api_client.get("/metrics")
    assert denied.status_code == 403

    allowed = await api_client.get("/metrics", headers={"X-Admin-Token": "s3cret"})
    assert allowed.status_code == 200
    assert "partnerfinder_searches_total" in allowed.text
