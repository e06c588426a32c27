"""
Tests for the Provider Catalog API
"""

from uuid import uuid4

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_create_and_list_providers(client: AsyncClient, cloud_run_payload):
    response = await client.post("/api/v1/providers", json=cloud_run_payload)

    assert response.status_code == 201
    created = response.json()["provider"]
    assert created["name"] == "Google Cloud Run"
    assert created["id"]
    assert created["pricing"] is None
    assert "createdAt" in created

    response = await client.get("/api/v1/providers")
    assert response.status_code == 200
    providers = response.json()["providers"]
    assert len(providers) == 1
    assert providers[0]["id"] == created["id"]
    assert [i["name"] for i in providers[0]["inputs"]] == ["vCPU_hours", "Storage_GB", "Region"]
    assert providers[0]["inputs"][0]["defaultValue"] == "1"


@pytest.mark.asyncio
async def test_create_duplicate_name_returns_409(client: AsyncClient, cloud_run_payload):
    await client.post("/api/v1/providers", json=cloud_run_payload)
    response = await client.post("/api/v1/providers", json=cloud_run_payload)

    assert response.status_code == 409
    assert "already exists" in response.json()["error"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"name": "", "inputs": [{"name": "a"}]},
        {"name": "   ", "inputs": [{"name": "a"}]},
        {"name": "X", "inputs": []},
        {"name": "X", "inputs": [{"name": ""}]},
        {"name": "X", "inputs": [{"name": "a"}, {"name": "a"}]},
        {"inputs": [{"name": "a"}]},
    ],
)
async def test_create_invalid_provider_returns_400(client: AsyncClient, payload):
    response = await client.post("/api/v1/providers", json=payload)

    assert response.status_code == 400
    assert response.json()["error"]

    listing = await client.get("/api/v1/providers")
    assert listing.json()["providers"] == []


@pytest.mark.asyncio
async def test_description_is_sanitized(client: AsyncClient):
    payload = {
        "name": "Vercel",
        "inputs": [
            {
                "name": "Bandwidth_GB",
                "description": '<b onclick="x()">Egress</b><script>alert(1)</script>',
            }
        ],
    }

    response = await client.post("/api/v1/providers", json=payload)

    assert response.json()["provider"]["inputs"][0]["description"] == "<b>Egress</b>"


@pytest.mark.asyncio
async def test_update_provider(client: AsyncClient, cloud_run_payload):
    created = (await client.post("/api/v1/providers", json=cloud_run_payload)).json()["provider"]

    response = await client.put(
        f"/api/v1/providers/{created['id']}",
        json={"name": "Cloud Run", "inputs": [{"name": "Requests", "type": "number"}]},
    )

    assert response.status_code == 200
    updated = response.json()["provider"]
    assert updated["id"] == created["id"]
    assert updated["name"] == "Cloud Run"
    assert [i["name"] for i in updated["inputs"]] == ["Requests"]


@pytest.mark.asyncio
async def test_update_missing_provider_returns_404(client: AsyncClient):
    response = await client.put("/api/v1/providers/missing", json={"name": "X"})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_provider_by_name(client: AsyncClient, cloud_run_payload):
    await client.post("/api/v1/providers", json=cloud_run_payload)

    response = await client.delete("/api/v1/providers/Google Cloud Run")

    assert response.status_code == 200
    assert response.json()["message"] == "Provider deleted successfully"
    assert (await client.get("/api/v1/providers")).json()["providers"] == []


@pytest.mark.asyncio
@pytest.mark.parametrize("target", ["missing-provider", str(uuid4())])
async def test_delete_missing_provider_returns_404(client: AsyncClient, target):
    response = await client.delete(f"/api/v1/providers/{target}")

    assert response.status_code == 404
    assert "not found" in response.json()["error"]


@pytest.mark.asyncio
async def test_duplicate_provider(client: AsyncClient, cloud_run_payload):
    created = (await client.post("/api/v1/providers", json=cloud_run_payload)).json()["provider"]

    response = await client.post("/api/v1/providers/duplicate", json={"providerId": created["id"]})

    assert response.status_code == 201
    copy = response.json()["provider"]
    assert copy["name"] == "Google Cloud Run Copy"
    assert copy["id"] != created["id"]
    assert copy["inputs"] == created["inputs"]


@pytest.mark.asyncio
async def test_duplicate_missing_provider_returns_404(client: AsyncClient):
    response = await client.post("/api/v1/providers/duplicate", json={"providerId": str(uuid4())})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_clear_pricing(client: AsyncClient, store, cloud_run, report_cache):
    await store.save_pricing(cloud_run, {"Region:us-central1": {"price": "Included", "url": ""}})
    report_cache.set("Google Cloud Run{}", "## Provider: Google Cloud Run")

    response = await client.delete("/api/v1/providers/pricing")

    assert response.status_code == 200
    assert response.json() == {"cleared": 1, "cacheEntries": 1}
    assert len(report_cache) == 0
