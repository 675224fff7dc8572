"""
Tests for model endpoints.
"""

import pytest
from httpx import AsyncClient

from showcase.storage import LocalStorageBackend


@pytest.mark.asyncio
async def test_list_models_empty(client: AsyncClient):
    """Listing with no records returns an empty array."""
    response = await client.get("/api/models")

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_list_models_newest_first(client: AsyncClient, upload_model):
    first = await upload_model("first.glb")
    second = await upload_model("second.glb")

    response = await client.get("/api/models")

    assert response.status_code == 200
    short_ids = [item["shortId"] for item in response.json()]
    assert short_ids == [second["model"]["shortId"], first["model"]["shortId"]]


@pytest.mark.asyncio
async def test_list_does_not_count_views(client: AsyncClient, upload_model):
    await upload_model()

    await client.get("/api/models")
    response = await client.get("/api/models")

    assert response.json()[0]["views"] == 0


@pytest.mark.asyncio
async def test_get_model_counts_views(client: AsyncClient, upload_model):
    created = await upload_model()
    short_id = created["model"]["shortId"]

    first = await client.get(f"/api/models/{short_id}")
    second = await client.get(f"/api/models/{short_id}")

    assert first.status_code == 200
    assert first.json()["views"] == 1
    assert second.json()["views"] == 2
    assert second.json()["shortId"] == short_id


@pytest.mark.asyncio
async def test_get_model_not_found(client: AsyncClient):
    response = await client.get("/api/models/doesNotExist")

    assert response.status_code == 404
    assert response.json()["error"] == "not_found"

    listing = await client.get("/api/models")
    assert listing.json() == []


@pytest.mark.asyncio
async def test_get_model_response_shape(client: AsyncClient, upload_model):
    created = await upload_model(
        data={"infoTopLeft": "Oak", "infoBottomRight": "Handmade"},
    )
    short_id = created["model"]["shortId"]

    data = (await client.get(f"/api/models/{short_id}")).json()

    assert set(data) == {
        "id", "shortId", "name", "modelUrl", "backgroundUrl", "info",
        "views", "likes", "qty", "sold", "createdAt", "updatedAt",
    }
    assert data["info"] == {
        "topLeft": "Oak",
        "topRight": "",
        "bottomLeft": "",
        "bottomRight": "Handmade",
    }


# ===================
# Likes
# ===================

@pytest.mark.asyncio
async def test_like_defaults_to_plus_one(client: AsyncClient, upload_model):
    short_id = (await upload_model())["model"]["shortId"]

    response = await client.post(f"/api/models/{short_id}/like")

    assert response.status_code == 200
    assert response.json() == {"likes": 1}


@pytest.mark.asyncio
async def test_like_and_unlike(client: AsyncClient, upload_model):
    short_id = (await upload_model())["model"]["shortId"]

    await client.post(f"/api/models/{short_id}/like", json={"change": 1})
    await client.post(f"/api/models/{short_id}/like", json={"change": 1})
    response = await client.post(f"/api/models/{short_id}/like", json={"change": -1})

    assert response.json() == {"likes": 1}


@pytest.mark.asyncio
async def test_unlike_never_goes_negative(client: AsyncClient, upload_model):
    short_id = (await upload_model())["model"]["shortId"]

    response = await client.post(f"/api/models/{short_id}/like", json={"change": -1})
    assert response.json() == {"likes": 0}

    response = await client.post(f"/api/models/{short_id}/like", json={"change": -1})
    assert response.json() == {"likes": 0}

    model = (await client.get(f"/api/models/{short_id}")).json()
    assert model["likes"] == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("change", [5, -3, "down", True, None])
async def test_like_other_values_count_as_like(client: AsyncClient, upload_model, change):
    short_id = (await upload_model())["model"]["shortId"]

    response = await client.post(f"/api/models/{short_id}/like", json={"change": change})

    assert response.status_code == 200
    assert response.json() == {"likes": 1}


@pytest.mark.asyncio
async def test_like_not_found(client: AsyncClient):
    response = await client.post("/api/models/missing/like", json={"change": 1})

    assert response.status_code == 404


# ===================
# Admin edits
# ===================

@pytest.mark.asyncio
async def test_patch_sold_only(client: AsyncClient, upload_model, admin_headers):
    created = (await upload_model(data={"name": "Chair", "qty": "40", "infoTopLeft": "Oak"}))["model"]

    response = await client.patch(
        f"/api/models/{created['shortId']}",
        json={"sold": 5},
        headers=admin_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["sold"] == 5
    assert data["name"] == "Chair"
    assert data["qty"] == 40
    assert data["info"] == created["info"]


@pytest.mark.asyncio
async def test_patch_applies_falsy_values(client: AsyncClient, upload_model, admin_headers):
    created = (await upload_model(data={"infoTopLeft": "Oak"}))["model"]

    response = await client.patch(
        f"/api/models/{created['shortId']}",
        json={"qty": 0, "info": {"topLeft": ""}},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["qty"] == 0
    assert response.json()["info"]["topLeft"] == ""


@pytest.mark.asyncio
async def test_patch_updates_info_slot(client: AsyncClient, upload_model, admin_headers):
    created = (await upload_model(data={"infoTopLeft": "Oak", "infoTopRight": "Blue"}))["model"]

    response = await client.patch(
        f"/api/models/{created['shortId']}",
        json={"name": "Renamed", "info": {"topRight": "Green"}},
        headers=admin_headers,
    )

    data = response.json()
    assert data["name"] == "Renamed"
    assert data["info"]["topLeft"] == "Oak"
    assert data["info"]["topRight"] == "Green"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"qty": -1},
        {"sold": None},
        {"color": "red"},
        {"info": {"middle": "x"}},
        {"name": ""},
    ],
)
async def test_patch_rejects_invalid_body(client: AsyncClient, upload_model, admin_headers, body):
    short_id = (await upload_model())["model"]["shortId"]

    response = await client.patch(f"/api/models/{short_id}", json=body, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "validation_failed"


@pytest.mark.asyncio
async def test_patch_not_found(client: AsyncClient, admin_headers):
    response = await client.patch("/api/models/missing", json={"sold": 1}, headers=admin_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_patch_requires_admin(client: AsyncClient, upload_model):
    short_id = (await upload_model())["model"]["shortId"]

    missing = await client.patch(f"/api/models/{short_id}", json={"sold": 9})
    wrong = await client.patch(
        f"/api/models/{short_id}", json={"sold": 9}, headers={"x-api-key": "nope"}
    )

    assert missing.status_code == 401
    assert missing.json()["message"] == "Missing admin token"
    assert wrong.status_code == 401
    assert wrong.json()["message"] == "Invalid admin token"

    model = (await client.get(f"/api/models/{short_id}")).json()
    assert model["sold"] == 0


@pytest.mark.asyncio
async def test_patch_accepts_bearer_authorization(client: AsyncClient, upload_model, admin_headers):
    short_id = (await upload_model())["model"]["shortId"]

    response = await client.patch(
        f"/api/models/{short_id}",
        json={"sold": 2},
        headers={"Authorization": f"Bearer {admin_headers['x-api-key']}"},
    )

    assert response.status_code == 200
    assert response.json()["sold"] == 2


# ===================
# Delete
# ===================

@pytest.mark.asyncio
async def test_delete_model(client: AsyncClient, upload_model, admin_headers, test_storage):
    created = await upload_model(background=("bg.png", b"\x89PNG fake"))
    model = created["model"]
    model_key = model["modelUrl"].removeprefix("/storage/")
    background_key = model["backgroundUrl"].removeprefix("/storage/")
    assert await test_storage.exists(model_key)

    response = await client.delete(f"/api/models/{model['shortId']}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert (await client.get(f"/api/models/{model['shortId']}")).status_code == 404
    assert not await test_storage.exists(model_key)
    assert not await test_storage.exists(background_key)


@pytest.mark.asyncio
async def test_delete_not_found(client: AsyncClient, admin_headers):
    response = await client.delete("/api/models/missing", headers=admin_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_requires_admin(client: AsyncClient, upload_model):
    short_id = (await upload_model())["model"]["shortId"]

    response = await client.delete(f"/api/models/{short_id}", headers={"x-api-key": "wrong"})

    assert response.status_code == 401
    assert (await client.get(f"/api/models/{short_id}")).status_code == 200


# ===================
# End to end
# ===================

@pytest.mark.asyncio
async def test_upload_view_and_unlike_scenario(client: AsyncClient, upload_model):
    created = await upload_model("model.glb", data={"qty": "50"})
    model = created["model"]

    assert model["qty"] == 50
    assert model["sold"] == 0
    assert model["views"] == 0

    first = await client.get(f"/api/models/{model['shortId']}")
    assert first.json()["views"] == 1
    second = await client.get(f"/api/models/{model['shortId']}")
    assert second.json()["views"] == 2

    unlike = await client.post(f"/api/models/{model['shortId']}/like", json={"change": -1})
    assert unlike.json() == {"likes": 0}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "kwargs",
    [
        {"data": {"change": "-1"}},
        {"content": b"not json", "headers": {"content-type": "text/plain"}},
        {"json": [-1]},
        {"json": -1},
    ],
)
async def test_like_non_object_body_counts_as_like(client: AsyncClient, upload_model, kwargs):
    short_id = (await upload_model())["model"]["shortId"]

    response = await client.post(f"/api/models/{short_id}/like", **kwargs)

    assert response.status_code == 200
    assert response.json() == {"likes": 1}


@pytest.mark.asyncio
async def test_timestamps_match_across_routes(client: AsyncClient, upload_model):
    created = (await upload_model())["model"]

    fetched = (await client.get(f"/api/models/{created['shortId']}")).json()
    listed = (await client.get("/api/models")).json()[0]

    assert fetched["createdAt"] == created["createdAt"]
    assert listed["createdAt"] == created["createdAt"]
    assert fetched["updatedAt"] == created["updatedAt"]
    assert created["createdAt"].endswith("Z")


class BrokenDeleteStorage(LocalStorageBackend):
    """Stores files but fails every delete with a non-storage error."""

    async def delete(self, path: str) -> bool:
        raise ConnectionError("storage endpoint unreachable")


@pytest.mark.asyncio
async def test_delete_survives_storage_failure(
    client: AsyncClient, app, upload_model, admin_headers, test_settings
):
    short_id = (await upload_model())["model"]["shortId"]
    app.state.storage = BrokenDeleteStorage(base_path=test_settings.LOCAL_STORAGE_PATH)

    response = await client.delete(f"/api/models/{short_id}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert (await client.get(f"/api/models/{short_id}")).status_code == 404
