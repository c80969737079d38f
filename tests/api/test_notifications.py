"""API tests for notification endpoints."""

from httpx import AsyncClient


def _notification(**overrides) -> dict:
    data = {
        "title": "Low flour",
        "message": "Flour is below minimum",
        "type": "warning",
        "target_location": "mall-360",
    }
    data.update(overrides)
    return data


class TestNotificationsAPI:
    async def test_create_with_defaults(self, client: AsyncClient):
        response = await client.post("/api/notifications", json=_notification())

        assert response.status_code == 201
        data = response.json()
        assert data["source_location"] == "System"
        assert data["priority"] == "normal"
        assert data["read"] is False

    async def test_missing_field_is_bad_request(self, client: AsyncClient):
        response = await client.post("/api/notifications", json=_notification(title=None))

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"
        listed = (await client.get("/api/notifications/mall-360")).json()
        assert listed["count"] == 0

    async def test_list_filters_by_type_case_insensitively(self, client: AsyncClient):
        await client.post("/api/notifications", json=_notification())
        await client.post("/api/notifications", json=_notification(type="info"))

        listed = (await client.get("/api/notifications/MALL-360", params={"type": "info"})).json()

        assert listed["count"] == 1
        assert listed["notifications"][0]["type"] == "info"

    async def test_mark_read_and_read_all(self, client: AsyncClient):
        first = (await client.post("/api/notifications", json=_notification())).json()
        await client.post("/api/notifications", json=_notification())

        marked = await client.put(f"/api/notifications/{first['id']}/read")
        remaining = await client.put("/api/notifications/mall-360/read-all")

        assert marked.json()["read"] is True
        assert remaining.json()["count"] == 1

    async def test_mark_read_unknown(self, client: AsyncClient):
        response = await client.put("/api/notifications/missing/read")

        assert response.status_code == 404
        assert response.json()["error_code"] == "NOTIFICATION_NOT_FOUND"

    async def test_clear_all(self, client: AsyncClient):
        await client.post("/api/notifications", json=_notification())
        await client.post("/api/notifications", json=_notification(target_location="kuwait-city"))

        cleared = await client.delete("/api/notifications/mall-360")

        assert cleared.json()["count"] == 1
        assert (await client.get("/api/notifications/kuwait-city")).json()["count"] == 1
