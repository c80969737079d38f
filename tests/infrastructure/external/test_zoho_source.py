"""Tests for the Zoho Inventory item source."""

import json

import httpx
import pytest

from outletstock.config import ZohoSettings
from outletstock.core.exceptions import ExternalSourceError
from outletstock.infrastructure.external.zoho_source import ZohoItemSource, map_zoho_item


@pytest.fixture
def zoho_settings() -> ZohoSettings:
    return ZohoSettings(
        client_id="client",
        client_secret="secret",
        refresh_token="refresh",
        organization_id="org-1",
        accounts_url="https://accounts.test",
        api_base_url="https://api.test/inventory/v1",
        page_size=2,
        detail_batch_size=2,
    )


def _detail(item_id: str, sku: str) -> dict:
    return {
        "item_id": item_id,
        "sku": sku,
        "name": f"Item {sku}",
        "unit": "kgs",
        "rate": 1.5,
        "status": "active",
        "locations": [
            {"location_name": "TLB City", "location_stock_on_hand": "4"},
            {"location_name": "Somewhere new", "location_stock_on_hand": 1},
        ],
    }


class FakeZoho:
    """Routes requests the way the Zoho endpoints answer them."""

    def __init__(self, item_ids: list[str]):
        self.item_ids = item_ids
        self.requests: list[httpx.Request] = []
        self.token_response = httpx.Response(200, json={"access_token": "tok"})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path == "/oauth/v2/token":
            return self.token_response
        if path.endswith("/items"):
            page = int(request.url.params["page"])
            per_page = int(request.url.params["per_page"])
            chunk = self.item_ids[(page - 1) * per_page : page * per_page]
            return httpx.Response(
                200,
                json={
                    "code": 0,
                    "items": [{"item_id": i} for i in chunk],
                    "page_context": {"has_more_page": page * per_page < len(self.item_ids)},
                },
            )
        if path.endswith("/itemdetails"):
            ids = request.url.params["item_ids"].split(",")
            return httpx.Response(
                200, json={"code": 0, "items": [_detail(i, f"SKU-{i}") for i in ids]}
            )
        return httpx.Response(404)


def _source(settings: ZohoSettings, handler) -> ZohoItemSource:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ZohoItemSource(settings, client=client)


class TestMapZohoItem:
    def test_maps_locations_and_price(self):
        item = map_zoho_item(_detail("1", "A1"))

        assert item.external_id == "1"
        assert item.sku == "A1"
        assert item.unit == "kgs"
        assert item.unit_price == 1.5
        assert [(loc.location, loc.quantity) for loc in item.locations] == [
            ("TLB City", 4.0),
            ("Somewhere new", 1.0),
        ]

    def test_warehouse_shape_and_fallbacks(self):
        item = map_zoho_item(
            {
                "item_id": 7,
                "sku": "  ",
                "item_name": "Salt",
                "purchase_rate": "2.5",
                "available_stock": 3,
                "status": "inactive",
                "warehouses": [{"warehouse_name": "360 Mall", "warehouse_stock_on_hand": -2}],
            }
        )

        assert item.sku is None
        assert item.name == "Salt"
        assert item.unit_price == 2.5
        assert item.quantity == 3.0
        assert item.is_active is False
        assert item.locations[0].quantity == 0.0


class TestZohoItemSource:
    async def test_fetches_all_pages_in_batches(self, zoho_settings: ZohoSettings):
        fake = FakeZoho(["1", "2", "3"])

        items = await _source(zoho_settings, fake).fetch_items()

        assert [i.sku for i in items] == ["SKU-1", "SKU-2", "SKU-3"]
        paths = [r.url.path for r in fake.requests]
        assert paths.count("/inventory/v1/items") == 2
        assert paths.count("/inventory/v1/itemdetails") == 2

    async def test_sends_token_and_organization(self, zoho_settings: ZohoSettings):
        fake = FakeZoho(["1"])

        await _source(zoho_settings, fake).fetch_items()

        token_request, list_request = fake.requests[0], fake.requests[1]
        assert token_request.method == "POST"
        assert token_request.url.params["grant_type"] == "refresh_token"
        assert token_request.url.params["refresh_token"] == "refresh"
        assert list_request.headers["Authorization"] == "Zoho-oauthtoken tok"
        assert list_request.url.params["organization_id"] == "org-1"

    async def test_unconfigured_fails_at_auth(self):
        source = ZohoItemSource(ZohoSettings(client_id="", client_secret="", refresh_token=""))

        with pytest.raises(ExternalSourceError) as exc_info:
            await source.fetch_items()

        assert exc_info.value.step == "auth"

    async def test_rejected_token(self, zoho_settings: ZohoSettings):
        fake = FakeZoho(["1"])
        fake.token_response = httpx.Response(200, json={"error": "invalid_code"})

        with pytest.raises(ExternalSourceError) as exc_info:
            await _source(zoho_settings, fake).fetch_items()

        assert exc_info.value.step == "auth"
        assert "invalid_code" in exc_info.value.message
        assert len(fake.requests) == 1

    async def test_http_error_names_step_and_status(self, zoho_settings: ZohoSettings):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/oauth/v2/token":
                return httpx.Response(200, json={"access_token": "tok"})
            return httpx.Response(401, json={"code": 57, "message": "unauthorized"})

        with pytest.raises(ExternalSourceError) as exc_info:
            await _source(zoho_settings, handler).fetch_items()

        assert exc_info.value.step == "list_items"
        assert exc_info.value.details["status_code"] == 401

    async def test_api_error_code_in_body(self, zoho_settings: ZohoSettings):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/oauth/v2/token":
                return httpx.Response(200, json={"access_token": "tok"})
            return httpx.Response(200, json={"code": 1002, "message": "Organization not found"})

        with pytest.raises(ExternalSourceError) as exc_info:
            await _source(zoho_settings, handler).fetch_items()

        assert "Organization not found" in exc_info.value.message

    async def test_timeout(self, zoho_settings: ZohoSettings):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(ExternalSourceError) as exc_info:
            await _source(zoho_settings, handler).fetch_items()

        assert exc_info.value.step == "auth"
        assert "timed out" in exc_info.value.message

    async def test_invalid_json(self, zoho_settings: ZohoSettings):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>oops</html>")

        with pytest.raises(ExternalSourceError) as exc_info:
            await _source(zoho_settings, handler).fetch_items()

        assert "not valid JSON" in exc_info.value.message

    async def test_detail_failure_names_step(self, zoho_settings: ZohoSettings):
        fake = FakeZoho(["1"])

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/itemdetails"):
                return httpx.Response(500, content=json.dumps({"code": 9}).encode())
            return fake(request)

        with pytest.raises(ExternalSourceError) as exc_info:
            await _source(zoho_settings, handler).fetch_items()

        assert exc_info.value.step == "item_details"

    async def test_malformed_detail_names_step(self, zoho_settings: ZohoSettings):
        fake = FakeZoho(["1"])

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/itemdetails"):
                broken = {**_detail("1", "SKU-1"), "locations": ["TLB City"]}
                return httpx.Response(200, json={"code": 0, "items": [broken]})
            return fake(request)

        with pytest.raises(ExternalSourceError) as exc_info:
            await _source(zoho_settings, handler).fetch_items()

        assert exc_info.value.step == "item_details"
        assert "malformed item" in exc_info.value.message
