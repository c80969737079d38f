"""
Zoho Inventory item source.

Authenticates with an OAuth refresh token, pages through the item list,
then fetches item details (which carry per-location stock) in batches.
Every request runs under an explicit timeout; failures are reported as
ExternalSourceError naming the step that failed.
"""

from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from outletstock.config import ZohoSettings, get_logger
from outletstock.core.exceptions import ExternalSourceError
from outletstock.core.interfaces.item_source import (
    ExternalItem,
    ExternalLocationQuantity,
    IExternalItemSource,
)

logger = get_logger(__name__)


def _as_float(value: Any) -> float:
    try:
        return max(0.0, float(value))
    except (TypeError, ValueError):
        return 0.0


def _first_present(raw: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if raw.get(key) not in (None, ""):
            return raw[key]
    return None


def map_zoho_item(raw: dict[str, Any]) -> ExternalItem:
    """Translate one Zoho item payload into an ExternalItem."""
    locations = [
        ExternalLocationQuantity(
            location=loc.get("location_name") or loc.get("warehouse_name") or "",
            quantity=_as_float(
                _first_present(loc, "location_stock_on_hand", "warehouse_stock_on_hand")
            ),
        )
        for loc in (raw.get("locations") or raw.get("warehouses") or [])
    ]
    quantity = _first_present(raw, "stock_on_hand", "available_stock", "opening_stock")

    return ExternalItem(
        external_id=str(raw["item_id"]) if raw.get("item_id") is not None else None,
        sku=(raw.get("sku") or "").strip() or None,
        name=(raw.get("name") or raw.get("item_name") or "").strip(),
        category=raw.get("category_name") or None,
        description=raw.get("description") or None,
        unit=raw.get("unit") or None,
        unit_price=_as_float(_first_present(raw, "rate", "purchase_rate")),
        quantity=_as_float(quantity) if quantity is not None else None,
        locations=locations,
        supplier_id=str(raw["vendor_id"]) if raw.get("vendor_id") else None,
        supplier_name=raw.get("vendor_name") or None,
        is_active=(raw.get("status") or "active") == "active",
    )


class ZohoItemSource(IExternalItemSource):
    """Fetches the full item catalogue from Zoho Inventory."""

    def __init__(
        self,
        settings: ZohoSettings,
        client: httpx.AsyncClient | None = None,
    ):
        self._settings = settings
        self._client = client

    async def fetch_items(self) -> list[ExternalItem]:
        """Fetch and map every item. Raises ExternalSourceError on any failure."""
        if not self._settings.is_configured:
            raise ExternalSourceError("auth", "Zoho credentials are not configured")

        if self._client is not None:
            return await self._fetch(self._client)

        async with httpx.AsyncClient(timeout=self._settings.timeout) as client:
            return await self._fetch(client)

    async def _fetch(self, client: httpx.AsyncClient) -> list[ExternalItem]:
        token = await self._get_access_token(client)
        headers = {"Authorization": f"Zoho-oauthtoken {token}"}

        item_ids = await self._list_item_ids(client, headers)
        logger.info("zoho_items_listed", count=len(item_ids))

        items: list[ExternalItem] = []
        batch_size = self._settings.detail_batch_size
        for start in range(0, len(item_ids), batch_size):
            batch = item_ids[start : start + batch_size]
            details = await self._get_item_details(client, headers, batch)
            try:
                items.extend(map_zoho_item(raw) for raw in details)
            except (PydanticValidationError, AttributeError, TypeError) as e:
                raise ExternalSourceError("item_details", f"malformed item: {e}") from e
            logger.info(
                "zoho_item_details_fetched",
                batch=start // batch_size + 1,
                fetched=len(details),
            )
        return items

    async def _get_access_token(self, client: httpx.AsyncClient) -> str:
        data = await self._request(
            client,
            "auth",
            "POST",
            f"{self._settings.accounts_url.rstrip('/')}/oauth/v2/token",
            params={
                "refresh_token": self._settings.refresh_token,
                "client_id": self._settings.client_id,
                "client_secret": self._settings.client_secret,
                "grant_type": "refresh_token",
            },
        )
        token = data.get("access_token")
        if not token:
            raise ExternalSourceError("auth", data.get("error") or "no access token in response")
        logger.info("zoho_token_refreshed")
        return token

    async def _list_item_ids(
        self, client: httpx.AsyncClient, headers: dict[str, str]
    ) -> list[str]:
        ids: list[str] = []
        page = 1
        while True:
            data = await self._request(
                client,
                "list_items",
                "GET",
                f"{self._settings.api_base_url.rstrip('/')}/items",
                headers=headers,
                params=self._org_params(page=page, per_page=self._settings.page_size),
            )
            ids.extend(str(item["item_id"]) for item in data.get("items", []) if "item_id" in item)
            if not data.get("page_context", {}).get("has_more_page"):
                return ids
            page += 1

    async def _get_item_details(
        self,
        client: httpx.AsyncClient,
        headers: dict[str, str],
        item_ids: list[str],
    ) -> list[dict[str, Any]]:
        data = await self._request(
            client,
            "item_details",
            "GET",
            f"{self._settings.api_base_url.rstrip('/')}/itemdetails",
            headers=headers,
            params=self._org_params(item_ids=",".join(item_ids)),
        )
        return data.get("items", [])

    def _org_params(self, **params: Any) -> dict[str, Any]:
        if self._settings.organization_id:
            params["organization_id"] = self._settings.organization_id
        return params

    async def _request(
        self,
        client: httpx.AsyncClient,
        step: str,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> dict[str, Any]:
        """Send one request and return its JSON body, translating failures."""
        try:
            response = await client.request(
                method, url, timeout=self._settings.timeout, **kwargs
            )
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            logger.error("zoho_request_timeout", step=step, url=url)
            raise ExternalSourceError(step, f"timed out after {self._settings.timeout}s") from e
        except httpx.HTTPStatusError as e:
            logger.error("zoho_request_rejected", step=step, status=e.response.status_code)
            raise ExternalSourceError(
                step, f"HTTP {e.response.status_code}", status_code=e.response.status_code
            ) from e
        except httpx.HTTPError as e:
            logger.error("zoho_request_failed", step=step, error=str(e))
            raise ExternalSourceError(step, str(e) or e.__class__.__name__) from e
        except ValueError as e:
            raise ExternalSourceError(step, "response was not valid JSON") from e

        # API responses carry code 0 on success; the token endpoint has no code
        if isinstance(data, dict) and data.get("code") not in (None, 0):
            raise ExternalSourceError(step, data.get("message") or f"error code {data['code']}")
        if not isinstance(data, dict):
            raise ExternalSourceError(step, "unexpected response shape")
        return data
