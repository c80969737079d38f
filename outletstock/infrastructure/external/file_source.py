"""Item source backed by a saved JSON dump of the external catalogue."""

import json
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from outletstock.config import get_logger
from outletstock.core.exceptions import ExternalSourceError
from outletstock.core.interfaces.item_source import ExternalItem, IExternalItemSource
from outletstock.infrastructure.external.zoho_source import map_zoho_item

logger = get_logger(__name__)


class JsonFileItemSource(IExternalItemSource):
    """
    Reads items from a JSON file.

    Accepts a list of items or an object with an ``items`` list. Entries
    carrying a Zoho ``item_id`` are mapped from the Zoho payload shape;
    anything else must already match ExternalItem.
    """

    def __init__(self, path: Path):
        self._path = Path(path)

    async def fetch_items(self) -> list[ExternalItem]:
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ExternalSourceError("read_file", f"cannot read {self._path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ExternalSourceError("read_file", f"invalid JSON in {self._path}: {e}") from e

        raw_items = payload.get("items", []) if isinstance(payload, dict) else payload
        if not isinstance(raw_items, list):
            raise ExternalSourceError("read_file", "expected a list of items")

        try:
            items = [
                map_zoho_item(raw) if "item_id" in raw else ExternalItem.model_validate(raw)
                for raw in raw_items
            ]
        except (PydanticValidationError, AttributeError, TypeError) as e:
            raise ExternalSourceError("read_file", f"malformed item: {e}") from e

        logger.info("file_items_loaded", path=str(self._path), count=len(items))
        return items
