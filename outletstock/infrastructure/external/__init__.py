"""External inventory sources."""

from pathlib import Path

from outletstock.config import get_settings
from outletstock.core.interfaces.item_source import IExternalItemSource
from outletstock.infrastructure.external.file_source import JsonFileItemSource
from outletstock.infrastructure.external.zoho_source import ZohoItemSource, map_zoho_item


def get_item_source(from_file: Path | None = None) -> IExternalItemSource:
    """The JSON file source when a path is given, otherwise Zoho."""
    if from_file is not None:
        return JsonFileItemSource(from_file)
    return ZohoItemSource(get_settings().zoho)


__all__ = [
    "ZohoItemSource",
    "JsonFileItemSource",
    "map_zoho_item",
    "get_item_source",
]
