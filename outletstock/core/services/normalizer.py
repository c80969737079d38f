"""
Unit and location normalization.

Maps free-text units and location names reported by the external inventory
system onto the canonical unit enumeration and location keys.
"""

from collections.abc import Iterable

from outletstock.config import get_logger
from outletstock.core.entities.stock import UnitOfMeasure
from outletstock.core.exceptions import ConfigurationError, ValidationError

logger = get_logger(__name__)

UNIT_ALIASES: dict[str, UnitOfMeasure] = {
    "kg": UnitOfMeasure.KG,
    "kgs": UnitOfMeasure.KG,
    "kilo": UnitOfMeasure.KG,
    "kilogram": UnitOfMeasure.KG,
    "kilograms": UnitOfMeasure.KG,
    "ltr": UnitOfMeasure.LTR,
    "l": UnitOfMeasure.LTR,
    "lt": UnitOfMeasure.LTR,
    "liter": UnitOfMeasure.LTR,
    "liters": UnitOfMeasure.LTR,
    "litre": UnitOfMeasure.LTR,
    "litres": UnitOfMeasure.LTR,
    "g": UnitOfMeasure.G,
    "gm": UnitOfMeasure.G,
    "gram": UnitOfMeasure.G,
    "grams": UnitOfMeasure.G,
    "ml": UnitOfMeasure.ML,
    "milliliter": UnitOfMeasure.ML,
    "milliliters": UnitOfMeasure.ML,
    "millilitre": UnitOfMeasure.ML,
    "millilitres": UnitOfMeasure.ML,
    "piece": UnitOfMeasure.PIECE,
    "pieces": UnitOfMeasure.PIECE,
    "pcs": UnitOfMeasure.PIECE,
    "pc": UnitOfMeasure.PIECE,
    "unit": UnitOfMeasure.PIECE,
    "units": UnitOfMeasure.PIECE,
    "nos": UnitOfMeasure.PIECE,
    "box": UnitOfMeasure.BOX,
    "boxes": UnitOfMeasure.BOX,
    "pack": UnitOfMeasure.PACK,
    "packs": UnitOfMeasure.PACK,
    "package": UnitOfMeasure.PACK,
    "packages": UnitOfMeasure.PACK,
}

# Shorter inputs are only matched exactly, never by containment
_MIN_PARTIAL_LENGTH = 3


def normalize_unit(
    raw: str | None, default: UnitOfMeasure | str = UnitOfMeasure.KG
) -> UnitOfMeasure:
    """Return the canonical unit for ``raw``, or ``default`` when unrecognized."""
    key = (raw or "").strip().lower()
    unit = UNIT_ALIASES.get(key)
    if unit is None:
        try:
            unit = UnitOfMeasure(key)
        except ValueError:
            if key:
                logger.debug("unit_defaulted", raw_unit=raw, default=str(default))
            return UnitOfMeasure(default)
    return unit


class LocationMapper:
    """
    Resolves external location names to canonical location keys.

    Unrecognized names are folded into the fallback location so that no
    stock is lost; every such substitution is logged.
    """

    def __init__(
        self,
        locations: Iterable[str],
        aliases: dict[str, str],
        fallback: str,
    ):
        self.locations = list(dict.fromkeys(locations))
        if fallback not in self.locations:
            raise ConfigurationError(
                f"Fallback location '{fallback}' is not a known location",
                details={"fallback": fallback, "locations": self.locations},
            )
        for alias, key in aliases.items():
            if key not in self.locations:
                raise ConfigurationError(
                    f"Alias '{alias}' points at unknown location '{key}'",
                    details={"alias": alias, "location": key},
                )
        self.fallback = fallback
        self._keys = {key.lower(): key for key in self.locations}
        self._aliases = {alias.strip().lower(): key for alias, key in aliases.items()}

    def match(self, name: str | None) -> str | None:
        """Canonical key for ``name``, or None when nothing matches."""
        needle = (name or "").strip().lower()
        if not needle:
            return None

        if needle in self._keys:
            return self._keys[needle]
        if needle in self._aliases:
            return self._aliases[needle]

        # Partial containment in either direction
        for alias, key in self._aliases.items():
            if alias in needle:
                return key
            if len(needle) >= _MIN_PARTIAL_LENGTH and needle in alias:
                return key
        return None

    def resolve(self, name: str | None) -> str:
        """Canonical key for ``name``, falling back to the primary location."""
        key = self.match(name)
        if key is None:
            logger.warning(
                "location_folded_into_fallback",
                external_location=name,
                fallback=self.fallback,
            )
            return self.fallback
        return key

    def empty_stock_map(self) -> dict[str, float]:
        """A stock map with every canonical location at zero."""
        return {key: 0.0 for key in self.locations}

    def fold(self, pairs: Iterable[tuple[str | None, float]]) -> dict[str, float]:
        """
        Map ``(location name, quantity)`` pairs onto canonical keys.

        Quantities landing on the same key are summed.

        Raises:
            ValidationError: if any quantity is negative
        """
        folded: dict[str, float] = {}
        for name, qty in pairs:
            if qty < 0:
                raise ValidationError("quantity", "must be >= 0", qty)
            key = self.resolve(name)
            folded[key] = folded.get(key, 0.0) + qty
        return folded
