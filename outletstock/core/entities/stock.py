"""Stock classification shared by materials and inventory records."""

from enum import Enum


class StockStatus(str, Enum):
    """Categorical stock level."""

    IN_STOCK = "In Stock"
    LOW_STOCK = "Low Stock"
    OUT_OF_STOCK = "Out of Stock"
    OVERSTOCK = "Overstock"


class UnitOfMeasure(str, Enum):
    """Canonical units of measure."""

    KG = "kg"
    LTR = "ltr"
    G = "g"
    ML = "ml"
    PIECE = "piece"
    BOX = "box"
    PACK = "pack"


class ItemType(str, Enum):
    """Kind of stocked item."""

    RAW_MATERIAL = "Raw Material"
    FINISHED_GOODS = "Finished Goods"


def derive_stock_status(current: float, minimum: float, maximum: float) -> StockStatus:
    """
    Classify a stock level against its thresholds.

    The low boundary is inclusive (current == minimum is Low Stock) and the
    high boundary is exclusive (current == maximum is In Stock).
    """
    if current <= 0:
        return StockStatus.OUT_OF_STOCK
    if current <= minimum:
        return StockStatus.LOW_STOCK
    if current > maximum:
        return StockStatus.OVERSTOCK
    return StockStatus.IN_STOCK
