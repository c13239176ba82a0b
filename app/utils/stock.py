"""Stock level classification."""
from app.core.constants import StockStatus


def classify_stock(current: int, minimum: int, maximum: int) -> StockStatus:
    """Classify a stock level against its thresholds.

    The checks run in a fixed order so every input lands in exactly one
    bucket: out-of-stock, then low-stock (at or below the minimum), then
    overstock (at or above the maximum), otherwise in-stock.
    """
    if current <= 0:
        return StockStatus.OUT_OF_STOCK
    if current <= minimum:
        return StockStatus.LOW_STOCK
    if current >= maximum:
        return StockStatus.OVERSTOCK
    return StockStatus.IN_STOCK
