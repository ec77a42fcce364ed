from enum import Enum

LOW_STOCK_THRESHOLD = 3


class StockStatus(str, Enum):
    OUT = "out"
    LOW = "low"
    IN_STOCK = "in-stock"


def get_stock_status(quantity: int) -> StockStatus:
    """Classify a quantity. Derived on every read, never stored."""
    if quantity <= 0:
        return StockStatus.OUT
    if quantity <= LOW_STOCK_THRESHOLD:
        return StockStatus.LOW
    return StockStatus.IN_STOCK
