from .ids import parse_id
from .stock import LOW_STOCK_THRESHOLD, StockStatus, get_stock_status

__all__ = ['parse_id', 'LOW_STOCK_THRESHOLD', 'StockStatus', 'get_stock_status']
