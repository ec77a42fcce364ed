from models.category import Category
from models.medicine import Medicine
from models.usage_log import UsageLog

__all__ = ['Category', 'Medicine', 'UsageLog',]
