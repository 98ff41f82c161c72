from .catalog import Product, PRODUCT_CATEGORIES
from .inventory import Inventory, INVENTORY_STATUSES, DEFAULT_UNIT
from .movements import Movement, MOVEMENT_TYPES
from .reports import Report

__all__ = [
    'Product', 'PRODUCT_CATEGORIES',
    'Inventory', 'INVENTORY_STATUSES', 'DEFAULT_UNIT',
    'Movement', 'MOVEMENT_TYPES',
    'Report',
]
