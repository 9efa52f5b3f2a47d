"""
Inventory Service Fixtures

Factories for stock ledger test data.
"""
from typing import Any, Dict, Optional

from .common import make_product_id


def make_stock_item(
    product_id: Optional[str] = None,
    quantity: int = 1,
    product_name: Optional[str] = None,
) -> Dict[str, Any]:
    """Create a stock item request dict"""
    item = {
        "product_id": product_id or make_product_id(),
        "quantity": quantity,
    }
    if product_name is not None:
        item["product_name"] = product_name
    return item


def make_stock_row(
    product_id: Optional[str] = None,
    available_stock: int = 10,
    quantity_sold: int = 0,
) -> Dict[str, Any]:
    """Create a product_stock row as returned by the database"""
    return {
        "product_id": product_id or make_product_id(),
        "available_stock": available_stock,
        "quantity_sold": quantity_sold,
        "updated_at": None,
    }
