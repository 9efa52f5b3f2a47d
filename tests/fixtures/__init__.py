"""
Shared Test Fixtures

Centralized factories used across all test layers.

Structure:
    - common.py: Base ID generators, timestamps
    - {service}_fixtures.py: Per-service factories
"""

# Common utilities
from .common import (
    make_product_id,
    make_category_id,
    make_order_id,
    make_email,
    make_timestamp,
)

# Inventory service fixtures
from .inventory_fixtures import (
    make_stock_item,
    make_stock_row,
)

# Fulfillment service fixtures
from .fulfillment_fixtures import (
    make_product,
    make_category,
    make_line_item,
    make_address,
    make_order,
    make_carrier_shipment_response,
)

__all__ = [
    "make_product_id",
    "make_category_id",
    "make_order_id",
    "make_email",
    "make_timestamp",
    "make_stock_item",
    "make_stock_row",
    "make_product",
    "make_category",
    "make_line_item",
    "make_address",
    "make_order",
    "make_carrier_shipment_response",
]
