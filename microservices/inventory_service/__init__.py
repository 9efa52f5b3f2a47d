"""
Inventory Service

Stock ledger for the retail backend: pre-flight availability checks and
all-or-nothing stock reduction for orders.
"""

__version__ = "1.0.0"
__service_name__ = "inventory_service"
