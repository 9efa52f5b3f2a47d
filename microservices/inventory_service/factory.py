"""
Inventory Service Factory

Factory functions for creating service instances with real dependencies.
This is the ONLY place that imports I/O-dependent modules.

Usage:
    from .factory import create_inventory_service
    service = create_inventory_service()
"""
from typing import Optional

from core.config import AppConfig, get_settings
from core.logger import setup_service_logger

from .inventory_service import InventoryService


def create_inventory_service(
    config: Optional[AppConfig] = None,
    db=None,
) -> InventoryService:
    """
    Create InventoryService with real dependencies.

    This function imports the real repository (which has I/O dependencies).
    Use this in production, NOT in tests.

    Args:
        config: Application configuration (defaults to global settings)
        db: Optional PostgresClientWrapper override

    Returns:
        Configured InventoryService instance
    """
    # Import real repository here (not at module level)
    from .stock_repository import StockRepository

    config = config or get_settings()
    setup_service_logger(__package__, config.logging)

    repository = StockRepository(db=db, config=config.inventory)

    return InventoryService(
        repository=repository,
        low_stock_threshold=config.inventory.low_stock_threshold,
    )
