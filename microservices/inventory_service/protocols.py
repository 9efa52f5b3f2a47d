"""
Inventory Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import AsyncContextManager, List, Optional, Protocol, runtime_checkable

# Import only models (no I/O dependencies)
from .models import (
    InsufficientStockItem,
    StockRecord,
    StockReductionFailure,
    StockUpdateResult,
)


# ============================================================================
# Custom Exceptions - defined here to avoid importing repository
# ============================================================================

class InventoryServiceError(Exception):
    """Base exception for inventory service errors"""
    pass


class StockValidationError(InventoryServiceError):
    """Malformed stock request (empty item list, missing product, non-positive quantity)"""
    pass


class InsufficientStockError(InventoryServiceError):
    """Pre-check found one or more items exceeding available stock"""

    def __init__(self, items: List[InsufficientStockItem]):
        self.items = items
        details = "; ".join(
            f"{item.product_name or item.product_id}: "
            f"requested {item.requested}, available {item.available} - {item.reason}"
            for item in items
        )
        super().__init__(f"Stock validation failed: {details}")


class StockReductionError(InventoryServiceError):
    """Transactional stock decrement failed; nothing was applied"""

    def __init__(
        self,
        product_id: str,
        product_name: Optional[str] = None,
        reason: StockReductionFailure = StockReductionFailure.NOT_FOUND_OR_INSUFFICIENT,
    ):
        self.product_id = product_id
        self.product_name = product_name
        self.reason = reason
        name = product_name or product_id
        if reason == StockReductionFailure.NOT_MODIFIED:
            message = f"Failed to reduce stock for: {name}"
        else:
            message = f"Product not found or insufficient stock: {name}"
        super().__init__(message)


class StockNotFoundError(InventoryServiceError):
    """No stock ledger row for the product"""
    pass


# ============================================================================
# Repository Protocols
# ============================================================================

@runtime_checkable
class StockTransactionProtocol(Protocol):
    """Operations available inside an open stock transaction"""

    async def reduce_stock(self, product_id: str, quantity: int) -> StockUpdateResult:
        """
        Guarded conditional decrement.

        Decrements available_stock and increments quantity_sold by quantity,
        only where available_stock >= quantity, as a single storage operation.
        """
        ...


@runtime_checkable
class StockRepositoryProtocol(Protocol):
    """
    Interface for the Stock Store.

    Implementations must provide these methods.
    Used for dependency injection to enable testing.
    """

    async def get_available_stock(self, product_id: str) -> int:
        """Point read of available stock; 0 when the product is unknown"""
        ...

    async def get_stock_record(self, product_id: str) -> Optional[StockRecord]:
        """Get the full ledger row"""
        ...

    def transaction(self) -> AsyncContextManager[StockTransactionProtocol]:
        """
        Open a transaction scope.

        Commits when the block exits normally, rolls back on any exception
        (including cancellation), always releases the underlying session.
        """
        ...

    async def increase_stock(self, product_id: str, quantity: int) -> Optional[StockRecord]:
        """Atomically add quantity to available stock"""
        ...

    async def list_low_stock(self, threshold: int) -> List[StockRecord]:
        """Records with 0 < available_stock <= threshold"""
        ...

    async def list_out_of_stock(self) -> List[StockRecord]:
        """Records with available_stock == 0"""
        ...
