"""
Inventory Service Business Logic

Stock ledger operations: pre-flight validation, all-or-nothing stock
reduction for an order, restocking and stock reports.
"""

import asyncio
import logging
from typing import List, Optional, Sequence

from .models import (
    StockItemRequest,
    StockOperationResponse,
    StockRecord,
    StockReductionFailure,
)
from .protocols import (
    StockNotFoundError,
    StockReductionError,
    StockRepositoryProtocol,
    StockValidationError,
)
from .stock_checker import StockAvailabilityChecker, StockItemInput, normalize_stock_items

logger = logging.getLogger(__name__)


class InventoryService:
    """
    Stock ledger business logic service

    Correctness of reductions rests on the repository's guarded conditional
    update and transaction rollback; no in-process locking is used.
    """

    def __init__(
        self,
        repository: StockRepositoryProtocol,
        low_stock_threshold: int = 5,
    ):
        """
        Initialize Inventory Service

        Args:
            repository: Stock store (dependency injection)
            low_stock_threshold: Default threshold for low stock reports
        """
        self.repository = repository
        self.checker = StockAvailabilityChecker(repository)
        self.low_stock_threshold = low_stock_threshold

        logger.info("InventoryService initialized")

    # Validation

    async def validate_stock_for_order(self, items: Sequence[StockItemInput]) -> StockOperationResponse:
        """
        Pre-flight stock check; not a reservation.

        Raises:
            StockValidationError, InsufficientStockError
        """
        requests = await self.checker.validate(items)
        return StockOperationResponse(
            success=True,
            message="Stock validation passed",
            items=requests,
        )

    # Reduction

    async def reduce_stock_for_order(
        self,
        items: Sequence[StockItemInput],
        timeout: Optional[float] = None,
    ) -> StockOperationResponse:
        """
        Decrement stock for every item in one transaction, or for none.

        Args:
            items: Order lines (product_id, quantity, optional product_name)
            timeout: Deadline in seconds for the transactional part

        Raises:
            StockValidationError: malformed input, before any I/O
            InsufficientStockError: pre-check shortfall
            StockReductionError: a guarded update did not apply; transaction rolled back
            asyncio.TimeoutError: deadline passed; transaction rolled back
        """
        requests = normalize_stock_items(items)

        # Pre-check avoids opening a transaction that is bound to fail
        await self.checker.validate(requests)

        try:
            await asyncio.wait_for(self._apply_reductions(requests), timeout=timeout)
        except StockReductionError as e:
            logger.warning(f"Stock reduction rolled back: {e}")
            raise
        except asyncio.TimeoutError:
            logger.error(f"Stock reduction timed out after {timeout}s, transaction rolled back")
            raise
        except Exception as e:
            logger.error(f"Error reducing stock for order: {e}")
            raise

        logger.info(
            f"Stock reduced for {len(requests)} items: "
            f"{[(r.product_id, r.quantity) for r in requests]}"
        )
        return StockOperationResponse(
            success=True,
            message="Stock reduced successfully",
            items=requests,
        )

    async def _apply_reductions(self, requests: List[StockItemRequest]) -> None:
        # Consistent row lock order across concurrent multi-item orders
        ordered = sorted(requests, key=lambda r: r.product_id)

        async with self.repository.transaction() as txn:
            for item in ordered:
                result = await txn.reduce_stock(item.product_id, item.quantity)

                if result.matched_count == 0:
                    raise StockReductionError(
                        product_id=item.product_id,
                        product_name=item.product_name,
                        reason=StockReductionFailure.NOT_FOUND_OR_INSUFFICIENT,
                    )

                if result.modified_count == 0:
                    raise StockReductionError(
                        product_id=item.product_id,
                        product_name=item.product_name,
                        reason=StockReductionFailure.NOT_MODIFIED,
                    )

    # Restock and reports

    async def restock(self, product_id: str, quantity: int) -> StockRecord:
        """Add units to a product's available stock"""
        if not product_id:
            raise StockValidationError("product_id is required")
        if quantity <= 0:
            raise StockValidationError("quantity must be greater than 0")

        record = await self.repository.increase_stock(product_id, quantity)
        if record is None:
            raise StockNotFoundError(f"No stock record for product {product_id}")

        logger.info(f"Restocked {product_id} by {quantity}, now {record.available_stock}")
        return record

    async def get_stock(self, product_id: str) -> Optional[StockRecord]:
        """Get stock ledger row for a product"""
        return await self.repository.get_stock_record(product_id)

    async def get_low_stock_products(self, threshold: Optional[int] = None) -> List[StockRecord]:
        """Products still in stock but at or below the threshold"""
        if threshold is None:
            threshold = self.low_stock_threshold
        if threshold < 0:
            raise StockValidationError("threshold must not be negative")
        return await self.repository.list_low_stock(threshold)

    async def get_out_of_stock_products(self) -> List[StockRecord]:
        """Products with no available stock"""
        return await self.repository.list_out_of_stock()
