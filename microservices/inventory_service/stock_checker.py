"""
Stock Availability Checker

Best-effort pre-flight check of requested quantities against current stock.
Reads are point reads outside any transaction; nothing is reserved.
"""

import logging
from typing import Any, Dict, List, Sequence, Union

from pydantic import ValidationError

from .models import InsufficientStockItem, StockItemRequest
from .protocols import (
    InsufficientStockError,
    StockRepositoryProtocol,
    StockValidationError,
)

logger = logging.getLogger(__name__)

StockItemInput = Union[StockItemRequest, Dict[str, Any]]


def normalize_stock_items(items: Sequence[StockItemInput]) -> List[StockItemRequest]:
    """
    Validate caller input before any I/O.

    Raises:
        StockValidationError: empty list, missing product_id or quantity <= 0
    """
    if not items:
        raise StockValidationError("No order items provided")

    normalized = []
    for index, item in enumerate(items):
        try:
            if isinstance(item, StockItemRequest):
                item = StockItemRequest.model_validate(item.model_dump())
            else:
                item = StockItemRequest.model_validate(item)
        except ValidationError as e:
            raise StockValidationError(f"Invalid order item at position {index}: {e}") from e
        normalized.append(item)

    return normalized


class StockAvailabilityChecker:
    """Reports every shortfall in a set of requested items"""

    def __init__(self, repository: StockRepositoryProtocol):
        self.repository = repository

    async def find_shortfalls(self, items: List[StockItemRequest]) -> List[InsufficientStockItem]:
        shortfalls = []
        for item in items:
            available = await self.repository.get_available_stock(item.product_id)
            if available < item.quantity:
                shortfalls.append(InsufficientStockItem(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    requested=item.quantity,
                    available=available,
                ))
        return shortfalls

    async def validate(self, items: Sequence[StockItemInput]) -> List[StockItemRequest]:
        """
        Check all items against available stock.

        Returns:
            The validated item requests

        Raises:
            StockValidationError: malformed input
            InsufficientStockError: one or more shortfalls, all reported at once
        """
        requests = normalize_stock_items(items)
        shortfalls = await self.find_shortfalls(requests)

        if shortfalls:
            logger.warning(
                f"Stock pre-check failed for {len(shortfalls)} of {len(requests)} items: "
                f"{[s.product_id for s in shortfalls]}"
            )
            raise InsufficientStockError(shortfalls)

        return requests
