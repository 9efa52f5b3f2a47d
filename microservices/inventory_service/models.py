"""
Inventory Service Data Models

Per-product stock ledger: available stock and units sold.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, Field


class StockReductionFailure(str, Enum):
    """Why a guarded stock decrement did not apply"""
    NOT_FOUND_OR_INSUFFICIENT = "not_found_or_insufficient"
    NOT_MODIFIED = "not_modified"


class StockRecord(BaseModel):
    """Stock ledger row for a product"""
    product_id: str
    available_stock: int = Field(default=0, ge=0)
    quantity_sold: int = Field(default=0, ge=0)
    updated_at: Optional[datetime] = None


class StockItemRequest(BaseModel):
    """Requested quantity of one product (an order line)"""
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0)
    product_name: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.product_name or self.product_id


class InsufficientStockItem(BaseModel):
    """Shortfall detail for one requested item"""
    product_id: str
    product_name: Optional[str] = None
    requested: int
    available: int
    reason: str = "Insufficient stock"


class StockUpdateResult(BaseModel):
    """Outcome of one guarded conditional update"""
    matched_count: int = 0
    modified_count: int = 0


class StockOperationResponse(BaseModel):
    """Result of a stock validation or reduction"""
    success: bool
    message: str
    items: List[StockItemRequest] = Field(default_factory=list)
