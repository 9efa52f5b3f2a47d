"""
Fulfillment Service Data Models

Orders handed to the shipping carrier, the catalogue data needed to
describe them, and the shipment metadata returned by the carrier.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, Field, model_validator


class WeightUnit(str, Enum):
    """Product weight unit"""
    KG = "kg"
    G = "g"


class PaymentMethod(str, Enum):
    """Order payment method"""
    COD = "cod"
    CARD = "card"
    UPI = "upi"
    NET_BANKING = "net_banking"
    WALLET = "wallet"


# ============================================================================
# Catalogue data (resolved by lookup, never owned by the order)
# ============================================================================

class Weight(BaseModel):
    """Product weight"""
    number: float = Field(..., ge=0)
    unit: WeightUnit = WeightUnit.KG

    @property
    def kilograms(self) -> float:
        if self.unit == WeightUnit.G:
            return self.number / 1000
        return self.number


class Dimensions(BaseModel):
    """Product dimensions in centimetres"""
    l: float = Field(..., ge=0)
    b: float = Field(..., ge=0)
    h: float = Field(..., ge=0)


class ProductInfo(BaseModel):
    """Product attributes needed for shipping"""
    product_id: str
    name: Optional[str] = None
    code: Optional[str] = None
    category_id: Optional[str] = None
    weight: Weight
    dimensions: Dimensions


class CategoryInfo(BaseModel):
    """Category attributes needed for shipping"""
    category_id: str
    name: Optional[str] = None
    hsn: str = Field(default="", max_length=8)


# ============================================================================
# Order (read-only view)
# ============================================================================

class Address(BaseModel):
    """Postal address"""
    name: str
    address_line1: str
    address_line2: Optional[str] = None
    city: str
    state: str
    pin_code: str
    country: str = "India"
    phone: str


class OrderLineItem(BaseModel):
    """Order line, frozen once the order is created"""
    product_id: str
    product_name: str
    product_code: str
    quantity: int = Field(..., ge=1)
    price_at_purchase: Decimal = Field(..., ge=0)
    item_total: Optional[Decimal] = Field(default=None, ge=0)

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _default_item_total(cls, data):
        if isinstance(data, dict) and data.get("item_total") is None:
            quantity = data.get("quantity")
            price = data.get("price_at_purchase")
            if quantity is not None and price is not None:
                data = {**data, "item_total": Decimal(str(price)) * int(quantity)}
        return data

    @model_validator(mode="after")
    def _check_item_total(self):
        expected = self.price_at_purchase * self.quantity
        if self.item_total != expected:
            raise ValueError(
                f"item_total {self.item_total} does not match quantity x price ({expected})"
            )
        return self


class Order(BaseModel):
    """Confirmed order to dispatch"""
    order_id: str
    order_number: str
    items: List[OrderLineItem] = Field(..., min_length=1)
    shipping_address: Address
    subtotal: Decimal = Field(..., ge=0)
    total: Decimal = Field(..., ge=0)
    payment_method: Optional[PaymentMethod] = None
    created_at: datetime


# ============================================================================
# Shipping
# ============================================================================

class PackageDetails(BaseModel):
    """Shippable package, recomputed per dispatch attempt"""
    weight_kg: float
    length_cm: float
    breadth_cm: float
    height_cm: float


class ShipmentRecord(BaseModel):
    """Shipment metadata returned by the carrier"""
    shipment_id: str
    carrier_order_id: Optional[str] = None
    awb_number: Optional[str] = None
    courier_name: Optional[str] = None
    courier_company_id: Optional[int] = None
    status: str = "UNKNOWN"
    status_code: int = 0
    tracking_url: Optional[str] = None
    label_url: Optional[str] = None
