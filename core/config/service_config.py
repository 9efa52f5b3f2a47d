#!/usr/bin/env python3
"""Service configuration for peer services and the shipping carrier

Peer services the core calls over HTTP (catalogue) and the third-party
carrier integration (Shiprocket-compatible API).
"""
import os
from dataclasses import dataclass
from typing import Optional

def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default

def _float(val: str, default: float) -> float:
    try:
        return float(val) if val else default
    except ValueError:
        return default


@dataclass
class ServiceConfig:
    """Peer service endpoints"""

    # Catalogue service - product and category lookups
    catalog_service_url: str = "http://localhost:8215"
    catalog_timeout: float = 10.0

    @classmethod
    def from_env(cls) -> 'ServiceConfig':
        """Load service configuration from environment variables"""
        return cls(
            catalog_service_url=os.getenv("CATALOG_SERVICE_URL", "http://localhost:8215"),
            catalog_timeout=_float(os.getenv("CATALOG_TIMEOUT", "10"), 10.0),
        )


@dataclass
class CarrierConfig:
    """Shipping carrier credentials and endpoint"""

    base_url: str = "https://apiv2.shiprocket.in/v1/external"
    email: Optional[str] = None
    password: Optional[str] = None
    pickup_location: str = "Default"
    channel_id: str = ""
    timeout: float = 30.0

    @property
    def has_credentials(self) -> bool:
        return bool(self.email and self.password)

    @classmethod
    def from_env(cls) -> 'CarrierConfig':
        """Load carrier configuration from environment variables"""
        return cls(
            base_url=os.getenv("SHIPROCKET_BASE_URL", "https://apiv2.shiprocket.in/v1/external").rstrip('/'),
            email=os.getenv("SHIPROCKET_EMAIL"),
            password=os.getenv("SHIPROCKET_PASSWORD"),
            pickup_location=os.getenv("SHIPROCKET_PICKUP_LOCATION", "Default"),
            channel_id=os.getenv("SHIPROCKET_CHANNEL_ID", ""),
            timeout=_float(os.getenv("SHIPROCKET_TIMEOUT", "30"), 30.0),
        )


@dataclass
class InventoryConfig:
    """Stock ledger settings"""

    schema: str = "inventory"
    stock_table: str = "product_stock"
    low_stock_threshold: int = 5

    @classmethod
    def from_env(cls) -> 'InventoryConfig':
        return cls(
            schema=os.getenv("INVENTORY_SCHEMA", "inventory"),
            stock_table=os.getenv("INVENTORY_STOCK_TABLE", "product_stock"),
            low_stock_threshold=_int(os.getenv("LOW_STOCK_THRESHOLD", "5"), 5),
        )
