"""Fulfillment provider interface."""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from ..models import Order, ShipmentRecord


class FulfillmentProvider(ABC):
    """Abstract shipping carrier integration."""

    @abstractmethod
    async def create_shipment(
        self,
        order: Order,
        customer_email: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> ShipmentRecord:
        """Submit a confirmed order to the carrier."""
        raise NotImplementedError

    @abstractmethod
    async def track_shipment(self, awb_code: str, timeout: Optional[float] = None) -> Any:
        """Get carrier tracking data for an AWB."""
        raise NotImplementedError

    @abstractmethod
    async def cancel_shipments(self, awb_codes: List[str], timeout: Optional[float] = None) -> Any:
        """Cancel shipments by AWB."""
        raise NotImplementedError
