"""
Fulfillment Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import Any, Dict, Optional, Protocol, runtime_checkable

# Import only models (no I/O dependencies)
from .models import CategoryInfo, ProductInfo


# ============================================================================
# Custom Exceptions
# ============================================================================

class FulfillmentServiceError(Exception):
    """Base exception for fulfillment service errors"""
    pass


class CarrierAuthError(FulfillmentServiceError):
    """Carrier login failed; no token is held"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class DispatchError(FulfillmentServiceError):
    """Carrier rejected or failed a shipment request (business or transport)"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Optional[Dict[str, Any]] = None,
    ):
        self.status_code = status_code
        self.response_data = response_data
        super().__init__(message)


class CarrierUnauthorizedError(DispatchError):
    """Carrier answered 401; the held token is no longer accepted"""

    def __init__(self, message: str = "Carrier rejected the access token", response_data=None):
        super().__init__(message, status_code=401, response_data=response_data)


# ============================================================================
# Client Protocols
# ============================================================================

@runtime_checkable
class ProductResolverProtocol(Protocol):
    """
    Interface for product/category lookups.

    Not-found is returned as None; callers degrade instead of failing.
    """

    async def get_product(self, product_id: str) -> Optional[ProductInfo]:
        """Get product by ID"""
        ...

    async def get_category(self, category_id: str) -> Optional[CategoryInfo]:
        """Get category by ID"""
        ...


@runtime_checkable
class CarrierSessionProtocol(Protocol):
    """Interface for the carrier credential holder"""

    @property
    def is_authenticated(self) -> bool:
        ...

    async def ensure_authenticated(self) -> str:
        """Return a bearer token, logging in first when none is held"""
        ...

    def invalidate(self) -> None:
        """Drop the held token"""
        ...

    def auth_headers(self) -> Dict[str, str]:
        """Authorization headers for the held token"""
        ...
