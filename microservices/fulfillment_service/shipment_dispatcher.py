"""
Carrier Shipment Dispatcher

Hands a confirmed order to the shipping carrier (Shiprocket-compatible API).

Nothing is written locally: the caller persists the returned ShipmentRecord
onto the order. A request rejected with 401 invalidates the carrier token and
the whole flow is re-entered exactly once; every other failure surfaces
immediately as DispatchError.
"""

import asyncio
import json
import logging
from decimal import Decimal
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence, TypeVar

import httpx

from core.config import CarrierConfig

from .models import (
    Order,
    OrderLineItem,
    PackageDetails,
    PaymentMethod,
    ProductInfo,
    ShipmentRecord,
)
from .carrier_auth import response_body
from .package_aggregator import PackageAggregator
from .protocols import (
    CarrierSessionProtocol,
    CarrierUnauthorizedError,
    DispatchError,
    ProductResolverProtocol,
)
from .providers.base import FulfillmentProvider
from .state_codes import normalize_state

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_CUSTOMER_EMAIL = "customer@example.com"


def _money(value: Decimal) -> str:
    return f"{Decimal(value):.2f}"


def build_shipment_payload(
    order: Order,
    package: PackageDetails,
    hsn_codes: Mapping[str, str],
    pickup_location: str,
    customer_email: Optional[str] = None,
    channel_id: str = "",
) -> Dict[str, Any]:
    """Build the carrier create-shipment payload for an order"""
    address = order.shipping_address

    order_items = [
        {
            "name": item.product_name,
            "sku": item.product_code,
            "units": item.quantity,
            "selling_price": _money(item.price_at_purchase),
            "discount": 0,
            "tax": 0,
            "hsn": hsn_codes.get(item.product_id, ""),
        }
        for item in order.items
    ]

    return {
        "order_id": order.order_number,
        "order_date": order.created_at.isoformat(),
        "pickup_location": pickup_location,
        "channel_id": channel_id,
        "billing_customer_name": address.name,
        "billing_last_name": address.name.split(" ")[-1] or "Customer",
        "billing_address": address.address_line1,
        "billing_address_2": address.address_line2 or "",
        "billing_city": address.city,
        "billing_pincode": address.pin_code,
        "billing_state": normalize_state(address.state),
        "billing_country": address.country,
        "billing_email": customer_email or DEFAULT_CUSTOMER_EMAIL,
        "billing_phone": address.phone,
        "shipping_is_billing": True,
        "order_items": order_items,
        "payment_method": "COD" if order.payment_method == PaymentMethod.COD else "Prepaid",
        "sub_total": _money(order.total),
        "length": package.length_cm,
        "breadth": package.breadth_cm,
        "height": package.height_cm,
        "weight": package.weight_kg,
    }


def parse_shipment_response(data: Dict[str, Any]) -> ShipmentRecord:
    """
    Normalize a successful create-shipment response.

    AWB and courier may be assigned later by the carrier; empty values
    become None.
    """
    shipment = data.get("data") if isinstance(data.get("data"), dict) else data

    shipment_id = shipment.get("shipment_id")
    if not shipment_id:
        raise DispatchError("Carrier response did not include a shipment_id", response_data=data)

    courier_company_id = shipment.get("courier_company_id")
    return ShipmentRecord(
        shipment_id=str(shipment_id),
        carrier_order_id=str(shipment["order_id"]) if shipment.get("order_id") else None,
        awb_number=shipment.get("awb_code") or None,
        courier_name=shipment.get("courier_name") or None,
        courier_company_id=int(courier_company_id) if courier_company_id else None,
        status=shipment.get("status") or "UNKNOWN",
        status_code=int(shipment.get("status_code") or 0),
        tracking_url=shipment.get("tracking_url") or None,
        label_url=shipment.get("label_url") or None,
    )


class ShipmentDispatcher(FulfillmentProvider):
    """Dispatches orders to the carrier and wraps tracking/cancellation"""

    def __init__(
        self,
        config: CarrierConfig,
        auth: CarrierSessionProtocol,
        product_resolver: ProductResolverProtocol,
        http_client: httpx.AsyncClient,
        aggregator: Optional[PackageAggregator] = None,
        owned_clients: Sequence[Any] = (),
    ):
        """
        Args:
            owned_clients: Extra clients created for this dispatcher (closed with it)
        """
        self.config = config
        self.auth = auth
        self.product_resolver = product_resolver
        self.client = http_client
        self.aggregator = aggregator or PackageAggregator(product_resolver)
        self.owned_clients = list(owned_clients)

        logger.info(f"ShipmentDispatcher initialized for {config.base_url}")

    async def close(self):
        await self.client.aclose()
        for client in self.owned_clients:
            await client.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    # Public operations

    async def create_shipment(
        self,
        order: Order,
        customer_email: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> ShipmentRecord:
        """
        Create a carrier shipment for a confirmed order.

        Args:
            order: Order to ship
            customer_email: Billing email sent to the carrier
            timeout: Deadline in seconds for the whole operation

        Raises:
            CarrierAuthError: login failed
            DispatchError: carrier rejected or failed the request, or timed out
        """
        record = await self._with_deadline(
            self._with_reauth(lambda: self._dispatch_once(order, customer_email)),
            timeout,
            f"create shipment for order {order.order_number}",
        )
        logger.info(
            f"Shipment {record.shipment_id} created for order {order.order_number} "
            f"(awb={record.awb_number}, courier={record.courier_name}, status={record.status})"
        )
        return record

    async def track_shipment(self, awb_code: str, timeout: Optional[float] = None) -> Any:
        """Get tracking data for an AWB, as returned by the carrier"""
        if not awb_code:
            raise DispatchError("awb_code is required for tracking")
        return await self._with_deadline(
            self._with_reauth(lambda: self._send("GET", f"/courier/track/awb/{awb_code}")),
            timeout,
            f"track shipment {awb_code}",
        )

    async def cancel_shipments(self, awb_codes: List[str], timeout: Optional[float] = None) -> Any:
        """Cancel shipments by AWB; returns the carrier response body"""
        if not awb_codes:
            raise DispatchError("At least one AWB is required for cancellation")
        result = await self._with_deadline(
            self._with_reauth(lambda: self._send("POST", "/orders/cancel/shipment/awbs", {"awbs": list(awb_codes)})),
            timeout,
            f"cancel shipments {awb_codes}",
        )
        logger.info(f"Cancelled shipments {awb_codes}")
        return result

    # Flow

    async def _dispatch_once(self, order: Order, customer_email: Optional[str]) -> ShipmentRecord:
        await self.auth.ensure_authenticated()

        products = await self.aggregator.resolve_products(order.items)
        hsn_codes = await self._resolve_hsn_codes(order.items, products)
        package = await self.aggregator.aggregate(order.items, products=products)

        payload = build_shipment_payload(
            order,
            package,
            hsn_codes,
            pickup_location=self.config.pickup_location,
            customer_email=customer_email,
            channel_id=self.config.channel_id,
        )
        logger.debug(f"Carrier payload: {json.dumps(payload, default=str)}")

        data = await self._send("POST", "/orders/create/adhoc", payload)
        logger.debug(f"Carrier response: {json.dumps(data, default=str)}")

        if not isinstance(data, dict):
            raise DispatchError(f"Unexpected carrier response: {data!r}")

        return parse_shipment_response(data)

    async def _resolve_hsn_codes(
        self,
        items: List[OrderLineItem],
        products: Mapping[str, Optional[ProductInfo]],
    ) -> Dict[str, str]:
        """HSN per product via its category; '' wherever a link is missing"""
        by_category: Dict[str, str] = {}
        hsn_codes: Dict[str, str] = {}

        for item in items:
            product = products.get(item.product_id)
            if product is None or not product.category_id:
                logger.warning(f"No category for product {item.product_id}, sending empty HSN")
                hsn_codes[item.product_id] = ""
                continue

            if product.category_id not in by_category:
                by_category[product.category_id] = await self._lookup_hsn(product.category_id)
            hsn_codes[item.product_id] = by_category[product.category_id]

        return hsn_codes

    async def _lookup_hsn(self, category_id: str) -> str:
        try:
            category = await self.product_resolver.get_category(category_id)
        except Exception as e:
            logger.warning(f"Category {category_id} lookup failed, sending empty HSN: {e}")
            return ""
        if category is None:
            logger.warning(f"Category {category_id} not found, sending empty HSN")
            return ""
        return category.hsn or ""

    async def _with_reauth(self, operation: Callable[[], Awaitable[T]]) -> T:
        try:
            return await operation()
        except CarrierUnauthorizedError:
            self.auth.invalidate()
            logger.warning("Carrier token rejected, re-authenticating and retrying once")

        try:
            return await operation()
        except CarrierUnauthorizedError:
            self.auth.invalidate()
            logger.error("Carrier rejected a freshly issued token, giving up")
            raise

    async def _with_deadline(self, operation: Awaitable[T], timeout: Optional[float], action: str) -> T:
        try:
            return await asyncio.wait_for(operation, timeout=timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"Carrier call timed out after {timeout}s: {action}")
            raise DispatchError(f"Carrier request timed out: {action}") from e

    async def _send(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        """Carrier request; returns the decoded body ({} when the body is not JSON)"""
        await self.auth.ensure_authenticated()
        headers = {"Content-Type": "application/json", **self.auth.auth_headers()}

        try:
            response = await self.client.request(
                method,
                f"{self.config.base_url}{path}",
                json=payload,
                headers=headers,
                timeout=self.config.timeout,
            )
        except httpx.TimeoutException as e:
            logger.error(f"Carrier {method} {path} timed out: {e}")
            raise DispatchError(f"Carrier request timed out: {method} {path}") from e
        except httpx.HTTPError as e:
            logger.error(f"Carrier {method} {path} failed: {e}")
            raise DispatchError(f"Carrier request failed: {e}") from e

        body = response_body(response)
        data = body if isinstance(body, dict) else {}

        if response.status_code == 401:
            raise CarrierUnauthorizedError(response_data=data)

        if response.status_code >= 400:
            message = data.get("message") or response.text or f"HTTP {response.status_code}"
            logger.error(f"Carrier {method} {path} rejected: status={response.status_code} message={message}")
            raise DispatchError(
                f"Carrier request failed: {message}",
                status_code=response.status_code,
                response_data=data,
            )

        if data.get("success") is False:
            message = data.get("message") or "unknown error"
            logger.error(f"Carrier {method} {path} business failure: {message}")
            raise DispatchError(
                f"Carrier API error: {message}",
                status_code=response.status_code,
                response_data=data,
            )

        return body if body is not None else {}
