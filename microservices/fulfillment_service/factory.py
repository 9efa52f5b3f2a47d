"""
Fulfillment Service Factory

Factory functions for creating service instances with real dependencies.
This is the ONLY place that imports I/O-dependent modules.

Usage:
    from .factory import create_shipment_dispatcher
    async with create_shipment_dispatcher() as dispatcher:
        record = await dispatcher.create_shipment(order, customer_email)
"""
from typing import Optional

import httpx

from core.config import AppConfig, get_settings
from core.logger import setup_service_logger

from .carrier_auth import CarrierAuthManager
from .protocols import ProductResolverProtocol
from .shipment_dispatcher import ShipmentDispatcher


def create_shipment_dispatcher(
    config: Optional[AppConfig] = None,
    product_resolver: Optional[ProductResolverProtocol] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> ShipmentDispatcher:
    """
    Create ShipmentDispatcher with real dependencies.

    The carrier session is created here and shared by everything the
    dispatcher does; pass a different config for separate credentials.

    Args:
        config: Application configuration (defaults to global settings)
        product_resolver: Product/category lookups; a caller-supplied resolver
            stays owned by the caller. The default CatalogClient is closed
            with the dispatcher.
        http_client: Client used for carrier calls

    Returns:
        Configured ShipmentDispatcher instance
    """
    config = config or get_settings()
    setup_service_logger(__package__, config.logging)

    owned_clients = []
    if product_resolver is None:
        from .clients.catalog_client import CatalogClient
        product_resolver = CatalogClient(
            base_url=config.services.catalog_service_url,
            timeout=config.services.catalog_timeout,
        )
        owned_clients.append(product_resolver)

    http_client = http_client or httpx.AsyncClient(timeout=config.carrier.timeout)
    auth = CarrierAuthManager(config=config.carrier, http_client=http_client)

    return ShipmentDispatcher(
        config=config.carrier,
        auth=auth,
        product_resolver=product_resolver,
        http_client=http_client,
        owned_clients=owned_clients,
    )
