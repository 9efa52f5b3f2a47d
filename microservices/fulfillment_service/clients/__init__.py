"""
Fulfillment Service Clients

HTTP clients for services the fulfillment service depends on.
"""

from .catalog_client import CatalogClient

__all__ = ["CatalogClient"]
