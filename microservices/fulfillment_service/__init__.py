"""
Fulfillment Service

Hands confirmed orders to the shipping carrier: package sizing, carrier
session handling, shipment creation, tracking and cancellation.
"""

__version__ = "1.0.0"
__service_name__ = "fulfillment_service"
