"""
Component Test Layer Configuration (Layer 3)

Structure:
    tests/component/
    ├── inventory_service/     Stock ledger with in-memory store
    ├── fulfillment_service/   Carrier dispatch over a mocked transport
    └── mocks/                 Mock implementations

Usage:
    pytest tests/component -v
    pytest tests/component/inventory_service -v
"""
import pytest

from core.config import CarrierConfig, InventoryConfig

from tests.component.mocks import MockAsyncPostgresClient, MockHttpTransport


# =============================================================================
# Database Mocks
# =============================================================================

@pytest.fixture
def mock_db() -> MockAsyncPostgresClient:
    """Mock asyncpg pool wrapper"""
    return MockAsyncPostgresClient()


@pytest.fixture
def inventory_config() -> InventoryConfig:
    """Stock ledger table configuration"""
    return InventoryConfig(schema="inventory", stock_table="product_stock", low_stock_threshold=5)


# =============================================================================
# HTTP Mocks
# =============================================================================

@pytest.fixture
def mock_transport() -> MockHttpTransport:
    """Mock HTTP backend for httpx clients"""
    return MockHttpTransport()


@pytest.fixture
def carrier_config() -> CarrierConfig:
    """Carrier configuration with test credentials"""
    return CarrierConfig(
        base_url="https://carrier.test/v1/external",
        email="ops@example.com",
        password="secret",
        pickup_location="Warehouse-1",
        channel_id="",
        timeout=5.0,
    )
