"""
Component Test Mocks

Shared mock implementations for component testing.
These mocks replace real I/O dependencies (database, HTTP).
"""

from .db_mock import MockAsyncPostgresClient, MockConnection
from .http_mock import MockHttpResponse, MockHttpTransport

# Service-specific mocks live in tests/component/{service}/mocks.py

__all__ = [
    'MockAsyncPostgresClient',
    'MockConnection',
    'MockHttpResponse',
    'MockHttpTransport',
]
