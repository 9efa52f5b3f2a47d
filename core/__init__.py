#!/usr/bin/env python3
"""
Core Module for the Commerce Services

Shared infrastructure for the inventory and fulfillment services.

COMPONENTS:
    - config/: Dataclass configuration loaded from environment (.env aware)
    - logger.py: Service logger setup
    - postgres_client.py: asyncpg pool wrapper used by repositories

USAGE:
    from core.config import get_settings
    from core.logger import setup_service_logger
    from core.postgres_client import get_postgres_client

    settings = get_settings()
    logger = setup_service_logger("inventory_service")
"""
