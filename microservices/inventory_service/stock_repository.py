"""
Stock Repository

Data access layer for the stock ledger using an asyncpg pool.
Matches schema: inventory.product_stock
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

import asyncpg

from core.config import InventoryConfig, get_settings
from core.postgres_client import PostgresClientWrapper, get_postgres_client

from .models import StockRecord, StockUpdateResult

logger = logging.getLogger(__name__)


class StockTransaction:
    """Stock operations bound to one connection inside an open transaction"""

    def __init__(self, conn: asyncpg.Connection, table: str):
        self.conn = conn
        self.table = table

    async def reduce_stock(self, product_id: str, quantity: int) -> StockUpdateResult:
        """Guarded decrement: the WHERE clause is the availability check"""
        query = f'''
            UPDATE {self.table}
            SET available_stock = available_stock - $2,
                quantity_sold = quantity_sold + $2,
                updated_at = NOW()
            WHERE product_id = $1 AND available_stock >= $2
            RETURNING product_id
        '''
        row = await self.conn.fetchrow(query, product_id, quantity)
        if row is None:
            return StockUpdateResult(matched_count=0, modified_count=0)
        return StockUpdateResult(matched_count=1, modified_count=1)


class StockRepository:
    """
    Repository for stock ledger operations.

    Tables:
        - inventory.product_stock: available stock and units sold per product
    """

    def __init__(
        self,
        db: Optional[PostgresClientWrapper] = None,
        config: Optional[InventoryConfig] = None,
    ):
        """Initialize Stock Repository with the shared PostgreSQL client"""
        config = config or get_settings().inventory
        self.db = db or get_postgres_client("inventory_service")

        self.schema = config.schema
        self.stock_table = config.stock_table

        logger.info("StockRepository initialized with PostgreSQL")

    @property
    def table(self) -> str:
        return f'"{self.schema}".{self.stock_table}'

    async def get_available_stock(self, product_id: str) -> int:
        """Point read of available stock (0 when the product has no ledger row)"""
        try:
            async with self.db.acquire() as conn:
                stock = await conn.fetchval(
                    f"SELECT available_stock FROM {self.table} WHERE product_id = $1",
                    product_id,
                )
            return int(stock) if stock is not None else 0

        except Exception as e:
            logger.error(f"Failed to read stock for product {product_id}: {e}")
            raise

    async def get_stock_record(self, product_id: str) -> Optional[StockRecord]:
        """Get stock ledger row by product ID"""
        try:
            async with self.db.acquire() as conn:
                row = await conn.fetchrow(
                    f"SELECT * FROM {self.table} WHERE product_id = $1",
                    product_id,
                )
            return self._row_to_record(dict(row)) if row else None

        except Exception as e:
            logger.error(f"Failed to get stock record {product_id}: {e}")
            raise

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[StockTransaction]:
        """
        Transaction scope over one pooled connection.

        The asyncpg transaction commits on normal exit and rolls back on any
        exception, including task cancellation. The connection goes back to
        the pool on every exit path.
        """
        async with self.db.acquire() as conn:
            async with conn.transaction():
                yield StockTransaction(conn, self.table)

    async def increase_stock(self, product_id: str, quantity: int) -> Optional[StockRecord]:
        """Atomically add quantity to available stock"""
        try:
            query = f'''
                UPDATE {self.table}
                SET available_stock = available_stock + $2,
                    updated_at = NOW()
                WHERE product_id = $1
                RETURNING *
            '''
            async with self.db.acquire() as conn:
                row = await conn.fetchrow(query, product_id, quantity)

            return self._row_to_record(dict(row)) if row else None

        except Exception as e:
            logger.error(f"Failed to increase stock for product {product_id}: {e}")
            raise

    async def list_low_stock(self, threshold: int) -> List[StockRecord]:
        """List products with 0 < available_stock <= threshold"""
        try:
            query = f'''
                SELECT * FROM {self.table}
                WHERE available_stock > 0 AND available_stock <= $1
                ORDER BY available_stock ASC, product_id ASC
            '''
            async with self.db.acquire() as conn:
                rows = await conn.fetch(query, threshold)

            return [self._row_to_record(dict(r)) for r in rows]

        except Exception as e:
            logger.error(f"Failed to list low stock products: {e}")
            raise

    async def list_out_of_stock(self) -> List[StockRecord]:
        """List products with no available stock"""
        try:
            query = f'''
                SELECT * FROM {self.table}
                WHERE available_stock = 0
                ORDER BY product_id ASC
            '''
            async with self.db.acquire() as conn:
                rows = await conn.fetch(query)

            return [self._row_to_record(dict(r)) for r in rows]

        except Exception as e:
            logger.error(f"Failed to list out of stock products: {e}")
            raise

    def _row_to_record(self, row: Dict[str, Any]) -> StockRecord:
        """Convert database row to StockRecord model"""
        return StockRecord(
            product_id=row["product_id"],
            available_stock=row.get("available_stock") or 0,
            quantity_sold=row.get("quantity_sold") or 0,
            updated_at=row.get("updated_at"),
        )
