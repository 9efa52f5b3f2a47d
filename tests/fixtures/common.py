"""
Common/Shared Fixtures

Base factories and generators used across multiple services.
"""
import uuid
from datetime import datetime, timezone
from typing import Optional


def make_product_id() -> str:
    """Generate a unique product ID"""
    return f"prod_test_{uuid.uuid4().hex[:12]}"


def make_category_id() -> str:
    """Generate a unique category ID"""
    return f"cat_test_{uuid.uuid4().hex[:12]}"


def make_order_id() -> str:
    """Generate a unique order ID"""
    return f"ord_test_{uuid.uuid4().hex[:12]}"


def make_email(prefix: Optional[str] = None) -> str:
    """Generate a unique email"""
    prefix = prefix or f"test_{uuid.uuid4().hex[:8]}"
    return f"{prefix}@example.com"


def make_timestamp() -> datetime:
    """Current UTC timestamp"""
    return datetime.now(timezone.utc)
