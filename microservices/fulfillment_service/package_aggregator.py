"""
Package Aggregator

Derives one shippable package for an order. Items are assumed boxed
together: weights are summed, each dimension is the largest across products.
"""

import logging
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

from .models import OrderLineItem, PackageDetails, ProductInfo
from .protocols import ProductResolverProtocol

logger = logging.getLogger(__name__)

# Carrier minimums
MIN_WEIGHT_KG = 0.1
MIN_LENGTH_CM = 10.0
MIN_BREADTH_CM = 10.0
MIN_HEIGHT_CM = 5.0


def calculate_package_details(entries: Iterable[Tuple[ProductInfo, int]]) -> PackageDetails:
    """Fold (product, quantity) pairs into package weight and dimensions"""
    total_weight = 0.0
    max_l = max_b = max_h = 0.0

    for product, quantity in entries:
        total_weight += product.weight.kilograms * quantity
        max_l = max(max_l, product.dimensions.l)
        max_b = max(max_b, product.dimensions.b)
        max_h = max(max_h, product.dimensions.h)

    return PackageDetails(
        weight_kg=max(total_weight, MIN_WEIGHT_KG),
        length_cm=max(max_l, MIN_LENGTH_CM),
        breadth_cm=max(max_b, MIN_BREADTH_CM),
        height_cm=max(max_h, MIN_HEIGHT_CM),
    )


class PackageAggregator:
    """Resolves line item products and aggregates them into a package"""

    def __init__(self, product_resolver: ProductResolverProtocol):
        self.product_resolver = product_resolver

    async def resolve_products(self, line_items: Sequence[OrderLineItem]) -> Dict[str, Optional[ProductInfo]]:
        """Look up each distinct product once; failed lookups resolve to None"""
        products: Dict[str, Optional[ProductInfo]] = {}
        for item in line_items:
            if item.product_id not in products:
                products[item.product_id] = await self._lookup_product(item.product_id)
        return products

    async def _lookup_product(self, product_id: str) -> Optional[ProductInfo]:
        try:
            return await self.product_resolver.get_product(product_id)
        except Exception as e:
            logger.warning(f"Product {product_id} lookup failed, treating as unresolved: {e}")
            return None

    async def aggregate(
        self,
        line_items: Sequence[OrderLineItem],
        products: Optional[Mapping[str, Optional[ProductInfo]]] = None,
    ) -> PackageDetails:
        """
        Compute package details for line items.

        Products that cannot be resolved are left out with a warning; the
        carrier minimums still apply to whatever remains.

        Args:
            line_items: Order lines (product_id, quantity)
            products: Already-resolved products by id, skips the lookups
        """
        if products is None:
            products = await self.resolve_products(line_items)

        entries = []
        for item in line_items:
            product = products.get(item.product_id)
            if product is None:
                logger.warning(
                    f"Product {item.product_id} could not be resolved, "
                    f"excluded from package weight/dimensions"
                )
                continue
            entries.append((product, item.quantity))

        package = calculate_package_details(entries)
        logger.debug(f"Package details for {len(entries)}/{len(line_items)} items: {package.model_dump()}")
        return package
