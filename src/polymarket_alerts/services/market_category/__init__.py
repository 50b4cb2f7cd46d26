"""Market categorisation services."""

from polymarket_alerts.services.market_category.classification import (
    MAJOR_CATEGORIES,
    NOISE_SLUGS,
    classify,
    pick_major_category,
    pick_subcategory,
)
from polymarket_alerts.services.market_category.market_category_resolver import (
    MarketCategoryResolver,
)

__all__ = [
    "MAJOR_CATEGORIES",
    "NOISE_SLUGS",
    "MarketCategoryResolver",
    "classify",
    "pick_major_category",
    "pick_subcategory",
]
