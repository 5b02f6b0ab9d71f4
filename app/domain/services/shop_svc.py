import logging
import time
from typing import Any, Dict, Iterable, List, Optional

from app.domain.models.product import Product
from app.domain.services.catalogue_cache_svc import CatalogueCache
from app.domain.services.constants import CATEGORY_ALL, SEASONAL_CATEGORIES, SHOP_TABS

logger = logging.getLogger(__name__)


def filter_by_category(products: Iterable[Product], category: str) -> List[Product]:
    """
    "all" -> every product outside the seasonal labels.
    Anything else -> exact category match (unknown labels give an empty list).
    """
    if category == CATEGORY_ALL:
        return [p for p in products if p.category.value not in SEASONAL_CATEGORIES]
    return [p for p in products if p.category.value == category]


async def get_shop_page_svc(cache: CatalogueCache, category: Optional[str] = None) -> Dict[str, Any]:
    t0 = time.perf_counter()
    current = category or CATEGORY_ALL
    all_products = list(await cache.get_catalogue())
    products = filter_by_category(all_products, current)
    logger.info(
        "shop page category=%s items=%s total=%s time=%.3fs",
        current, len(products), len(all_products), time.perf_counter() - t0,
    )
    return {
        "current_category": current,
        "tabs": list(SHOP_TABS),
        "products": products,
        "all_products": all_products,
        "total_count": len(all_products),
    }
