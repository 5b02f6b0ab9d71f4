# app/api/v1/routers/shop.py
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
import time
import logging

from app.api.deps import catalogue_cache_dep
from app.api.v1.schemas.shop import ShopPageOut
from app.domain.services.constants import CATEGORY_ALL, SHOP_TABS
from app.domain.services.shop_svc import get_shop_page_svc

logger = logging.getLogger(__name__)

router = APIRouter(tags=["shop"])


def _dump(page: dict) -> dict:
    return ShopPageOut.model_validate({
        **page,
        "products": [p.model_dump(mode="json") for p in page["products"]],
        "all_products": [p.model_dump(mode="json") for p in page["all_products"]],
    }).model_dump()


@router.get("/shop", response_model=ShopPageOut)
async def shop(
    cat: str = Query(CATEGORY_ALL, description="Category tab ('all' hides seasonal labels)"),
    cache = Depends(catalogue_cache_dep),
):
    """
    Storefront products from the cached Printful catalogue.
    The full unfiltered list is returned alongside the filtered tab for counts.
    """
    logger.info("Request: shop cat=%s", cat)
    start_time = time.perf_counter()

    try:
        page = await get_shop_page_svc(cache, cat)
    except Exception:
        # Never surface a raw error to the storefront
        logger.exception("shop route error cat=%s", cat)
        empty = ShopPageOut(current_category=CATEGORY_ALL, tabs=list(SHOP_TABS))
        return JSONResponse(status_code=500, content=empty.model_dump())

    elapsed_time = time.perf_counter() - start_time
    logger.info(
        "Response: shop cat=%s, count=%s, total=%s, elapsed_time=%.4fs",
        cat, len(page["products"]), page["total_count"], elapsed_time,
    )
    return _dump(page)
