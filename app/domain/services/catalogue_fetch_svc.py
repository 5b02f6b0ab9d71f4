import asyncio
import logging
import math
import re
import time
from typing import Any, Dict, List, Optional

import httpx

from app.domain.errors import ConfigurationError, DetailFetchError, ListingFetchError
from app.domain.models.product import Product
from app.domain.repositories.printful_repo import PrintfulStoreRepo
from app.domain.services.category_svc import classify

logger = logging.getLogger(__name__)


def _response_body(resp: httpx.Response) -> Any:
    """Decoded JSON body if possible, raw text otherwise (for error logs)."""
    try:
        return resp.json()
    except ValueError:
        return resp.text


_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_price(value: Any) -> Optional[float]:
    """
    Read a retail price the lenient way: leading number of a string ("7.50 USD" -> 7.5),
    or a plain int/float. Bools, blanks and NaN give None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        price = float(value)
    elif isinstance(value, str):
        m = _LEADING_NUMBER.match(value)
        if not m:
            return None
        price = float(m.group(1))
    else:
        return None
    return None if math.isnan(price) else price


def min_retail_price(variants: Any) -> Optional[float]:
    """
    Lowest retail_price across sync variants.
    Values parse_price() rejects are ignored; None if nothing is usable.
    """
    if not isinstance(variants, list):
        return None
    lowest: Optional[float] = None
    for v in variants:
        if not isinstance(v, dict):
            continue
        price = parse_price(v.get("retail_price"))
        if price is None:
            continue
        # strict "<" keeps the first-seen minimum on ties
        if lowest is None or price < lowest:
            lowest = price
    return lowest


def _as_count(value: Any) -> int:
    try:
        return max(int(value or 0), 0)
    except (TypeError, ValueError):
        return 0


def _clean_summary(item: Any) -> Optional[Dict[str, Any]]:
    """
    Keep only listing entries with a usable id (int or str, not bool).
    Wrong-typed name/thumbnail_url are dropped so Product validation can't fail later.
    """
    if not isinstance(item, dict):
        return None
    pid = item.get("id")
    if isinstance(pid, bool) or not isinstance(pid, (int, str)) or pid == "":
        return None
    name = item.get("name")
    thumb = item.get("thumbnail_url")
    return {
        "id": pid,
        "name": name if isinstance(name, str) else "",
        "thumbnail_url": thumb if isinstance(thumb, str) and thumb else None,
        "synced": item.get("synced"),
    }


def _to_product(summary: Dict[str, Any], price: Optional[float]) -> Product:
    name = summary.get("name") or ""
    return Product(
        id=summary["id"],
        name=name,
        thumbnail_url=summary.get("thumbnail_url") or None,
        variant_count=_as_count(summary.get("synced")),
        price=price,
        category=classify(name),
    )


class CatalogueFetcher:
    """
    Two-stage remote fetch: one listing call, then a concurrent detail call per product.

    - Listing failure fails the whole fetch (ListingFetchError); no detail calls are made.
    - Detail failure only drops that product's price (DetailFetchError is logged, not raised).
    - Output order is the listing order, whatever order the detail calls finish in.
    - No retries: every request is attempted once per fetch.
    """
    def __init__(self, repo: PrintfulStoreRepo, list_limit: int = 100):
        self.repo = repo
        self.list_limit = list_limit

    async def list_summaries(self) -> List[Dict[str, Any]]:
        """Step A: one page of product summaries from the store listing."""
        try:
            result = await self.repo.list_products(limit=self.list_limit)
        except httpx.HTTPStatusError as e:
            raise ListingFetchError(
                f"listing returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
                body=_response_body(e.response),
            ) from e
        except httpx.HTTPError as e:
            raise ListingFetchError(f"listing request failed: {e!r}") from e
        except ValueError as e:
            raise ListingFetchError(f"listing body malformed: {e}") from e

        # Missing "result" is an empty store, not an error
        if result is None:
            return []
        if not isinstance(result, list):
            raise ListingFetchError(f"listing result is not a list: {type(result).__name__}", body=result)

        summaries = []
        for item in result:
            summary = _clean_summary(item)
            if summary is None:
                logger.warning("catalogue listing skipped entry without usable id: %r", item)
                continue
            summaries.append(summary)
        return summaries

    async def fetch_price(self, product_id: Any) -> Optional[float]:
        """Step B (one item): detail call -> min variant retail price. Raises DetailFetchError."""
        try:
            detail = await self.repo.get_product(product_id)
        except httpx.HTTPStatusError as e:
            raise DetailFetchError(
                product_id, f"HTTP {e.response.status_code}", status_code=e.response.status_code
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise DetailFetchError(product_id, repr(e)) from e

        variants = detail.get("sync_variants") if isinstance(detail, dict) else None
        return min_retail_price(variants or [])

    async def fetch_all(self) -> List[Product]:
        if not self.repo.configured:
            raise ConfigurationError("PRINTFUL_API_KEY is not set")

        t0 = time.perf_counter()
        logger.info("catalogue fetch start store_id=%s limit=%s", self.repo.store_id, self.list_limit)

        summaries = await self.list_summaries()
        logger.info("catalogue listing ok items=%s", len(summaries))

        # Settle all: one failed detail call must not cancel or fail its siblings
        results = await asyncio.gather(
            *(self.fetch_price(s["id"]) for s in summaries),
            return_exceptions=True,
        )

        products: List[Product] = []
        failures = 0
        for summary, res in zip(summaries, results):
            price: Optional[float] = None
            if isinstance(res, BaseException):
                failures += 1
                err = res if isinstance(res, DetailFetchError) else DetailFetchError(summary["id"], repr(res))
                logger.warning("catalogue detail failed, keeping listing fields: %s", err)
            else:
                price = res
            products.append(_to_product(summary, price))

        logger.info(
            "catalogue fetch done items=%s detail_failures=%s time=%.3fs",
            len(products), failures, time.perf_counter() - t0,
        )
        return products
