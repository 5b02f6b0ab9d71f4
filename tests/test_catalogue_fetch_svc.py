"""Tests for the two-stage Printful fetch (listing + concurrent detail calls)."""

import asyncio

import httpx
import pytest

from app.domain.errors import ConfigurationError, ListingFetchError
from app.domain.models.product import Category
from app.domain.services.catalogue_cache_svc import CatalogueCache
from app.domain.services.catalogue_fetch_svc import min_retail_price, parse_price

LISTING = [
    {"id": 101, "name": "Palm Tee", "thumbnail_url": "https://img.test/101.png", "synced": 5},
    {"id": 102, "name": "Christmas Mug", "thumbnail_url": None, "synced": 2},
    {"id": 103, "name": "Beach Hoodie — Palm Print", "thumbnail_url": "https://img.test/103.png", "synced": 8},
]

PRICES = {
    "101": ["25.00", "22.50", "27.00"],
    "102": ["14.99"],
    "103": ["9.99", "abc", "7.50"],
}


def _detail(product_id: str) -> httpx.Response:
    variants = [{"id": i, "retail_price": p} for i, p in enumerate(PRICES[product_id])]
    return httpx.Response(200, json={"code": 200, "result": {"sync_variants": variants}})


def _printful(request: httpx.Request, fail_ids=()) -> httpx.Response:
    path = request.url.path
    if path == "/store/products":
        return httpx.Response(200, json={"code": 200, "result": LISTING})
    product_id = path.rsplit("/", 1)[-1]
    if product_id in fail_ids:
        return httpx.Response(404, json={"code": 404, "error": {"message": "Not found"}})
    return _detail(product_id)


def test_min_retail_price_ignores_non_numeric():
    variants = [{"retail_price": "9.99"}, {"retail_price": "abc"}, {"retail_price": "7.50"}]
    assert min_retail_price(variants) == 7.5


def test_min_retail_price_none_when_nothing_parses():
    assert min_retail_price([]) is None
    assert min_retail_price([{"retail_price": "n/a"}, {"retail_price": None}, {}]) is None
    assert min_retail_price([{"retail_price": "NaN"}]) is None
    assert min_retail_price(None) is None


@pytest.mark.asyncio
async def test_fetch_all_builds_products_in_listing_order(make_fetcher):
    fetcher = make_fetcher(_printful)

    products = await fetcher.fetch_all()

    assert [p.id for p in products] == [101, 102, 103]
    assert [p.price for p in products] == [22.5, 14.99, 7.5]
    assert [p.category for p in products] == [Category.SHIRTS, Category.HOMEWARES, Category.HOODIES]
    assert products[0].thumbnail_url == "https://img.test/101.png"
    assert products[1].thumbnail_url is None
    assert [p.variant_count for p in products] == [5, 2, 8]


@pytest.mark.asyncio
async def test_fetch_all_sends_auth_headers_and_limit(make_fetcher):
    fetcher = make_fetcher(_printful, limit=100)

    await fetcher.fetch_all()

    listing = fetcher.requests[0]
    assert listing.url.path == "/store/products"
    assert listing.url.params["limit"] == "100"
    assert listing.headers["Authorization"] == "Bearer test-key"
    assert listing.headers["X-PF-Store-Id"] == "17754042"
    # one listing + one detail call per product, no retries
    assert len(fetcher.requests) == 1 + len(LISTING)


@pytest.mark.asyncio
async def test_detail_failure_keeps_product_without_price(make_fetcher):
    fetcher = make_fetcher(lambda r: _printful(r, fail_ids={"102"}))

    products = await fetcher.fetch_all()

    assert len(products) == 3
    assert products[0].price == 22.5
    assert products[1].price is None
    assert products[1].name == "Christmas Mug"
    assert products[1].variant_count == 2
    assert products[1].category == Category.HOMEWARES
    assert products[2].price == 7.5


@pytest.mark.asyncio
async def test_detail_transport_error_is_local(make_fetcher):
    def handler(request):
        if request.url.path.endswith("/101"):
            raise httpx.ConnectError("boom", request=request)
        return _printful(request)

    products = await make_fetcher(handler).fetch_all()

    assert [p.price for p in products] == [None, 14.99, 7.5]


@pytest.mark.asyncio
async def test_output_order_independent_of_completion_order(make_fetcher):
    # first listed product answers last
    delays = {"101": 0.05, "102": 0.02, "103": 0.0}
    completed = []

    async def handler(request):
        path = request.url.path
        if path == "/store/products":
            return httpx.Response(200, json={"result": LISTING})
        product_id = path.rsplit("/", 1)[-1]
        await asyncio.sleep(delays[product_id])
        completed.append(product_id)
        return _detail(product_id)

    products = await make_fetcher(handler).fetch_all()

    assert completed == ["103", "102", "101"]
    assert [p.id for p in products] == [101, 102, 103]


@pytest.mark.asyncio
async def test_listing_http_error_fails_whole_fetch(make_fetcher):
    def handler(request):
        if request.url.path == "/store/products":
            return httpx.Response(500, json={"code": 500, "error": {"message": "Internal"}})
        return _printful(request)

    fetcher = make_fetcher(handler)
    with pytest.raises(ListingFetchError) as exc:
        await fetcher.fetch_all()

    assert exc.value.status_code == 500
    assert exc.value.body["code"] == 500
    # no detail calls after a failed listing
    assert len(fetcher.requests) == 1


@pytest.mark.asyncio
async def test_listing_malformed_body_fails(make_fetcher):
    fetcher = make_fetcher(lambda r: httpx.Response(200, text="<html>oops</html>"))
    with pytest.raises(ListingFetchError):
        await fetcher.fetch_all()


@pytest.mark.asyncio
async def test_listing_network_error_fails(make_fetcher):
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(ListingFetchError):
        await make_fetcher(handler).fetch_all()


@pytest.mark.asyncio
async def test_listing_without_result_is_empty(make_fetcher):
    fetcher = make_fetcher(lambda r: httpx.Response(200, json={"code": 200}))

    assert await fetcher.fetch_all() == []
    assert len(fetcher.requests) == 1


@pytest.mark.asyncio
async def test_listing_entries_without_id_are_skipped(make_fetcher):
    def handler(request):
        if request.url.path == "/store/products":
            return httpx.Response(200, json={"result": [{"name": "Ghost Tee"}, LISTING[0]]})
        return _printful(request)

    products = await make_fetcher(handler).fetch_all()

    assert [p.id for p in products] == [101]


@pytest.mark.asyncio
async def test_missing_api_key_is_configuration_error(make_fetcher):
    fetcher = make_fetcher(_printful, api_key=None)

    with pytest.raises(ConfigurationError):
        await fetcher.fetch_all()
    assert fetcher.requests == []


def test_min_retail_price_reads_leading_number():
    assert min_retail_price([{"retail_price": "9.99"}, {"retail_price": "7.50 USD"}]) == 7.5


@pytest.mark.parametrize(
    "value, expected",
    [
        ("12.00", 12.0),
        (" 8.5", 8.5),
        (6, 6.0),
        (4.25, 4.25),
        (True, None),
        (False, None),
        ("", None),
        ("USD 7.50", None),
        ({"amount": "5"}, None),
    ],
)
def test_parse_price(value, expected):
    assert parse_price(value) == expected


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "entry",
    [
        {"id": {"x": 1}, "name": "Tee"},
        {"id": True, "name": "Tee"},
        {"id": ["101"], "name": "Tee"},
        "not-an-object",
    ],
)
async def test_listing_entries_with_unusable_id_are_skipped(make_fetcher, entry):
    def handler(request):
        if request.url.path == "/store/products":
            return httpx.Response(200, json={"result": [entry, LISTING[0]]})
        return _printful(request)

    fetcher = make_fetcher(handler)
    products = await CatalogueCache(fetcher).get_catalogue()

    assert [p.id for p in products] == [101]
    # no detail call for the skipped entry
    assert len(fetcher.requests) == 2


@pytest.mark.asyncio
async def test_listing_entries_with_wrong_field_types_are_kept(make_fetcher):
    listing = [
        {"id": 101, "name": 123, "synced": 5},
        {"id": 102, "name": "Christmas Mug", "thumbnail_url": 7, "synced": "lots"},
    ]

    def handler(request):
        if request.url.path == "/store/products":
            return httpx.Response(200, json={"result": listing})
        return _printful(request)

    products = await CatalogueCache(make_fetcher(handler)).get_catalogue()

    assert [p.id for p in products] == [101, 102]
    assert products[0].name == ""
    assert products[0].category == Category.OTHER
    assert products[0].price == 22.5
    assert products[1].thumbnail_url is None
    assert products[1].variant_count == 0
    assert products[1].category == Category.HOMEWARES
