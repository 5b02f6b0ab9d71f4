"""Pytest fixtures for the catalogue fetcher, cache and shop routes."""

import httpx
import pytest

from app.domain.repositories.printful_repo import PrintfulStoreRepo
from app.domain.services.catalogue_fetch_svc import CatalogueFetcher

BASE_URL = "https://printful.test"


class FakeClock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_fetcher():
    """
    Build a CatalogueFetcher over an httpx.MockTransport.
    `handler(request)` may be sync or async; requests are recorded on `fetcher.requests`.
    """
    def _make(handler, api_key="test-key", limit=100):
        requests = []

        async def _recording(request: httpx.Request):
            requests.append(request)
            res = handler(request)
            if hasattr(res, "__await__"):
                res = await res
            return res

        client = httpx.AsyncClient(transport=httpx.MockTransport(_recording))
        repo = PrintfulStoreRepo(client, api_key=api_key, store_id="17754042", base_url=BASE_URL)
        fetcher = CatalogueFetcher(repo, list_limit=limit)
        fetcher.requests = requests
        return fetcher

    return _make
