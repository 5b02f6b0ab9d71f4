# app/core/lifespan.py
from contextlib import asynccontextmanager
import logging
import httpx
from fastapi import FastAPI
from app.core.config import get_settings
from app.domain.repositories.printful_repo import PrintfulStoreRepo
from app.domain.services.catalogue_cache_svc import CatalogueCache
from app.domain.services.catalogue_fetch_svc import CatalogueFetcher

logger = logging.getLogger(__name__)


def build_catalogue_cache(client: httpx.AsyncClient, settings) -> CatalogueCache:
    repo = PrintfulStoreRepo(
        client,
        api_key=settings.PRINTFUL_API_KEY,
        store_id=settings.PRINTFUL_STORE_ID,
        base_url=settings.PRINTFUL_API_URL,
    )
    fetcher = CatalogueFetcher(repo, list_limit=settings.catalogue_list_limit)
    return CatalogueCache(fetcher, ttl=settings.catalogue_cache_ttl)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # --- Startup ---
    if not settings.PRINTFUL_API_KEY:
        # Not fatal: the shop renders with zero products until the key is set
        logger.error("PRINTFUL_API_KEY is not set, the shop catalogue will be empty")

    client = httpx.AsyncClient(timeout=settings.http_timeout_s)
    app.state.http_client = client
    app.state.catalogue_cache = build_catalogue_cache(client, settings)
    logger.info("Catalogue cache ready store_id=%s ttl=%ss", settings.PRINTFUL_STORE_ID, settings.catalogue_cache_ttl)

    # Application runs
    yield

    # --- Shutdown ---
    await client.aclose()
    logger.info("HTTP client closed")
