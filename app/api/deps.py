# app/api/deps.py
from fastapi import Request
from app.domain.services.catalogue_cache_svc import CatalogueCache

# Dependency for injecting the process-wide catalogue cache (wired in lifespan)
def catalogue_cache_dep(request: Request) -> CatalogueCache:
    return request.app.state.catalogue_cache
