from fastapi import FastAPI
from app.core.config import get_settings
from app.core.lifespan import lifespan
from app.api.v1.routers.shop import router as shop_router
from app.api.v1.routers.health import router as health_router
from app.core.logging import configure_logging

from fastapi.middleware.cors import CORSMiddleware
import logging

settings = get_settings()
configure_logging(level=logging.DEBUG if settings.DEBUG else logging.INFO)

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# ------- CORS -------
# ALLOWED_ORIGINS is a CSV, e.g. "https://shop.example.com,https://www.example.com"
allowed_origins = [o.strip() for o in settings.ALLOWED_ORIGINS.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=False,                        # keep False to simplify preflight
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
    max_age=86400,
)

# ------- Routes -------
app.include_router(health_router)
app.include_router(shop_router)              # storefront catalogue
