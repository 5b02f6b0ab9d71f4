from functools import lru_cache
from typing import Literal, Optional
import os
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["development", "production"]

def _env_file_for(app_env: EnvName) -> str:
    return ".env.development" if app_env == "development" else ".env.production"

class Settings(BaseSettings):

    # Core
    APP_ENV: EnvName = "development"
    APP_NAME: str = "StorefrontCatalogue"
    DEBUG: bool = False
    GIT_SHA: str = "unknown"

    # CORS (CSV of origins)
    ALLOWED_ORIGINS: str = ""

    # Printful
    PRINTFUL_API_KEY: Optional[str] = None  # missing key => empty catalogue, logged
    PRINTFUL_STORE_ID: str = "17754042"
    PRINTFUL_API_URL: str = "https://api.printful.com"

    # Catalogue cache config
    catalogue_cache_ttl: int = 10 * 60          # 10 minutes
    catalogue_list_limit: int = 100             # single upstream page
    http_timeout_s: float = 5.0                 # httpx default

    # pydantic-settings config will be set dynamically in the factory below
    model_config = SettingsConfigDict(env_file=None, case_sensitive=True)

@lru_cache
def get_settings() -> Settings:
    """
    Factory that chooses the right .env file based on APP_ENV.
    Cache makes it cheap to inject via FastAPI dependencies.
    """
    app_env: EnvName = os.getenv("APP_ENV", "development")  # earliest switch
    env_file = _env_file_for(app_env)
    return Settings(
                _env_file=env_file,  # load .env.development or .env.production
                _env_file_encoding="utf-8"
    )
