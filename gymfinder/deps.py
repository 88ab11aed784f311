"""FastAPI dependencies wired to the service layer."""

from __future__ import annotations

from gymfinder.core.config import Settings, get_settings
from gymfinder.services.catalog import CatalogClient
from gymfinder.services.poi_client import PoiClient


def get_app_settings() -> Settings:
    return get_settings()


def get_catalog_client() -> CatalogClient:
    return CatalogClient(get_settings())


def get_poi_client() -> PoiClient:
    return PoiClient(get_settings())
