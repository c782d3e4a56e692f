"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from orderdesk.domain.repository.order_gateway import OrderGateway
from orderdesk.domain.repository.product_catalog import ProductCatalog
from orderdesk.infrastructure.config import Settings
from orderdesk.infrastructure.http.api_session import ApiSession
from orderdesk.infrastructure.http.catalog_client import HttpProductCatalog
from orderdesk.infrastructure.http.order_client import HttpOrderGateway
from orderdesk.infrastructure.persistence.json_catalog import JsonProductCatalog


def api_session(settings: Settings) -> ApiSession:
    return ApiSession(settings.api_url, settings.api_token, settings.timeout)


def product_catalog(settings: Settings, offline: bool = False) -> ProductCatalog:
    if offline:
        return JsonProductCatalog(settings.catalog_file)
    return HttpProductCatalog(api_session(settings))


def order_gateway(settings: Settings) -> OrderGateway:
    return HttpOrderGateway(api_session(settings))


def load_settings() -> Settings:
    return Settings.from_env()
