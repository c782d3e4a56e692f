"""HTTP implementation of the ProductCatalog port."""

from __future__ import annotations

import requests

from orderdesk.domain.exceptions import CatalogUnavailableError
from orderdesk.domain.model.product import Product, Variant
from orderdesk.domain.repository.product_catalog import ProductCatalog
from orderdesk.infrastructure.catalog_records import (
    active_variants_from_raw,
    products_from_raw,
)
from orderdesk.infrastructure.http.api_session import ApiSession, error_message


class HttpProductCatalog(ProductCatalog):

    def __init__(self, api: ApiSession) -> None:
        self._api = api

    # --- ProductCatalog interface ---------------------------------------------

    def search(
        self,
        tenant_id: str,
        query: str = "",
        limit: int = 50,
        page: int = 1,
    ) -> list[Product]:
        params = {"search": query, "limit": limit}
        if page > 1:
            params["page"] = page
        payload = self._fetch(f"products/tenant/{tenant_id}", params)
        return products_from_raw(payload.get("products"))

    def variants(self, product_id: str) -> list[Variant]:
        payload = self._fetch(f"product/{product_id}/variants")
        return active_variants_from_raw(payload.get("variants"), product_id)

    # --- Transport ------------------------------------------------------------

    def _fetch(self, path: str, params: dict | None = None) -> dict:
        try:
            response = self._api.get(path, params)
        except requests.RequestException as exc:
            raise CatalogUnavailableError(f"Catalog request failed: {exc}") from exc
        if not response.ok:
            raise CatalogUnavailableError(
                f"Catalog returned {response.status_code}: {error_message(response)}",
                status_code=response.status_code,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise CatalogUnavailableError(
                "Catalog returned a non-JSON response",
                status_code=response.status_code,
            ) from exc
        if not isinstance(payload, dict):
            raise CatalogUnavailableError(
                "Catalog returned an unexpected response",
                status_code=response.status_code,
            )
        return payload
