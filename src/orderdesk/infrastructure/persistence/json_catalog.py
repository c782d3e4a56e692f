"""JSON-file-backed implementation of ProductCatalog.

Used for offline work and demos.  The file holds a list of products in
the backend's own JSON shape, each tagged with its ``tenantId``.
"""

from __future__ import annotations

import json
from pathlib import Path

from orderdesk.domain.exceptions import CatalogUnavailableError
from orderdesk.domain.model.product import Product, Variant
from orderdesk.domain.repository.product_catalog import ProductCatalog
from orderdesk.infrastructure.catalog_records import products_from_raw

_SEARCH_FIELDS = ("name", "description", "category", "sku")


class JsonProductCatalog(ProductCatalog):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    # --- ProductCatalog interface ---------------------------------------------

    def search(
        self,
        tenant_id: str,
        query: str = "",
        limit: int = 50,
        page: int = 1,
    ) -> list[Product]:
        needle = query.strip().lower()
        skip = (max(page, 1) - 1) * limit
        matches = []
        for raw in self._load_raw():
            if str(raw.get("tenantId")) != tenant_id:
                continue
            if needle and not any(
                needle in str(raw.get(name) or "").lower() for name in _SEARCH_FIELDS
            ):
                continue
            if skip:
                skip -= 1
                continue
            matches.append(raw)
            if len(matches) >= limit:
                break
        return products_from_raw(matches)

    def variants(self, product_id: str) -> list[Variant]:
        for raw in self._load_raw():
            if str(raw.get("id")) == product_id:
                return list(products_from_raw([raw])[0].variants)
        raise CatalogUnavailableError(
            f"Product with ID '{product_id}' not found", status_code=404
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise CatalogUnavailableError(
                f"Catalog file not found: {self._file_path}"
            ) from exc
        except json.JSONDecodeError as exc:
            raise CatalogUnavailableError(
                f"Catalog file {self._file_path} is not valid JSON: {exc.msg}"
            ) from exc
