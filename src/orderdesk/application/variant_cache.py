"""Variant cache for lines whose product is not on the displayed page.

When an existing order is reopened, some of its lines may reference
products that the current search did not return.  To offer a "change
variant" choice for those lines the variants are fetched once per
product and kept for the rest of the session.

Concurrent requests for the same product share a single fetch.  A
failed fetch is logged and ignored: the line simply has no variant
choices.  Fetches for a whole order run in the background on an
executor; the caller may wait on the returned futures or not.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from concurrent.futures import Executor, Future, ThreadPoolExecutor

from orderdesk.domain.exceptions import CatalogUnavailableError
from orderdesk.domain.model.order_line import OrderLine
from orderdesk.domain.model.product import Product, Variant, VariantSet
from orderdesk.domain.repository.product_catalog import ProductCatalog

logger = logging.getLogger(__name__)


class VariantCache:

    def __init__(self, catalog: ProductCatalog, executor: Executor | None = None) -> None:
        self._catalog = catalog
        self._executor = executor
        self._owns_executor = executor is None
        self._lock = threading.Lock()
        self._entries: dict[str, VariantSet] = {}
        self._pending: dict[str, Future] = {}

    def get(self, product_id: str) -> VariantSet | None:
        with self._lock:
            return self._entries.get(product_id)

    def ensure(self, product_id: str, name: str = "") -> VariantSet | None:
        """Return the product's variants, fetching them on first use.

        Returns None if the lookup failed.  A failed product is not
        remembered, so a later call may try again.
        """
        with self._lock:
            cached = self._entries.get(product_id)
            if cached is not None:
                logger.debug("Variant cache hit for product %s", product_id)
                return cached
            pending = self._pending.get(product_id)
            owner = pending is None
            if owner:
                pending = Future()
                self._pending[product_id] = pending

        if not owner:
            return pending.result()

        entry = None
        try:
            variants = self._catalog.variants(product_id)
            entry = VariantSet(product_id=product_id, name=name, variants=tuple(variants))
        except CatalogUnavailableError as exc:
            logger.warning("Variant lookup for product %s failed: %s", product_id, exc)
        finally:
            # Waiters must be released even if the lookup raised.
            with self._lock:
                if entry is not None:
                    self._entries[product_id] = entry
                del self._pending[product_id]
            pending.set_result(entry)
        return entry

    def ensure_for_lines(
        self,
        lines: Iterable[OrderLine],
        displayed: Iterable[Product],
    ) -> list[Future]:
        """Start fetching variants for variant lines missing from *displayed*.

        Returns immediately with one future per product fetched; each
        resolves to the product's VariantSet, or None on failure.
        """
        shown = {product.id for product in displayed}
        wanted: dict[str, str] = {}
        for line in lines:
            if line.variant_id and line.product_id not in shown:
                wanted.setdefault(line.product_id, line.name)
        if not wanted:
            return []
        executor = self._get_executor()
        return [
            executor.submit(self.ensure, product_id, name)
            for product_id, name in wanted.items()
        ]

    def choices_for(self, line: OrderLine, displayed: Iterable[Product]) -> tuple[Variant, ...]:
        """Variants *line* can switch to, from the page or the cache."""
        for product in displayed:
            if product.id == line.product_id:
                return product.variants
        entry = self.get(line.product_id)
        return entry.variants if entry is not None else ()

    def close(self) -> None:
        """Shut down the background executor if this cache created it."""
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None and self._owns_executor:
            executor.shutdown(wait=True)

    def _get_executor(self) -> Executor:
        with self._lock:
            if self._executor is None:
                self._owns_executor = True
                self._executor = ThreadPoolExecutor(
                    max_workers=4, thread_name_prefix="variant-cache"
                )
            return self._executor
