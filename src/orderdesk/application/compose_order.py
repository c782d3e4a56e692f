"""Application service: Compose Order use case.

Orchestrates catalog search, variant resolution and the composer to
turn a list of requested items into a priced selection.  This is the
non-interactive equivalent of clicking through the product selector.
"""

from __future__ import annotations

from orderdesk.application.dto import ItemSpec, OrderLineDTO, SelectionDTO
from orderdesk.application.search_products import ProductSearchHandler
from orderdesk.application.variant_cache import VariantCache
from orderdesk.domain.exceptions import CatalogUnavailableError, EntityNotFoundError
from orderdesk.domain.model.composer import DEFAULT_MAX_PRODUCTS, OrderLineComposer
from orderdesk.domain.model.product import Product, Variant


class _CatalogPager:
    """Product lookup by id that pulls further pages only when needed."""

    def __init__(self, search: ProductSearchHandler, first_page: list[Product]) -> None:
        self._search = search
        self._products = {p.id: p for p in first_page}
        self._next_page: int | None = 2 if len(first_page) >= search.limit else None

    def find(self, product_id: str) -> Product | None:
        while product_id not in self._products and self._next_page is not None:
            batch = self._search.page(self._next_page)
            fresh = [p for p in batch if p.id not in self._products]
            self._products.update((p.id, p) for p in fresh)
            # A short page is the last one.  No new ids means the backend
            # ignored the page number.
            if fresh and len(batch) >= self._search.limit:
                self._next_page += 1
            else:
                self._next_page = None
        return self._products.get(product_id)


class ComposeOrderHandler:

    def __init__(
        self,
        search: ProductSearchHandler,
        variant_cache: VariantCache,
        max_products: int = DEFAULT_MAX_PRODUCTS,
    ) -> None:
        self._search = search
        self._variant_cache = variant_cache
        self._max_products = max_products

    def handle(self, item_specs: list[ItemSpec]) -> OrderLineComposer:
        """Build a composer holding one line per item spec.

        Steps:
        1. Load the tenant's first catalog page.
        2. Resolve each product id, paging further through the catalog for
           ids not seen yet, and the variant id when given.
        3. Add the line, then apply any quantity/price override.
        """
        result = self._search.search("")
        if result.notice:
            raise CatalogUnavailableError(result.notice)
        pager = _CatalogPager(self._search, result.products)
        composer = OrderLineComposer(max_products=self._max_products)

        for spec in item_specs:
            product = pager.find(spec.product_id)
            if product is None:
                raise EntityNotFoundError(f"Product not found: '{spec.product_id}'")

            variant = None
            if spec.variant_id:
                variant = self._resolve_variant(product, spec.variant_id)

            line = composer.add_line(product, variant)
            if spec.quantity is not None:
                composer.set_quantity(line.key, spec.quantity)
            if spec.price is not None:
                composer.set_price(line.key, spec.price)

        return composer

    def _resolve_variant(self, product: Product, variant_id: str) -> Variant:
        variant = product.find_variant(variant_id)
        if variant is None:
            # A search page may carry only some variants; ask the catalog.
            entry = self._variant_cache.ensure(product.id, product.name)
            for candidate in entry.variants if entry else ():
                if candidate.id == variant_id:
                    variant = candidate
                    break
        if variant is None:
            raise EntityNotFoundError(
                f"Variant '{variant_id}' not found for product '{product.name}'"
            )
        return variant

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def to_dto(composer: OrderLineComposer) -> SelectionDTO:
        lines = []
        for line in composer.lines:
            key = line.key
            label = " / ".join(p for p in (line.color, line.size) if p)
            lines.append(
                OrderLineDTO(
                    key=key,
                    product_name=line.name,
                    variant_label=label,
                    quantity=composer.quantity_of(key),
                    unit_price=str(composer.price_of(key)),
                    line_total=str(composer.line_total(key)),
                )
            )
        return SelectionDTO(lines=lines, total=str(composer.total))
