"""Integration tests for the ComposeOrder use case.

Uses the in-memory fake catalog, no network.
"""

import pytest

from orderdesk.application.compose_order import ComposeOrderHandler
from orderdesk.application.dto import ItemSpec
from orderdesk.application.search_products import ProductSearchHandler
from orderdesk.application.variant_cache import VariantCache
from orderdesk.domain.exceptions import (
    CapacityExceededError,
    CatalogUnavailableError,
    EntityNotFoundError,
    VariantRequiredError,
)
from orderdesk.domain.model.product import Variant
from orderdesk.domain.model.value_objects import Money
from tests.fakes import FakeProductCatalog, make_product


def _setup(max_products: int = 20) -> tuple[ComposeOrderHandler, FakeProductCatalog]:
    catalog = FakeProductCatalog(
        [
            make_product("P1", "Lawn Suit", price="4500", variants=[("V1", "Red", "M")]),
            make_product("P2", "Silk Dupatta", price="1800", last_sale_price="1750"),
        ],
        variants={"P1": [Variant(id="V1", product_id="P1", color="Red", size="M"),
                         Variant(id="V7", product_id="P1", color="Black", size="S")]},
    )
    handler = ComposeOrderHandler(
        search=ProductSearchHandler(catalog, tenant_id="T1"),
        variant_cache=VariantCache(catalog),
        max_products=max_products,
    )
    return handler, catalog


class TestComposeHappyPath:

    def test_builds_priced_selection(self):
        handler, _ = _setup()
        composer = handler.handle([
            ItemSpec("P1", "V1", quantity="2"),
            ItemSpec("P2"),
        ])
        assert composer.keys == ("P1_V1", "P2")
        assert composer.total == Money.of("10750")

    def test_price_override(self):
        handler, _ = _setup()
        composer = handler.handle([ItemSpec("P2", quantity="3", price="1500")])
        assert composer.total == Money.of("4500")

    def test_variant_missing_from_page_is_looked_up(self):
        handler, catalog = _setup()
        composer = handler.handle([ItemSpec("P1", "V7")])
        assert composer.lines[0].color == "Black"
        assert catalog.variant_calls == ["P1"]

    def test_dto_formats_lines_and_total(self):
        handler, _ = _setup()
        dto = ComposeOrderHandler.to_dto(handler.handle([ItemSpec("P1", "V1", quantity="2")]))
        line = dto.lines[0]
        assert line.key == "P1_V1"
        assert line.variant_label == "Red / M"
        assert line.unit_price == "Rs. 4,500.00"
        assert line.line_total == "Rs. 9,000.00"
        assert dto.total == "Rs. 9,000.00"


class TestComposeValidation:

    def test_unknown_product_rejected(self):
        handler, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Product not found"):
            handler.handle([ItemSpec("P404")])

    def test_unknown_variant_rejected(self):
        handler, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Variant 'V404' not found"):
            handler.handle([ItemSpec("P1", "V404")])

    def test_variant_required(self):
        handler, _ = _setup()
        with pytest.raises(VariantRequiredError):
            handler.handle([ItemSpec("P1")])

    def test_capacity(self):
        handler, _ = _setup(max_products=1)
        with pytest.raises(CapacityExceededError):
            handler.handle([ItemSpec("P1", "V1"), ItemSpec("P2")])

    def test_catalog_outage_surfaces(self):
        handler, catalog = _setup()
        catalog.fail_with = CatalogUnavailableError("down", status_code=503)
        with pytest.raises(CatalogUnavailableError, match="Failed to load products"):
            handler.handle([ItemSpec("P2")])


class TestComposeBeyondFirstPage:

    def _large_catalog(self, count: int) -> tuple[ComposeOrderHandler, FakeProductCatalog]:
        catalog = FakeProductCatalog(
            [make_product(f"P{n}", f"Item {n}", price="10") for n in range(1, count + 1)]
        )
        handler = ComposeOrderHandler(
            search=ProductSearchHandler(catalog, tenant_id="T1", limit=50),
            variant_cache=VariantCache(catalog),
        )
        return handler, catalog

    def test_product_on_a_later_page_is_found(self):
        handler, catalog = self._large_catalog(60)
        composer = handler.handle([ItemSpec("P55")])
        assert composer.keys == ("P55",)
        assert catalog.pages_requested == [1, 2]

    def test_first_page_hits_fetch_nothing_more(self):
        handler, catalog = self._large_catalog(60)
        handler.handle([ItemSpec("P3"), ItemSpec("P40")])
        assert catalog.pages_requested == [1]

    def test_pages_are_fetched_once_across_items(self):
        handler, catalog = self._large_catalog(160)
        composer = handler.handle([ItemSpec("P155"), ItemSpec("P120"), ItemSpec("P2")])
        assert composer.keys == ("P155", "P120", "P2")
        assert catalog.pages_requested == [1, 2, 3, 4]

    def test_missing_product_stops_at_last_page(self):
        handler, catalog = self._large_catalog(60)
        with pytest.raises(EntityNotFoundError, match="Product not found: 'P99'"):
            handler.handle([ItemSpec("P99")])
        assert catalog.pages_requested == [1, 2]

    def test_backend_ignoring_page_number_does_not_loop(self):
        handler, catalog = self._large_catalog(50)
        catalog.search = lambda tenant_id, query="", limit=50, page=1: (
            FakeProductCatalog.search(catalog, tenant_id, query, limit, 1)
        )
        with pytest.raises(EntityNotFoundError):
            handler.handle([ItemSpec("P77")])
        assert catalog.pages_requested == [1, 1]
