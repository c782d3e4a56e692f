"""In-memory fakes for testing.

The fake catalog and gateway implement the same abstract interfaces as
the HTTP clients but keep everything in memory.  FakeSession stands in
for ``requests.Session`` so the HTTP clients run without a network.
"""

from __future__ import annotations

import threading

from orderdesk.domain.exceptions import CatalogUnavailableError, OrderSubmissionError
from orderdesk.domain.model.product import Product, Variant
from orderdesk.domain.model.value_objects import Money
from orderdesk.domain.repository.order_gateway import OrderGateway, SubmittedOrder
from orderdesk.domain.repository.product_catalog import ProductCatalog


def make_product(
    product_id: str = "P1",
    name: str = "Lawn Suit",
    price: str = "100.00",
    last_sale_price: str | None = None,
    variants: list[tuple[str, str | None, str | None]] | None = None,
) -> Product:
    """Build a product; *variants* is a list of (id, color, size)."""
    built = tuple(
        Variant(id=vid, product_id=product_id, color=color, size=size)
        for vid, color, size in variants or []
    )
    return Product(
        id=product_id,
        name=name,
        price=Money.of(price),
        last_sale_price=Money.of(last_sale_price) if last_sale_price else None,
        has_variants=bool(built),
        variants=built,
    )


class FakeProductCatalog(ProductCatalog):

    def __init__(
        self,
        products: list[Product] | None = None,
        tenant_id: str = "T1",
        variants: dict[str, list[Variant]] | None = None,
    ) -> None:
        self._products = {tenant_id: list(products or [])}
        self._variants = dict(variants or {})
        self.search_calls: list[str] = []
        self.pages_requested: list[int] = []
        self.variant_calls: list[str] = []
        self.fail_with: CatalogUnavailableError | None = None

    def search(
        self,
        tenant_id: str,
        query: str = "",
        limit: int = 50,
        page: int = 1,
    ) -> list[Product]:
        self.search_calls.append(query)
        self.pages_requested.append(page)
        if self.fail_with is not None:
            raise self.fail_with
        needle = query.lower()
        return [
            p for p in self._products.get(tenant_id, [])
            if needle in p.name.lower()
        ][(page - 1) * limit:page * limit]

    def variants(self, product_id: str) -> list[Variant]:
        self.variant_calls.append(product_id)
        if self.fail_with is not None:
            raise self.fail_with
        if product_id not in self._variants:
            raise CatalogUnavailableError("not found", status_code=404)
        return list(self._variants[product_id])


class ScriptedCatalog(ProductCatalog):
    """Catalog whose search answers are released by the test.

    ``search`` blocks until ``release(query, products)`` is called for
    that query, so a test can finish searches in any order.
    """

    def __init__(self) -> None:
        self._answers: dict[str, list[Product]] = {}
        self._ready: dict[str, threading.Event] = {}
        self._lock = threading.Lock()

    def _event(self, query: str) -> threading.Event:
        with self._lock:
            return self._ready.setdefault(query, threading.Event())

    def release(self, query: str, products: list[Product]) -> None:
        self._answers[query] = products
        self._event(query).set()

    def search(
        self,
        tenant_id: str,
        query: str = "",
        limit: int = 50,
        page: int = 1,
    ) -> list[Product]:
        if not self._event(query).wait(timeout=5):
            raise AssertionError(f"search {query!r} was never released")
        return self._answers[query]

    def variants(self, product_id: str) -> list[Variant]:
        return []


class FakeOrderGateway(OrderGateway):

    def __init__(self, fail_with: OrderSubmissionError | None = None) -> None:
        self.bodies: list[dict] = []
        self._fail_with = fail_with

    def submit(self, body: dict) -> SubmittedOrder:
        if self._fail_with is not None:
            raise self._fail_with
        self.bodies.append(body)
        return SubmittedOrder(
            id=str(len(self.bodies)),
            customer_id="C9",
            order_number=f"DEMO-JAN-25-{len(self.bodies):03d}",
        )


class FakeResponse:

    def __init__(self, status_code: int = 200, payload=None, reason: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.reason = reason

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    """Records requests and replays queued responses or exceptions."""

    def __init__(self, *responses) -> None:
        self.headers: dict[str, str] = {}
        self.requests: list[tuple[str, str, dict]] = []
        self._responses = list(responses)

    def _next(self):
        outcome = self._responses.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def get(self, url, params=None, timeout=None):
        self.requests.append(("GET", url, {"params": params, "timeout": timeout}))
        return self._next()

    def post(self, url, json=None, timeout=None):
        self.requests.append(("POST", url, {"json": json, "timeout": timeout}))
        return self._next()
