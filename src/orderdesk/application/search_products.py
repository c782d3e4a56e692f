"""Application service: catalog search for the product selector.

Searches are issued per keystroke and may finish out of order.  Each
search gets a ticket; a result is applied only if its ticket is still
the newest one issued, so a slow early search can never overwrite the
answer to a later one.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field

from orderdesk.domain.exceptions import CatalogUnavailableError
from orderdesk.domain.model.product import Product
from orderdesk.domain.repository.product_catalog import ProductCatalog

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 50
LOAD_FAILED_NOTICE = "Failed to load products"


@dataclass(frozen=True)
class SearchTicket:
    sequence: int
    query: str


@dataclass(frozen=True)
class SearchResult:
    ticket: SearchTicket
    products: list[Product] = field(default_factory=list)
    stale: bool = False
    notice: str | None = None  # user-facing, retryable


class ProductSearchHandler:

    def __init__(
        self,
        catalog: ProductCatalog,
        tenant_id: str,
        limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> None:
        self._catalog = catalog
        self._tenant_id = tenant_id
        self._limit = limit
        self._lock = threading.Lock()
        self._issued = 0
        self._products: list[Product] = []

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def products(self) -> list[Product]:
        """Products of the newest search that has completed."""
        with self._lock:
            return list(self._products)

    def begin(self, query: str) -> SearchTicket:
        """Register a new search, superseding any in flight."""
        with self._lock:
            self._issued += 1
            return SearchTicket(sequence=self._issued, query=query.strip())

    def run(self, ticket: SearchTicket) -> SearchResult:
        """Execute the search for *ticket* and apply it if still current.

        Catalog failures fall back to an empty list.  Authentication
        failures carry no notice (the session layer handles re-login);
        anything else gets a retryable notice.
        """
        notice = None
        try:
            products = self._catalog.search(self._tenant_id, ticket.query, self._limit)
        except CatalogUnavailableError as exc:
            logger.warning("Product search %r failed: %s", ticket.query, exc)
            products = []
            if not exc.is_auth_failure:
                notice = LOAD_FAILED_NOTICE

        with self._lock:
            if ticket.sequence != self._issued:
                logger.debug(
                    "Dropping stale search #%d (%r); newest is #%d",
                    ticket.sequence, ticket.query, self._issued,
                )
                return SearchResult(ticket=ticket, products=products, stale=True)
            self._products = list(products)

        return SearchResult(ticket=ticket, products=products, notice=notice)

    def search(self, query: str = "") -> SearchResult:
        return self.run(self.begin(query))

    def page(self, number: int, query: str = "") -> list[Product]:
        """Fetch a further page of results without touching the current ones.

        Catalog errors propagate; there is no notice fallback here.
        """
        return self._catalog.search(self._tenant_id, query.strip(), self._limit, page=number)
