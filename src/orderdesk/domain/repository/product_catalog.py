"""Abstract catalog port.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (HTTP, JSON file, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderdesk.domain.model.product import Product, Variant


class ProductCatalog(ABC):

    @abstractmethod
    def search(
        self,
        tenant_id: str,
        query: str = "",
        limit: int = 50,
        page: int = 1,
    ) -> list[Product]:
        """Return one page (1-based) of the tenant's products matching *query*.

        Raises CatalogUnavailableError when the catalog cannot be reached.
        """

    @abstractmethod
    def variants(self, product_id: str) -> list[Variant]:
        """Return the purchasable variants of a product.

        Raises CatalogUnavailableError when the catalog cannot be reached.
        """
