from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.product import Product


class ProductCatalogPort(ABC):
    @abstractmethod
    def get_product(self, sku: str) -> Product | None:
        """Get product by SKU, whether or not it is currently browsable."""
        raise NotImplementedError

    @abstractmethod
    def list_available(self) -> list[Product]:
        """Active, in-stock products in catalog order."""
        raise NotImplementedError

    def next_product(self, current_sku: str | None) -> Product | None:
        """Product after `current_sku` in catalog order, wrapping to the first. None if nothing is available."""
        products = self.list_available()
        if not products:
            return None
        if not current_sku:
            return products[0]
        skus = [p.sku for p in products]
        index = skus.index(current_sku) if current_sku in skus else -1
        return products[(index + 1) % len(products)]
