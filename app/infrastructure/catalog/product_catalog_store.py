from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any

from app.application.ports.product_catalog import ProductCatalogPort
from app.domain.entities.product import Product
from app.infrastructure.catalog.product_catalog_data import SAMPLE_PRODUCTS


logger = logging.getLogger(__name__)


def normalize_sku(sku: str) -> str:
    return sku.strip().upper()


class ProductCatalogStore(ProductCatalogPort):
    """Read-only catalog. Browsing order is the order products were given in."""

    def __init__(self, products: list[Product] | None = None) -> None:
        self._products = list(products if products is not None else SAMPLE_PRODUCTS)
        self._by_sku = {normalize_sku(p.sku): p for p in self._products}

    @classmethod
    def from_json(cls, path: str) -> "ProductCatalogStore":
        """Load products from a JSON file; the bundled sample catalog is used when the file is absent."""
        file_path = Path(path)
        if not file_path.exists():
            logger.info("Catalog file not found, using sample products", extra={"reason": str(file_path)})
            return cls(SAMPLE_PRODUCTS)
        with open(file_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        items = raw.get("products", []) if isinstance(raw, dict) else raw
        return cls([product_from_dict(item) for item in items])

    def get_product(self, sku: str) -> Product | None:
        if not sku:
            return None
        return self._by_sku.get(normalize_sku(sku))

    def list_available(self) -> list[Product]:
        return [p for p in self._products if p.is_available]


def product_from_dict(data: dict[str, Any]) -> Product:
    price = float(data["price"])
    if price < 0:
        raise ValueError(f"Product {data.get('sku')} has a negative price")
    return Product(
        sku=normalize_sku(str(data["sku"])),
        name=str(data["name"]).strip(),
        description=str(data.get("description", "")),
        price=price,
        image_url=str(data.get("image_url") or data.get("imageUrl") or ""),
        name_ur=str(data.get("name_ur", "")).strip(),
        description_ur=str(data.get("description_ur", "")),
        currency=str(data.get("currency", "PKR")),
        active=bool(data.get("active", True)),
        stock=max(0, int(data.get("stock", 0))),
        category=str(data.get("category", "")).strip(),
        category_ur=str(data.get("category_ur", "")).strip(),
    )


def write_catalog(path: str, products: list[Product]) -> None:
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, "w", encoding="utf-8") as f:
        json.dump({"products": [asdict(p) for p in products]}, f, indent=2, ensure_ascii=False)
