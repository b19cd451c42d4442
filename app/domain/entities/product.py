from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Product:
    sku: str
    name: str
    description: str
    price: float
    image_url: str
    name_ur: str = ""
    description_ur: str = ""
    currency: str = "PKR"
    active: bool = True
    stock: int = 0
    category: str = ""
    category_ur: str = ""

    @property
    def is_available(self) -> bool:
        return self.active and self.stock > 0
