from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional
import json
import logging

log = logging.getLogger(__name__)

DEFAULT_KEY = "@RocketShoes:cart"

# Campos propios del producto; el resto del catálogo se guarda en `extra`.
_PRODUCT_FIELDS = ("id", "title", "price", "image", "amount")


@dataclass(frozen=True)
class Product:
    id: int
    title: str = ""
    price: float = 0.0
    image: Optional[str] = None
    amount: int = 1
    extra: dict = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.id, int) or isinstance(self.id, bool):
            raise ValueError("ID de producto inválido")
        if self.amount < 1:
            raise ValueError("Cantidad debe ser >= 1")

    def with_amount(self, amount: int) -> "Product":
        return replace(self, amount=amount)

    def line_total(self) -> float:
        return float(self.price) * self.amount

    def to_dict(self) -> dict:
        d = dict(self.extra)
        d.update(
            id=self.id,
            title=self.title,
            price=self.price,
            image=self.image,
            amount=self.amount,
        )
        return d

    @classmethod
    def from_dict(cls, data: dict, amount: Optional[int] = None) -> "Product":
        """Construye un producto desde el JSON del catálogo o del snapshot.

        Si se pasa `amount`, reemplaza cualquier cantidad que traiga `data`.
        """
        extra = {k: v for k, v in data.items() if k not in _PRODUCT_FIELDS}
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            price=data.get("price", 0.0),
            image=data.get("image"),
            amount=amount if amount is not None else data.get("amount", 1),
            extra=extra,
        )


@dataclass(frozen=True)
class StockInfo:
    id: int
    amount: int

    @classmethod
    def from_dict(cls, data: dict) -> "StockInfo":
        return cls(id=int(data["id"]), amount=int(data["amount"]))


def dumps_cart(products: Iterable[Product]) -> str:
    """Serializa la colección como arreglo JSON, en el orden del carrito."""
    return json.dumps([p.to_dict() for p in products], ensure_ascii=False)


def loads_cart(raw: Optional[str]) -> List[Product]:
    if not raw:
        return []
    return [Product.from_dict(item) for item in json.loads(raw)]
