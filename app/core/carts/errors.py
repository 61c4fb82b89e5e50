from dataclasses import dataclass
from typing import Optional, Tuple

from app.core.carts.models import Product

PRODUCT_NOT_FOUND = "product_not_found"
INSUFFICIENT_STOCK = "insufficient_stock"
ADD_PRODUCT = "add_product"
UNEXPECTED = "unexpected"

# Mensajes mostrados al usuario, uno por operación
MSG_ADD_FAILED = "Error al agregar el producto"
MSG_REMOVE_FAILED = "Error al eliminar el producto"
MSG_UPDATE_FAILED = "Error al modificar la cantidad del producto"
MSG_OUT_OF_STOCK = "Cantidad solicitada fuera de stock"


class CartError(Exception):
    kind = UNEXPECTED
    message = MSG_UPDATE_FAILED


class ProductNotFoundError(CartError):
    kind = PRODUCT_NOT_FOUND


class InvalidAmountError(ProductNotFoundError):
    """Cantidad < 1. Comparte el tipo de error con ProductNotFoundError."""


class InsufficientStockError(CartError):
    kind = INSUFFICIENT_STOCK
    message = MSG_OUT_OF_STOCK


class AddProductError(CartError):
    kind = ADD_PRODUCT
    message = MSG_ADD_FAILED


class CatalogError(Exception):
    """Falla del servicio remoto de catálogo/stock (red, HTTP, respuesta vacía)."""


@dataclass(frozen=True)
class CartResult:
    ok: bool
    cart: Tuple[Product, ...]
    error: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def success(cls, cart) -> "CartResult":
        return cls(ok=True, cart=tuple(cart))

    @classmethod
    def failure(cls, cart, error: str, message: str) -> "CartResult":
        return cls(ok=False, cart=tuple(cart), error=error, message=message)

