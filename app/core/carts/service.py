from typing import Callable, List, Tuple
import threading
from app.core.carts.errors import (
    CartError,
    CartResult,
    AddProductError,
    InsufficientStockError,
    InvalidAmountError,
    ProductNotFoundError,
    ADD_PRODUCT,
    UNEXPECTED,
    MSG_ADD_FAILED,
    MSG_REMOVE_FAILED,
    MSG_UPDATE_FAILED,
)
from app.core.carts.models import DEFAULT_KEY, Product
from app.core.carts.store_memory import MemorySnapshotStore
from app.core.carts.store_redis import RedisSnapshotStore
from app.core.carts.store_sql import SqlSnapshotStore
import logging

log = logging.getLogger(__name__)


def build_snapshot_store(backend="redis", redis_url="redis://localhost:6379/0",
                         database_url=None, key=DEFAULT_KEY, client=None):
    """Elige el medio durable del snapshot."""
    if backend == "memory":
        return MemorySnapshotStore(key=key)
    if backend == "sql":
        return SqlSnapshotStore(url=database_url, key=key)
    if backend != "redis":
        raise ValueError(f"Backend de snapshot desconocido: {backend}")
    # Intenta Redis y si falla usa memoria (para dev/local sin Redis).
    try:
        store = RedisSnapshotStore(url=redis_url, key=key, client=client)
        store.client.ping()
        log.info("CartManager usando Redis.")
        return store
    except Exception as err:
        log.warning(f"No se pudo conectar a Redis ({err}). Usando carrito en memoria.")
        return MemorySnapshotStore(key=key)


class CartManager:
    """Estado del carrito: valida contra el stock remoto y persiste cada cambio.

    `store` expone load()/save(cart) y `catalog` get_product(id)/get_stock(id).
    Las operaciones públicas nunca lanzan: devuelven un CartResult.
    Cada operación pública corre completa bajo `_lock`: lectura, consulta
    remota y commit.
    """

    def __init__(self, store, catalog, cart=None):
        self.store = store
        self.catalog = catalog
        self._cart: Tuple[Product, ...] = tuple(cart or ())
        self._observers: List[Callable] = []
        self._lock = threading.Lock()

    @classmethod
    def load(cls, store, catalog) -> "CartManager":
        cart = store.load()
        log.info(f"Carrito inicializado con {len(cart)} productos.")
        return cls(store, catalog, cart=cart)

    # --- vista de solo lectura ---
    @property
    def cart(self) -> Tuple[Product, ...]:
        return self._cart

    def total_items(self) -> int:
        return sum(p.amount for p in self._cart)

    def subtotal(self) -> float:
        return sum(p.line_total() for p in self._cart)

    def subscribe(self, callback: Callable) -> Callable[[], None]:
        self._observers.append(callback)

        def unsubscribe():
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    # --- operaciones públicas ---
    def add_product(self, product_id: int) -> CartResult:
        with self._lock:
            return self._add_product(product_id)

    def remove_product(self, product_id: int) -> CartResult:
        with self._lock:
            return self._remove_product(product_id)

    def update_product_amount(self, product_id: int, amount: int) -> CartResult:
        with self._lock:
            return self._update_product_amount(product_id, amount)

    # --- internos ---
    def _add_product(self, product_id: int) -> CartResult:
        try:
            current = self._find(product_id)
            if current is not None:
                self._update_amount(product_id, current.amount + 1)
            else:
                self._add_new(product_id)
        except CartError as err:
            return self._fail("add", product_id, err.kind, err.message, err)
        except Exception as err:
            return self._fail("add", product_id, ADD_PRODUCT, MSG_ADD_FAILED, err)
        return CartResult.success(self._cart)

    def _remove_product(self, product_id: int) -> CartResult:
        try:
            if self._find(product_id) is None:
                raise ProductNotFoundError(f"Producto {product_id} no está en el carrito")
            self._commit(p for p in self._cart if p.id != product_id)
        except CartError as err:
            return self._fail("remove", product_id, err.kind, MSG_REMOVE_FAILED, err)
        except Exception as err:
            return self._fail("remove", product_id, UNEXPECTED, MSG_REMOVE_FAILED, err)
        return CartResult.success(self._cart)

    def _update_product_amount(self, product_id: int, amount: int) -> CartResult:
        try:
            self._update_amount(product_id, amount)
        except CartError as err:
            return self._fail("update", product_id, err.kind, err.message, err)
        except Exception as err:
            return self._fail("update", product_id, UNEXPECTED, MSG_UPDATE_FAILED, err)
        return CartResult.success(self._cart)

    def _find(self, product_id: int):
        for p in self._cart:
            if p.id == product_id:
                return p
        return None

    def _add_new(self, product_id: int) -> None:
        try:
            fetched = self.catalog.get_product(product_id)
        except Exception as err:
            raise AddProductError(f"Catálogo falló para {product_id}: {err}") from err
        if not fetched:
            raise AddProductError(f"Producto {product_id} no existe en el catálogo")
        if fetched.id != product_id:
            raise AddProductError(
                f"Catálogo devolvió el producto {fetched.id} al pedir {product_id}"
            )
        self._commit(self._cart + (fetched.with_amount(1),))

    def _update_amount(self, product_id: int, amount: int) -> None:
        if self._find(product_id) is None:
            raise ProductNotFoundError(f"Producto {product_id} no está en el carrito")
        if amount < 1:
            raise InvalidAmountError(f"Cantidad inválida {amount} para {product_id}")
        stock = self.catalog.get_stock(product_id)
        if amount > stock.amount:
            raise InsufficientStockError(
                f"Pedido {amount} de {product_id}, stock {stock.amount}"
            )
        self._commit(
            p.with_amount(amount) if p.id == product_id else p for p in self._cart
        )

    def _commit(self, products) -> None:
        new_cart = tuple(products)
        # Primero el snapshot; si falla, el estado en memoria no cambia.
        self.store.save(new_cart)
        self._cart = new_cart
        log.info(f"Carrito actualizado: {len(new_cart)} productos.")
        for callback in list(self._observers):
            try:
                callback(new_cart)
            except Exception:
                log.exception("Observador del carrito falló")

    def _fail(self, action, product_id, kind, message, err) -> CartResult:
        log.warning(f"Operación {action} rechazada para {product_id} ({kind}): {err}")
        return CartResult.failure(self._cart, kind, message)
