from typing import Iterable, List
from app.core.carts.models import DEFAULT_KEY, Product, dumps_cart, loads_cart
import logging

log = logging.getLogger(__name__)


class MemorySnapshotStore:
    """Almacenamiento en memoria para desarrollo o fallback cuando Redis no está disponible."""

    name = "memory"

    def __init__(self, key: str = DEFAULT_KEY):
        self.key = key
        self._store = {}

    def load(self) -> List[Product]:
        return loads_cart(self._store.get(self.key))

    def save(self, cart: Iterable[Product]) -> None:
        # Se guarda serializado para que load() nunca devuelva objetos compartidos.
        self._store[self.key] = dumps_cart(cart)
        log.info(f"Snapshot {self.key} actualizado en memoria.")
