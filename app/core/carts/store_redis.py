from typing import Iterable, List
import redis
from app.core.carts.models import DEFAULT_KEY, Product, dumps_cart, loads_cart
import logging

log = logging.getLogger(__name__)


class RedisSnapshotStore:
    """Snapshot del carrito en una única llave de Redis, sin TTL."""

    name = "redis"

    def __init__(self, url="redis://localhost:6379/0", key=DEFAULT_KEY, client=None):
        self.client = client or redis.Redis.from_url(url, decode_responses=True)
        self.key = key

    def load(self) -> List[Product]:
        raw = self.client.get(self.key)
        cart = loads_cart(raw)
        log.info(f"Snapshot {self.key} leído de Redis ({len(cart)} productos).")
        return cart

    def save(self, cart: Iterable[Product]) -> None:
        # Un solo SET: el valor anterior se reemplaza completo.
        serialized = dumps_cart(cart)
        self.client.set(self.key, serialized)
        log.info(f"Snapshot {self.key} guardado en Redis.")
