from typing import Iterable, List
from app.core.carts.models import DEFAULT_KEY, Product, dumps_cart, loads_cart
from app.storage.db import DATABASE_URL, Base, make_engine, make_session_factory, session_scope
from app.storage.models import Snapshot
import logging

log = logging.getLogger(__name__)


class SqlSnapshotStore:
    """Snapshot del carrito en la tabla `snapshots` (SQLite local por defecto)."""

    name = "sql"

    def __init__(self, url=None, key=DEFAULT_KEY, engine=None):
        self.engine = engine or make_engine(url or DATABASE_URL)
        self.key = key
        Base.metadata.create_all(bind=self.engine)
        self._sessions = make_session_factory(self.engine)

    def load(self) -> List[Product]:
        with session_scope(self._sessions) as db:
            row = db.get(Snapshot, self.key)
            raw = row.value if row else None
        return loads_cart(raw)

    def save(self, cart: Iterable[Product]) -> None:
        serialized = dumps_cart(cart)
        # Commit único por escritura
        with session_scope(self._sessions) as db:
            row = db.get(Snapshot, self.key)
            if row:
                row.value = serialized
            else:
                db.add(Snapshot(key=self.key, value=serialized))
        log.info(f"Snapshot {self.key} guardado en la base de datos.")
