"""Shared pytest fixtures for cart tests."""
from __future__ import annotations

import time
from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient

from app.core.carts.errors import CatalogError
from app.core.carts.models import Product, StockInfo
from app.core.carts.service import CartManager
from app.core.carts.store_memory import MemorySnapshotStore
from app.main import create_app


class FakeCatalog:
    """In-memory stand-in for the remote products/stock service."""

    def __init__(self) -> None:
        self.products: Dict[int, Dict[str, Any]] = {
            1: {"id": 1, "title": "Tênis de Caminhada", "price": 179.9, "image": "1.jpg"},
            2: {"id": 2, "title": "Tênis VR Caminhada", "price": 139.9, "image": "2.jpg"},
            3: {"id": 3, "title": "Tênis Adidas", "price": 219.9, "image": "3.jpg"},
        }
        self.stock: Dict[int, int] = {1: 5, 2: 2, 3: 1}
        self.fail_products = False
        self.fail_stock = False
        self.stock_calls: List[int] = []

    def get_product(self, product_id: int) -> Product:
        if self.fail_products or product_id not in self.products:
            raise CatalogError(f"product {product_id} unavailable")
        return Product.from_dict(self.products[product_id], amount=1)

    def get_stock(self, product_id: int) -> StockInfo:
        self.stock_calls.append(product_id)
        if self.fail_stock or product_id not in self.stock:
            raise CatalogError(f"stock {product_id} unavailable")
        return StockInfo(id=product_id, amount=self.stock[product_id])


class CountingStore(MemorySnapshotStore):
    """Memory store that records every save."""

    def __init__(self) -> None:
        super().__init__()
        self.saves = 0
        self.fail = False
        self.delay = 0.0

    def save(self, cart) -> None:
        if self.fail:
            raise OSError("disk full")
        if self.delay:
            time.sleep(self.delay)
        self.saves += 1
        super().save(cart)

    def raw(self):
        return self._store.get(self.key)


class FakeRedis:
    """Minimal dict-backed client with the redis-py calls the store uses."""

    def __init__(self) -> None:
        self.data: Dict[str, str] = {}

    def ping(self) -> bool:
        return True

    def get(self, key: str):
        return self.data.get(key)

    def set(self, key: str, value: str) -> bool:
        self.data[key] = value
        return True


@pytest.fixture
def catalog() -> FakeCatalog:
    return FakeCatalog()


@pytest.fixture
def store() -> CountingStore:
    return CountingStore()


@pytest.fixture
def manager(store: CountingStore, catalog: FakeCatalog) -> CartManager:
    return CartManager.load(store, catalog)


@pytest.fixture
def test_client(manager: CartManager):
    app = create_app(cart_manager=manager)
    with TestClient(app) as client:
        yield client
