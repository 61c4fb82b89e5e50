# app/routers/cart.py
import os
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.core.carts.errors import (
    CartResult,
    ADD_PRODUCT,
    INSUFFICIENT_STOCK,
    PRODUCT_NOT_FOUND,
)
from app.core.carts.models import DEFAULT_KEY
from app.core.carts.service import CartManager, build_snapshot_store
from app.core.catalog import CatalogClient

router = APIRouter(prefix="/cart", tags=["Cart"])

ERROR_STATUS = {
    PRODUCT_NOT_FOUND: 404,
    INSUFFICIENT_STOCK: 409,
    ADD_PRODUCT: 502,
}


class AmountUpdate(BaseModel):
    amount: int


def create_cart_manager() -> CartManager:
    """Arma el CartManager del proceso a partir de las variables de entorno."""
    store = build_snapshot_store(
        backend=os.getenv("SNAPSHOT_BACKEND", "redis"),
        redis_url=os.getenv("REDIS_URL", "redis://localhost:6379/0"),
        database_url=os.getenv("DATABASE_URL"),
        key=os.getenv("CART_STORAGE_KEY", DEFAULT_KEY),
    )
    return CartManager.load(store, CatalogClient())


def get_cart_manager(request: Request) -> CartManager:
    return request.app.state.cart_manager


def _summary(manager: CartManager) -> dict:
    return {
        "items": [p.to_dict() for p in manager.cart],
        "total_items": manager.total_items(),
        "subtotal": manager.subtotal(),
    }


def _respond(manager: CartManager, result: CartResult):
    if result.ok:
        return _summary(manager)
    return JSONResponse(
        status_code=ERROR_STATUS.get(result.error, 502),
        content={"detail": result.message, "error": result.error},
    )


@router.get("")
def show_cart(manager: CartManager = Depends(get_cart_manager)):
    return _summary(manager)


@router.post("/items/{product_id}")
def add_product(product_id: int, manager: CartManager = Depends(get_cart_manager)):
    return _respond(manager, manager.add_product(product_id))


@router.delete("/items/{product_id}")
def remove_product(product_id: int, manager: CartManager = Depends(get_cart_manager)):
    return _respond(manager, manager.remove_product(product_id))


@router.patch("/items/{product_id}")
def update_product_amount(
    product_id: int,
    body: AmountUpdate,
    manager: CartManager = Depends(get_cart_manager),
):
    return _respond(manager, manager.update_product_amount(product_id, body.amount))
