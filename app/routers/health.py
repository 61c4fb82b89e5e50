from fastapi import APIRouter, Depends

from app.core.carts.service import CartManager
from app.routers.cart import get_cart_manager

router = APIRouter(tags=["Health"])


@router.get("/health")
def health(manager: CartManager = Depends(get_cart_manager)):
    return {"status": "ok", "store": getattr(manager.store, "name", "unknown")}
