import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.routers import cart, health

log = logging.getLogger(__name__)


# --- Lifespan ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Se ejecuta al iniciar la app; los tests pueden inyectar su propio manager.
    if getattr(app.state, "cart_manager", None) is None:
        app.state.cart_manager = cart.create_cart_manager()
    log.info("[startup] Carrito cargado desde el snapshot.")
    yield
    # Al apagar la app
    catalog = app.state.cart_manager.catalog
    if hasattr(catalog, "close"):
        catalog.close()
    log.info("[shutdown] App finalizada correctamente.")


def create_app(cart_manager=None) -> FastAPI:
    app = FastAPI(
        title="Cart API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.cart_manager = cart_manager

    # --- Routers ---
    app.include_router(cart.router)
    app.include_router(health.router)

    @app.get("/")
    async def root():
        return {"message": "API del carrito en linea"}

    return app


logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)

# --- Inicializacion de la app ---
app = create_app()
