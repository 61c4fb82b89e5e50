import os
import httpx
import logging

from app.core.carts.errors import CatalogError
from app.core.carts.models import Product, StockInfo

log = logging.getLogger(__name__)

CATALOG_API_URL = os.getenv("CATALOG_API_URL", "http://localhost:3333")
CATALOG_TIMEOUT = float(os.getenv("CATALOG_TIMEOUT", "10"))


class CatalogClient:
    """Cliente del servicio remoto de productos y stock.

    Cada llamada consulta al servicio; el stock nunca se cachea.
    """

    def __init__(self, base_url: str = CATALOG_API_URL, timeout: float = CATALOG_TIMEOUT, client=None):
        self.client = client or httpx.Client(base_url=base_url, timeout=timeout)

    def _get_json(self, path: str) -> dict:
        try:
            resp = self.client.get(path)
            resp.raise_for_status()
            data = resp.json() if resp.content else None
        except (httpx.HTTPError, ValueError) as err:
            log.warning(f"Fallo consultando {path}: {err}")
            raise CatalogError(f"{path}: {err}") from err
        if not data:
            raise CatalogError(f"{path}: respuesta vacía")
        return data

    def get_product(self, product_id: int) -> Product:
        data = self._get_json(f"/products/{product_id}")
        # La cantidad que mande el catálogo no aplica al carrito.
        return Product.from_dict(data, amount=1)

    def get_stock(self, product_id: int) -> StockInfo:
        data = self._get_json(f"/stock/{product_id}")
        try:
            return StockInfo.from_dict(data)
        except (KeyError, TypeError, ValueError) as err:
            raise CatalogError(f"/stock/{product_id}: respuesta inválida") from err

    def close(self) -> None:
        self.client.close()
