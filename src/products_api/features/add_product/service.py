import asyncio
import logging
from typing import Protocol

from products_api.features.add_product.dto import AddProductRequest

logger = logging.getLogger("products_api.features.add_product")


class CreateProductService(Protocol):
    async def execute(self, request: AddProductRequest) -> bool: ...


class StubCreateProductService:
    """Accepts every product after an artificial delay."""

    def __init__(self, delay: float = 2.0) -> None:
        self._delay = delay

    async def execute(self, request: AddProductRequest) -> bool:
        await asyncio.sleep(self._delay)
        logger.debug("%s accepted product %s", request.correlation_id, request.id)
        return True
