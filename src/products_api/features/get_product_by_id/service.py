import asyncio
from datetime import UTC, datetime
from typing import Protocol

from products_api.features.get_product_by_id.dto import GetProductByIdRequest
from products_api.infrastructure.data_access import ProductDataModel


class ProductSearchByIdService(Protocol):
    async def get(self, request: GetProductByIdRequest) -> ProductDataModel: ...


class StubProductSearchByIdService:
    """Returns a mocked ``keyboard`` product after an artificial delay."""

    def __init__(self, delay: float = 2.0) -> None:
        self._delay = delay

    async def get(self, request: GetProductByIdRequest) -> ProductDataModel:
        await asyncio.sleep(self._delay)
        return ProductDataModel(
            correlation_id=request.correlation_id,
            product_id=request.product_id,
            product_name="keyboard",
            updated_date_time=datetime.now(UTC),
        )
