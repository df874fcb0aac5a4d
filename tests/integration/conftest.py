from collections.abc import AsyncIterator
from datetime import UTC, datetime

import pytest

# Skip all tests in this directory if httpx is not installed.
pytest.importorskip("httpx")

import httpx
from starlette.applications import Starlette

from products_api.app import Services, create_app
from products_api.core.config import BUILTIN_PROFILES
from products_api.features.add_product import AddProductRequest
from products_api.features.get_product_by_id import GetProductByIdRequest
from products_api.infrastructure.data_access import ProductDataModel

FAST = BUILTIN_PROFILES["fast"]
UPDATED = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)


class RecordingCreateService:
    def __init__(self, *, result: bool = True, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.requests: list[AddProductRequest] = []

    async def execute(self, request: AddProductRequest) -> bool:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.result


class RecordingSearchService:
    def __init__(self, *, error: Exception | None = None) -> None:
        self.error = error
        self.requests: list[GetProductByIdRequest] = []

    async def get(self, request: GetProductByIdRequest) -> ProductDataModel:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return ProductDataModel(
            correlation_id=request.correlation_id,
            product_id=request.product_id,
            product_name="keyboard",
            updated_date_time=UPDATED,
        )


@pytest.fixture
def create_service() -> RecordingCreateService:
    return RecordingCreateService()


@pytest.fixture
def search_service() -> RecordingSearchService:
    return RecordingSearchService()


@pytest.fixture
def app(
    create_service: RecordingCreateService, search_service: RecordingSearchService
) -> Starlette:
    return create_app(
        FAST,
        services=Services(create_product=create_service, product_search=search_service),
    )


@pytest.fixture
async def client(app: Starlette) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c
