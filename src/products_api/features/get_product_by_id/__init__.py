from products_api.features.get_product_by_id.dto import (
    Availability,
    GetProductByIdRequest,
    GetProductByIdRequestDto,
)
from products_api.features.get_product_by_id.endpoint import get_product_by_id
from products_api.features.get_product_by_id.service import (
    ProductSearchByIdService,
    StubProductSearchByIdService,
)

__all__ = [
    "Availability",
    "GetProductByIdRequest",
    "GetProductByIdRequestDto",
    "ProductSearchByIdService",
    "StubProductSearchByIdService",
    "get_product_by_id",
]
