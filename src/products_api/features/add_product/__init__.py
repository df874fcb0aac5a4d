from products_api.features.add_product.dto import AddProductRequest, AddProductRequestDto
from products_api.features.add_product.endpoint import add_product
from products_api.features.add_product.service import CreateProductService, StubCreateProductService

__all__ = [
    "AddProductRequest",
    "AddProductRequestDto",
    "CreateProductService",
    "StubCreateProductService",
    "add_product",
]
