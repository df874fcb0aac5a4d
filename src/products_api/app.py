"""Starlette application factory."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from importlib.metadata import version

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.schemas import SchemaGenerator

from products_api.core.config import ApiConfig
from products_api.core.filter import ValidationFilter
from products_api.core.registry import ValidatorRegistry, create_default_registry
from products_api.features.add_product import (
    CreateProductService,
    StubCreateProductService,
    add_product,
)
from products_api.features.get_product_by_id import (
    ProductSearchByIdService,
    StubProductSearchByIdService,
    get_product_by_id,
)

logger = logging.getLogger("products_api")

schemas = SchemaGenerator(
    {
        "openapi": "3.0.0",
        "info": {"title": "products-api", "version": version("products-api")},
    }
)


async def openapi_schema(request: Request) -> JSONResponse:
    """OpenAPI document assembled from the YAML blocks of the endpoint docstrings."""
    return JSONResponse(schemas.get_schema(routes=request.app.routes))


@dataclass
class Services:
    """Feature services the endpoints resolve from ``app.state.services``."""

    create_product: CreateProductService = field(default_factory=StubCreateProductService)
    product_search: ProductSearchByIdService = field(
        default_factory=StubProductSearchByIdService
    )

    @classmethod
    def from_config(cls, config: ApiConfig) -> Services:
        return cls(
            create_product=StubCreateProductService(delay=config.service_delay),
            product_search=StubProductSearchByIdService(delay=config.service_delay),
        )


def create_app(
    config: ApiConfig | None = None,
    *,
    registry: ValidatorRegistry | None = None,
    services: Services | None = None,
) -> Starlette:
    """Build the products API.

    Args:
        config: Runtime settings. Defaults to ``ApiConfig()``.
        registry: Validator registry. Uses the default feature rulesets if None.
        services: Feature services. Stubs configured from *config* if None.

    Example::

        from products_api import create_app

        app = create_app()

    """
    _config = config or ApiConfig()

    if registry is None:
        registry = create_default_registry(config=_config)
    elif not registry.frozen:
        registry.freeze()

    app = Starlette(
        routes=[
            Route("/api/products", add_product, methods=["POST"], name="AddProduct"),
            Route("/api/products", get_product_by_id, methods=["GET"], name="GetProductById"),
            Route("/openapi.json", openapi_schema, include_in_schema=False, name="OpenApi"),
        ]
    )
    app.state.config = _config
    app.state.services = services or Services.from_config(_config)
    app.state.validation_filter = ValidationFilter(
        registry, concurrent_rules=_config.concurrent_rules
    )

    logger.debug("Registered rulesets: %s", ", ".join(r.name for r in registry.rulesets))
    return app
