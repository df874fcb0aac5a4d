import logging
from typing import Any

from starlette.requests import Request
from starlette.responses import Response

from products_api.core.action import action
from products_api.features._binding import (
    CORRELATION_HEADER,
    json_object,
    optional_decimal,
    optional_str,
)
from products_api.features.add_product.dto import AddProductRequest, AddProductRequestDto

logger = logging.getLogger("products_api.features.add_product")


async def bind(request: Request) -> dict[str, Any]:
    """Bind ``dto`` from the correlation header and the JSON body."""
    body = await json_object(request)
    if body is None:
        return {"dto": None}
    dto = AddProductRequestDto(
        correlation_id=request.headers.get(CORRELATION_HEADER),
        id=optional_str(body.get("id")),
        name=optional_str(body.get("name")),
        price=optional_decimal(body.get("price"), field="Price"),
    )
    return {"dto": dto}


@action(bind)
async def add_product(request: Request, dto: AddProductRequestDto) -> Response:
    """Accept a new product for creation.
    ---
    summary: Add a product
    operationId: AddProduct
    parameters:
      - in: header
        name: X-Correlation-ID
        required: true
        schema:
          type: string
    requestBody:
      required: true
      content:
        application/json:
          schema:
            type: object
            properties:
              id:
                type: string
              name:
                type: string
              price:
                type: number
    responses:
      202:
        description: Product accepted.
      400:
        description: Validation failed (application/problem+json).
      500:
        description: The product could not be added.
    """
    service = request.app.state.services.create_product
    add_request = AddProductRequest.from_dto(dto)
    try:
        accepted = await service.execute(add_request)
    except Exception:
        logger.warning("%s adding product failed", dto.correlation_id, exc_info=True)
        return Response(status_code=500)

    if not accepted:
        logger.warning("%s adding product failed", dto.correlation_id)
        return Response(status_code=500)
    return Response(status_code=202)
