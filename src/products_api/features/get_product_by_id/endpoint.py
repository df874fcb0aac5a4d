import logging
from typing import Any

from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from products_api.core.action import BindingError, action
from products_api.features._binding import CORRELATION_HEADER
from products_api.features.get_product_by_id.dto import (
    Availability,
    GetProductByIdRequest,
    GetProductByIdRequestDto,
)

logger = logging.getLogger("products_api.features.get_product_by_id")


def _availability(raw: str | None) -> Availability:
    if raw is None or raw == "":
        return Availability.AVAILABLE
    for member in Availability:
        if member.value.lower() == raw.lower():
            return member
    raise BindingError("Availability", f"The value {raw!r} is not valid.")


async def bind(request: Request) -> dict[str, Any]:
    """Bind ``dto`` from the correlation header and the query string."""
    query = request.query_params
    dto = GetProductByIdRequestDto(
        correlation_id=request.headers.get(CORRELATION_HEADER),
        product_id=query.get("productId"),
        availability=_availability(query.get("availability")),
    )
    return {"dto": dto}


@action(bind)
async def get_product_by_id(request: Request, dto: GetProductByIdRequestDto) -> Response:
    """Look up one product.
    ---
    summary: Get a product by id
    operationId: GetProductById
    parameters:
      - in: header
        name: X-Correlation-ID
        required: true
        schema:
          type: string
      - in: query
        name: productId
        required: true
        schema:
          type: string
      - in: query
        name: availability
        schema:
          type: string
          enum: [Available, UnAvailable]
          default: Available
    responses:
      200:
        description: The product.
      400:
        description: Validation failed (application/problem+json).
      404:
        description: No product with that id.
      500:
        description: The search failed.
    """
    service = request.app.state.services.product_search
    search = GetProductByIdRequest(
        correlation_id=dto.correlation_id or "",
        product_id=dto.product_id or "",
    )
    try:
        product = await service.get(search)
    except Exception:
        logger.warning("%s product search failed", dto.correlation_id, exc_info=True)
        return Response(status_code=500)

    if not product.product_id:
        return Response(status_code=404)
    return JSONResponse(product.to_dict())
