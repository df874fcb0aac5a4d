"""Glue between Starlette endpoints and the validation filter."""

from __future__ import annotations

import functools
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from starlette.responses import JSONResponse, Response

from products_api.core.failure import ValidationFailure
from products_api.core.problem import PROBLEM_MEDIA_TYPE, to_problem_details

if TYPE_CHECKING:
    from starlette.requests import Request

    from products_api.core.filter import ValidationFilter
    from products_api.core.problem import ProblemDetails

logger = logging.getLogger("products_api.action")

type Binder = Callable[[Request], Awaitable[dict[str, Any]]]
type Handler = Callable[..., Awaitable[Response]]
type Endpoint = Callable[[Request], Awaitable[Response]]


class BindingError(ValueError):
    """Raised by a binder when a request value cannot be converted."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")

    def to_failure(self) -> ValidationFailure:
        return ValidationFailure(field=self.field, message=self.message)


def problem_response(problem: ProblemDetails) -> JSONResponse:
    return JSONResponse(
        problem.to_dict(),
        status_code=problem.status,
        media_type=PROBLEM_MEDIA_TYPE,
    )


def action(binder: Binder) -> Callable[[Handler], Endpoint]:
    """Turn ``handler(request, **arguments)`` into a validated Starlette endpoint.

    *binder* materialises the handler's arguments from the request.  The bound
    arguments go through the app's :class:`ValidationFilter`; the handler runs
    only when they are all valid.

    Example::

        @action(bind_add_product)
        async def add_product(request: Request, dto: AddProductRequestDto) -> Response:
            ...

    """

    def decorator(handler: Handler) -> Endpoint:
        @functools.wraps(handler)
        async def endpoint(request: Request) -> Response:
            try:
                arguments = await binder(request)
            except BindingError as exc:
                logger.debug("Binding failed for %s %s: %s", request.method, request.url.path, exc)
                return problem_response(to_problem_details([exc.to_failure()]))

            validation_filter: ValidationFilter = request.app.state.validation_filter
            result = await validation_filter.execute(
                arguments, lambda: handler(request, **arguments)
            )
            if result.short_circuited:
                assert result.problem is not None
                return problem_response(result.problem)
            response: Response = result.value
            return response

        return endpoint

    return decorator
