"""Helpers shared by the feature binders."""

import json
from decimal import Decimal, InvalidOperation
from typing import Any

from starlette.requests import Request

from products_api.core.action import BindingError

CORRELATION_HEADER = "X-Correlation-ID"


async def json_object(request: Request) -> dict[str, Any] | None:
    """Return the body as a dict with lower-cased keys, or ``None``.

    ``None`` covers an empty body, malformed JSON and any JSON value that is
    not an object.
    """
    raw = await request.body()
    if not raw:
        return None
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    if not isinstance(data, dict):
        return None
    return {str(k).lower(): v for k, v in data.items()}


def optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def optional_decimal(value: Any, *, field: str) -> Decimal | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise BindingError(field, f"{value!r} is not a valid decimal")
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        raise BindingError(field, f"{value!r} is not a valid decimal") from None
    if not number.is_finite():
        raise BindingError(field, f"{value!r} is not a valid decimal")
    return number
