from dataclasses import dataclass
from enum import StrEnum


class Availability(StrEnum):
    AVAILABLE = "Available"
    UNAVAILABLE = "UnAvailable"


@dataclass
class GetProductByIdRequestDto:
    """Bound from the ``X-Correlation-ID`` header and the query string."""

    correlation_id: str | None = None
    product_id: str | None = None
    availability: Availability = Availability.AVAILABLE


@dataclass(frozen=True)
class GetProductByIdRequest:
    correlation_id: str
    product_id: str
