from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal


@dataclass
class AddProductRequestDto:
    """Bound from the ``X-Correlation-ID`` header and the JSON body."""

    correlation_id: str | None = None
    id: str | None = None
    name: str | None = None
    price: Decimal | None = None


@dataclass(frozen=True)
class AddProductRequest:
    """What the create-product service is asked to do."""

    correlation_id: str
    id: str
    name: str
    price: Decimal
    created_on: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def from_dto(cls, dto: AddProductRequestDto) -> "AddProductRequest":
        return cls(
            correlation_id=dto.correlation_id or "",
            id=dto.id or "",
            name=dto.name or "",
            price=dto.price if dto.price is not None else Decimal(0),
        )
