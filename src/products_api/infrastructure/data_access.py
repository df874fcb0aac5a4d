from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True, slots=True)
class ProductDataModel:
    """Product record as returned by the search service."""

    correlation_id: str
    product_id: str
    product_name: str
    updated_date_time: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "correlationId": self.correlation_id,
            "productId": self.product_id,
            "productName": self.product_name,
            "updatedDateTime": self.updated_date_time.isoformat(),
        }
