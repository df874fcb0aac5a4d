from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from products_api.core.failure import ValidationFailure

PROBLEM_MEDIA_TYPE = "application/problem+json"

_TYPE = "ValidationError"
_TITLE = "invalid request"
_DETAIL = "invalid request, please check the error list for more details"
_STATUS = 400


@dataclass(frozen=True)
class ProblemDetails:
    """Error envelope returned with every ``400`` validation response."""

    type: str = _TYPE
    title: str = _TITLE
    detail: str = _DETAIL
    status: int = _STATUS
    errors: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "title": self.title,
            "detail": self.detail,
            "status": self.status,
            "errors": dict(self.errors),
        }


def to_problem_details(failures: Iterable[ValidationFailure]) -> ProblemDetails:
    """Fold *failures* into a :class:`ProblemDetails`.

    Field names are unique keys only in the resulting ``errors`` map: when
    several failures share a field, the last one wins.
    """
    errors: dict[str, str] = {}
    for failure in failures:
        errors[failure.field] = failure.message
    return ProblemDetails(errors=errors)
