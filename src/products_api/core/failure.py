from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ValidationFailure:
    """A single field-level (or object-level, when ``field`` is empty) failure."""

    field: str
    message: str


@dataclass(frozen=True, slots=True)
class ValidationOutcome:
    """Result of running one ruleset against one instance."""

    failures: tuple[ValidationFailure, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.failures


class ResolutionFault(Exception):
    """Raised when a ruleset cannot be resolved or executed for a value.

    The validation filter never lets this escape; it is degraded to a single
    object-level :class:`ValidationFailure` for the offending argument.
    """

    def __init__(self, type_name: str, cause: BaseException | None = None) -> None:
        self.type_name = type_name
        self.cause = cause
        super().__init__(f"unable to validate {type_name}")

    def to_failure(self) -> ValidationFailure:
        return ValidationFailure(field="", message=str(self))
