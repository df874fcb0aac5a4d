"""Request validation filter.

Sits between argument binding and the action handler.  Every bound argument is
validated against the ruleset registered for its exact type; any failure
short-circuits the pipeline with a Problem-Details result instead of calling
the handler.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from products_api.core._types import Decision
from products_api.core.engine import validate
from products_api.core.failure import ResolutionFault, ValidationFailure, ValidationOutcome
from products_api.core.problem import to_problem_details

if TYPE_CHECKING:
    from products_api.core._types import Arguments, Continuation
    from products_api.core.problem import ProblemDetails
    from products_api.core.registry import ValidatorRegistry

logger = logging.getLogger("products_api.filter")

NULL_ARGUMENT = ValidationFailure(field="", message="instance is null")


@dataclass(frozen=True)
class FilterResult:
    """Tagged result of :meth:`ValidationFilter.execute`.

    ``value`` holds whatever the continuation returned when the filter let the
    invocation through; ``problem`` and ``failures`` are set when it did not.
    """

    kind: Decision
    value: Any = None
    problem: ProblemDetails | None = None
    failures: tuple[ValidationFailure, ...] = ()

    @classmethod
    def proceed(cls, value: Any) -> FilterResult:
        return cls(kind=Decision.CONTINUE, value=value)

    @classmethod
    def reject(cls, failures: tuple[ValidationFailure, ...]) -> FilterResult:
        return cls(
            kind=Decision.SHORT_CIRCUIT,
            problem=to_problem_details(failures),
            failures=failures,
        )

    @property
    def short_circuited(self) -> bool:
        return self.kind == Decision.SHORT_CIRCUIT


class ValidationFilter:
    """Validates bound action arguments before the handler runs."""

    def __init__(self, registry: ValidatorRegistry, *, concurrent_rules: bool = True) -> None:
        self._registry = registry
        self._concurrent_rules = concurrent_rules

    async def execute(self, arguments: Arguments, call_next: Continuation) -> FilterResult:
        """Validate *arguments*, then either await *call_next* or short-circuit.

        Args:
            arguments: Parameter name to bound value, in binding order.
            call_next: The rest of the pipeline. Awaited exactly once when every
                       argument is valid, never otherwise.

        Returns:
            :class:`FilterResult` carrying the continuation's return value
            unchanged, or the Problem-Details built from all failures.

        """
        if not arguments:
            return FilterResult.proceed(await call_next())

        failures = await self.collect_failures(arguments)
        if failures:
            return FilterResult.reject(failures)

        return FilterResult.proceed(await call_next())

    async def collect_failures(self, arguments: Arguments) -> tuple[ValidationFailure, ...]:
        """Validate every argument and return all failures in binding order."""
        per_argument = await asyncio.gather(*(self._failures_for(v) for v in arguments.values()))
        return tuple(f for failures in per_argument for f in failures)

    async def _failures_for(self, value: Any) -> tuple[ValidationFailure, ...]:
        if value is None:
            return (NULL_ARGUMENT,)

        try:
            outcome = await self.resolve_and_validate(value)
        except ResolutionFault as fault:
            logger.exception("Validation of %s raised", fault.type_name)
            return (fault.to_failure(),)

        return outcome.failures if outcome is not None else ()

    async def resolve_and_validate(self, value: Any) -> ValidationOutcome | None:
        """Run the ruleset registered for ``type(value)``; ``None`` when there is none.

        Raises:
            :class:`ResolutionFault`: The lookup or a rule raised.  The original
                exception is kept as ``cause`` and chained.

        """
        try:
            ruleset = self._registry.get_validator_for(type(value))
            if ruleset is None:
                return None
            return await validate(ruleset, value, concurrent=self._concurrent_rules)
        except Exception as exc:
            raise ResolutionFault(type(value).__name__, exc) from exc
