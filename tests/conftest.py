import asyncio
from dataclasses import dataclass

from products_api.core.failure import ValidationFailure, ValidationOutcome
from products_api.core.registry import ValidatorRegistry
from products_api.core.ruleset import Ruleset, RulesetBuilder


@dataclass(frozen=True)
class SampleProduct:
    id: str | None
    name: str | None


async def _has_name(name: str | None) -> bool:
    await asyncio.sleep(0)
    return bool(name and name.strip())


def sample_ruleset() -> Ruleset:
    return (
        RulesetBuilder(SampleProduct)
        .rule_for("id")
        .not_null()
        .not_empty()
        .with_message("id is not null")
        .rule_for("name")
        .must_async(_has_name)
        .with_message("name is required")
        .build()
    )


def make_registry(*rulesets: Ruleset) -> ValidatorRegistry:
    registry = ValidatorRegistry()
    for ruleset in rulesets:
        registry.register(ruleset)
    return registry.freeze()


class Continuation:
    """Records how often the rest of the pipeline was invoked."""

    def __init__(self, result: object = "handler-result") -> None:
        self.result = result
        self.calls = 0

    async def __call__(self) -> object:
        self.calls += 1
        return self.result


def assert_failure(outcome: ValidationOutcome, field: str, message: str) -> ValidationFailure:
    expected = ValidationFailure(field=field, message=message)
    assert expected in outcome.failures, (
        f"Expected {expected}, got: {[(f.field, f.message) for f in outcome.failures] or 'none'}"
    )
    return expected


def assert_valid(outcome: ValidationOutcome) -> None:
    assert outcome.is_valid, (
        f"Expected no failures, got: {[(f.field, f.message) for f in outcome.failures]}"
    )
