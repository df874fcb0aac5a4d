import asyncio
from typing import Any

from products_api.core.failure import ValidationFailure, ValidationOutcome
from products_api.core.rule import Rule
from products_api.core.ruleset import Ruleset

NULL_INSTANCE = ValidationFailure(field="", message="null instance")


async def validate(
    ruleset: Ruleset,
    instance: Any,
    *,
    concurrent: bool = True,
) -> ValidationOutcome:
    """Run every rule of *ruleset* against *instance*.

    Rules never short-circuit each other: each one is evaluated and every
    triggered rule contributes a failure, in declaration order regardless of
    which async check finished first.

    Args:
        ruleset: Rules to evaluate.
        instance: Object to validate. ``None`` yields a single object-level
                  failure without evaluating any rule.
        concurrent: Await async checks together (``asyncio.gather``) rather
                    than one after another.

    Raises:
        Exception: Whatever a rule's check raises; callers decide how to
            degrade it.

    """
    if instance is None:
        return ValidationOutcome(failures=(NULL_INSTANCE,))

    rules = ruleset.rules
    if concurrent:
        gathered = await asyncio.gather(
            *(rule.passes(instance) for rule in rules), return_exceptions=True
        )
        # Every check has settled; surface the first error in declaration order.
        for item in gathered:
            if isinstance(item, BaseException):
                raise item
        results = [bool(item) for item in gathered]
    else:
        results = [await rule.passes(instance) for rule in rules]

    return ValidationOutcome(
        failures=tuple(
            _failure(rule) for rule, passed in zip(rules, results, strict=True) if not passed
        )
    )


def _failure(rule: Rule) -> ValidationFailure:
    return ValidationFailure(field=rule.property_name, message=rule.message)
