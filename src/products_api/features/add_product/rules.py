import asyncio

from products_api.core.ruleset import Ruleset, RulesetBuilder
from products_api.features.add_product.dto import AddProductRequestDto


def build_ruleset(*, rule_delay: float = 1.0) -> Ruleset:
    """Rules for :class:`AddProductRequestDto`.

    The ``name`` check is asynchronous and sleeps *rule_delay* seconds,
    standing in for a slow external lookup.
    """

    async def has_name(name: str | None) -> bool:
        await asyncio.sleep(rule_delay)
        return bool(name and name.strip())

    return (
        RulesetBuilder(AddProductRequestDto)
        .rule_for("correlation_id")
        .not_null()
        .not_empty()
        .with_message("x-correlation-id is required")
        .rule_for("id")
        .not_null()
        .not_empty()
        .with_message("id is required")
        .rule_for("name")
        .must_async(has_name)
        .with_message("name is required")
        .build()
    )
